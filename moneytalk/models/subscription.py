from ..extensions import db


# Populated by the payments webhook; the app only reads these tables.
class StripeCustomer(db.Model):
    __tablename__ = "stripe_customers"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    customer_id = db.Column(db.String(64), unique=True, nullable=False)
    deleted_at = db.Column(db.DateTime)


class StripeSubscription(db.Model):
    __tablename__ = "stripe_subscriptions"
    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.String(64), db.ForeignKey("stripe_customers.customer_id"), unique=True, nullable=False)
    subscription_id = db.Column(db.String(64))
    price_id = db.Column(db.String(64))
    status = db.Column(db.String(32), nullable=False, default="not_started")
    current_period_start = db.Column(db.BigInteger)
    current_period_end = db.Column(db.BigInteger)
    cancel_at_period_end = db.Column(db.Boolean, default=False)
    deleted_at = db.Column(db.DateTime)
