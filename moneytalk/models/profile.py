from datetime import datetime
from ..extensions import db


class UserProfile(db.Model):
    __tablename__ = "user_profiles"
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), unique=True, nullable=False)
    full_name = db.Column(db.String(120), nullable=False)
    openai_api_key = db.Column(db.String(255))
    country = db.Column(db.String(100))
    currency = db.Column(db.String(3), default="USD", nullable=False)
    currency_symbol = db.Column(db.String(8), default="$", nullable=False)
    setup_completed = db.Column(db.Boolean, default=False, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_dict(self):
        return {
            "full_name": self.full_name,
            "country": self.country,
            "currency": self.currency,
            "currency_symbol": self.currency_symbol,
            "setup_completed": self.setup_completed,
            "has_openai_key": bool(self.openai_api_key),
        }
