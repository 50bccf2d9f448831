from flask import Blueprint, current_app, request, jsonify
from flask_login import login_required, current_user
from ...errors import ValidationFailure
from ...extensions import db
from ...models import StripeCustomer, StripeSubscription, UserProfile
from ...services.ai_proxy import validate_api_key
from ...validation import request_data, text_value

profile_bp = Blueprint("profile", __name__, url_prefix="/profile")

STATUS_LABELS = {
    "active": "MoneyTalk Pro",
    "trialing": "Trial Active",
    "past_due": "Payment Due",
    "canceled": "Canceled",
}


def _profile():
    profile = current_user.profile
    if profile is None:
        profile = UserProfile(user_id=current_user.id, full_name=current_user.email)
        db.session.add(profile)
        db.session.flush()
    return profile


@profile_bp.route("/")
@login_required
def show():
    return jsonify({"profile": _profile().to_dict()})


@profile_bp.route("/", methods=["PUT"])
@login_required
def update():
    data = request_data()
    profile = _profile()
    if "full_name" in data:
        name = text_value(data, "full_name")
        if not name:
            raise ValidationFailure("Full name is required")
        profile.full_name = name
    if "country" in data:
        profile.country = text_value(data, "country") or None
    currency = text_value(data, "currency").upper()
    if currency:
        if len(currency) != 3:
            raise ValidationFailure("Currency must be a three letter code")
        profile.currency = currency
    symbol = text_value(data, "currency_symbol")
    if symbol:
        profile.currency_symbol = symbol
    profile.setup_completed = True
    db.session.commit()
    return jsonify({"ok": True, "profile": profile.to_dict()})


@profile_bp.route("/api-key", methods=["PUT"])
@login_required
def set_api_key():
    data = request_data()
    api_key = text_value(data, "api_key")
    if not api_key:
        raise ValidationFailure("API key is required")
    if not validate_api_key(api_key):
        raise ValidationFailure("Invalid OpenAI API key. Please check your key and try again.")
    profile = _profile()
    profile.openai_api_key = api_key
    db.session.commit()
    return jsonify({"ok": True, "message": "API key saved", "profile": profile.to_dict()})


@profile_bp.route("/subscription")
@login_required
def subscription():
    customer = StripeCustomer.query.filter_by(user_id=current_user.id, deleted_at=None).first()
    sub = None
    if customer is not None:
        sub = StripeSubscription.query.filter_by(customer_id=customer.customer_id, deleted_at=None).first()

    product = current_app.config["PRO_PRODUCT"]
    if sub is None or sub.status == "not_started":
        return jsonify({
            "status": "not_started",
            "label": "Free",
            "is_pro": False,
            "product": product,
        })
    return jsonify({
        "status": sub.status,
        "label": STATUS_LABELS.get(sub.status, sub.status),
        "price_id": sub.price_id,
        "current_period_end": sub.current_period_end,
        "cancel_at_period_end": bool(sub.cancel_at_period_end),
        "is_pro": sub.status == "active",
        "product": product,
    })
