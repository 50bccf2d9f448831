import logging
from datetime import datetime

from flask import Blueprint, jsonify
from flask_login import login_required, current_user
from sqlalchemy import func
from ...extensions import db
from ...models import Transaction
from ...services.demo_data import clear_transactions, seed_demo_data

logger = logging.getLogger(__name__)

dashboard_bp = Blueprint("dashboard", __name__, url_prefix="/dashboard")


@dashboard_bp.route("/")
@login_required
def index():
    now = datetime.utcnow()
    month_start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    # Monthly totals
    totals = dict(
        db.session.query(Transaction.type, func.coalesce(func.sum(Transaction.amount), 0.0))
        .filter(Transaction.user_id == current_user.id, Transaction.created_at >= month_start)
        .group_by(Transaction.type)
        .all()
    )
    total_income = float(totals.get("income", 0.0))
    total_expense = float(totals.get("expense", 0.0))
    count = Transaction.query.filter_by(user_id=current_user.id).count()
    profile = current_user.profile

    return jsonify({
        "month": now.strftime("%Y-%m"),
        "total_income": total_income,
        "total_expense": total_expense,
        "balance": total_income - total_expense,
        "transaction_count": count,
        "has_openai_key": bool(profile and profile.openai_api_key),
        "offer_demo_data": count == 0,
    })


@dashboard_bp.route("/seed", methods=["POST"])
@login_required
def seed_demo():
    """Seed sample transactions for a user who has none yet."""
    if Transaction.query.filter_by(user_id=current_user.id).first():
        return jsonify({"ok": False, "message": "Demo data is only available for an empty account"}), 409
    created = seed_demo_data(current_user.id)
    logger.info("Seeded %d demo transactions for user %s", created, current_user.id)
    return jsonify({"ok": True, "message": "Demo data seeded", "created": created}), 201


@dashboard_bp.route("/reset-demo", methods=["POST"])
@login_required
def reset_demo():
    deleted = clear_transactions(current_user.id)
    created = seed_demo_data(current_user.id)
    return jsonify({"ok": True, "message": "Demo data refreshed", "deleted": deleted, "created": created})


@dashboard_bp.route("/clear", methods=["POST"])
@login_required
def clear():
    deleted = clear_transactions(current_user.id)
    logger.info("Deleted %d transactions for user %s", deleted, current_user.id)
    return jsonify({"ok": True, "message": "All transactions deleted", "deleted": deleted})
