from flask import Blueprint, current_app, jsonify
from flask_login import login_required, current_user
from ...models import BudgetLimit, Transaction
from ...services.insights import generate_basic_insights
from ...services.recommendations import cache_for_user

insights_bp = Blueprint("insights", __name__, url_prefix="/insights")


def _user_data():
    transactions = Transaction.query.filter_by(user_id=current_user.id).order_by(Transaction.created_at.desc()).all()
    limits = BudgetLimit.query.filter_by(user_id=current_user.id).all()
    return transactions, limits


def _payload(transactions, limits, cache):
    insights = generate_basic_insights(transactions, limits)
    insights["recommendations"] = cache.recommendations
    return {
        "ok": not cache.error,
        "has_transactions": bool(transactions),
        "insights": insights,
        "cache": cache.status(),
    }


@insights_bp.route("/")
@login_required
def index():
    transactions, limits = _user_data()
    cache = cache_for_user(current_app, current_user.id)
    return jsonify(_payload(transactions, limits, cache))


@insights_bp.route("/recommendations", methods=["POST"])
@login_required
def generate():
    transactions, limits = _user_data()
    cache = cache_for_user(current_app, current_user.id)
    cache.generate(current_user.id, transactions, limits)
    return jsonify(_payload(transactions, limits, cache))


@insights_bp.route("/recommendations/refresh", methods=["POST"])
@login_required
def refresh():
    transactions, limits = _user_data()
    cache = cache_for_user(current_app, current_user.id)
    cache.manual_refresh(current_user.id, transactions, limits)
    return jsonify(_payload(transactions, limits, cache))
