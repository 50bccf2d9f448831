from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...categories import PRESET_BUDGET_CATEGORIES
from ...errors import ValidationFailure
from ...models import BudgetLimit
from ...services.budgets import replace_budget_limits

budgets_bp = Blueprint("budgets", __name__, url_prefix="/budgets")


@budgets_bp.route("/", methods=["GET"])
@login_required
def list_limits():
    limits = BudgetLimit.query.filter_by(user_id=current_user.id).order_by(BudgetLimit.category).all()
    return jsonify({"limits": [b.to_dict() for b in limits], "presets": PRESET_BUDGET_CATEGORIES})


@budgets_bp.route("/", methods=["PUT"])
@login_required
def save_limits():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationFailure("Expected a JSON body with a limits list")
    limits = replace_budget_limits(current_user.id, data.get("limits", []))
    return jsonify({
        "ok": True,
        "message": "Budget limits saved successfully!",
        "limits": [b.to_dict() for b in limits],
    })
