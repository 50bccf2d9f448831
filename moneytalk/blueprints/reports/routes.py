from flask import Blueprint, request, jsonify
from flask_login import login_required, current_user
from ...models import Transaction
from ...services.reports import build_report

reports_bp = Blueprint("reports", __name__, url_prefix="/reports")


@reports_bp.route("/")
@login_required
def index():
    view = request.args.get("view", "monthly")
    transactions = Transaction.query.filter_by(user_id=current_user.id).all()
    return jsonify(build_report(transactions, view))
