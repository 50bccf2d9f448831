import base64
import binascii
from datetime import datetime

from flask import Blueprint, current_app, request, jsonify
from flask_login import login_required, current_user
from ...errors import ValidationFailure
from ...extensions import db
from ...categories import CATEGORIES
from ...models import Transaction, TRANSACTION_TYPES
from ...services.analyzer import AudioAnalyzer
from ...validation import number_value, request_data, text_value

transactions_bp = Blueprint("transactions", __name__, url_prefix="/transactions")


def parse_transaction_fields(data):
    """Validate the editable fields of a transaction form."""
    amount = number_value(data.get("amount"))
    if amount <= 0:
        raise ValidationFailure("Amount must be greater than zero")

    kind = data.get("type")
    if kind not in TRANSACTION_TYPES:
        raise ValidationFailure("Type must be income or expense")

    category = text_value(data, "category")
    description = text_value(data, "description")
    if not category or not description:
        raise ValidationFailure("Category and description are required")
    return {"amount": amount, "type": kind, "category": category, "description": description}


def _owned(transaction_id):
    return Transaction.query.filter_by(id=transaction_id, user_id=current_user.id).first_or_404()


@transactions_bp.route("/", methods=["GET"])
@login_required
def list_transactions():
    query = Transaction.query.filter_by(user_id=current_user.id)
    kind = request.args.get("type", "all")
    if kind in TRANSACTION_TYPES:
        query = query.filter_by(type=kind)
    category = request.args.get("category", "all")
    if category != "all":
        query = query.filter_by(category=category)
    rows = query.order_by(Transaction.created_at.desc(), Transaction.id.desc()).all()
    return jsonify({"transactions": [t.to_dict() for t in rows], "categories": CATEGORIES})


@transactions_bp.route("/", methods=["POST"])
@login_required
def create_transaction():
    data = request_data()
    tx = Transaction(user_id=current_user.id, **parse_transaction_fields(data))
    db.session.add(tx)
    db.session.commit()
    return jsonify({"ok": True, "transaction": tx.to_dict()}), 201


@transactions_bp.route("/analyze", methods=["POST"])
@login_required
def analyze_recording():
    audio = None
    upload = request.files.get("audio")
    if upload is not None:
        audio = upload.read()
        transcript = text_value(request.form, "transcript")
    else:
        data = request_data()
        transcript = text_value(data, "transcript")
        if data.get("audioData"):
            try:
                audio = base64.b64decode(data["audioData"], validate=True)
            except (binascii.Error, TypeError, ValueError):
                raise ValidationFailure("audioData must be base64 encoded")

    config = current_app.config
    analyzer = AudioAnalyzer(config["FUNCTIONS_BASE_URL"], config["FUNCTIONS_TIMEOUT"], token=config["FUNCTIONS_TOKEN"])
    result = analyzer.analyze(current_user.id, audio=audio, transcript=transcript or None)
    return jsonify({"ok": True, "analysis": result.to_dict()})


@transactions_bp.route("/voice", methods=["POST"])
@login_required
def save_voice_transaction():
    data = request_data()
    fields = parse_transaction_fields(data)
    tx = Transaction(user_id=current_user.id, audio_transcript=text_value(data, "transcript") or None, **fields)
    db.session.add(tx)
    db.session.commit()
    return jsonify({"ok": True, "transaction": tx.to_dict()}), 201


@transactions_bp.route("/<int:transaction_id>", methods=["PUT"])
@login_required
def edit_transaction(transaction_id):
    tx = _owned(transaction_id)
    data = request_data()
    for key, value in parse_transaction_fields(data).items():
        setattr(tx, key, value)
    tx.updated_at = datetime.utcnow()
    db.session.commit()
    return jsonify({"ok": True, "transaction": tx.to_dict()})


@transactions_bp.route("/<int:transaction_id>", methods=["DELETE"])
@login_required
def delete_transaction(transaction_id):
    tx = _owned(transaction_id)
    db.session.delete(tx)
    db.session.commit()
    return jsonify({"ok": True, "message": "Transaction deleted"})
