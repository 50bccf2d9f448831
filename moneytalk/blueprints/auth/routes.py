import logging

from flask import Blueprint, request, jsonify
from flask_login import login_user, logout_user, login_required, current_user
from ...extensions import db
from ...models import User, UserProfile
from ...validation import request_data, text_value

logger = logging.getLogger(__name__)

auth_bp = Blueprint("auth", __name__, url_prefix="/auth")


def _user_payload(user):
    return {"id": user.id, "email": user.email, "profile": user.profile.to_dict() if user.profile else None}


def _password(data):
    password = data.get("password")
    return password if isinstance(password, str) else ""


@auth_bp.route("/register", methods=["POST"])
def register():
    data = request_data()
    full_name = text_value(data, "full_name")
    email = text_value(data, "email").lower()
    password = _password(data)
    if not all([full_name, email, password]):
        return jsonify({"ok": False, "message": "All fields are required"}), 400
    if User.query.filter_by(email=email).first():
        return jsonify({"ok": False, "message": "Email already registered"}), 409

    user = User(email=email)
    user.set_password(password)
    user.profile = UserProfile(full_name=full_name)
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s", user.id)
    return jsonify({"ok": True, "message": "Registration successful. Please log in.", "user": _user_payload(user)}), 201


@auth_bp.route("/login", methods=["POST"])
def login():
    data = request_data()
    email = text_value(data, "email").lower()
    password = _password(data)
    user = User.query.filter_by(email=email).first()
    if user and user.check_password(password):
        login_user(user)
        return jsonify({"ok": True, "message": "Logged in successfully", "user": _user_payload(user)})
    return jsonify({"ok": False, "message": "Invalid credentials"}), 401


@auth_bp.route("/logout", methods=["POST"])
@login_required
def logout():
    logout_user()
    return jsonify({"ok": True, "message": "Logged out"})


@auth_bp.route("/me")
@login_required
def me():
    return jsonify({"ok": True, "user": _user_payload(current_user)})
