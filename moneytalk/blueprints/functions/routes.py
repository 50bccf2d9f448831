"""The AI endpoints. Callers authenticate with ``Authorization: Bearer
<FUNCTIONS_TOKEN>``, identify the user with ``userId`` in the body and get
back either the result or ``{"error": ...}`` with a 500."""
import hmac
import logging

from flask import Blueprint, current_app, request, jsonify
from ...errors import MoneyTalkError
from ...services import ai_proxy

logger = logging.getLogger(__name__)

functions_bp = Blueprint("functions", __name__, url_prefix="/functions/v1")


def _error(message, status=500):
    return jsonify({"error": message}), status


def _payload():
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@functions_bp.before_request
def require_token():
    expected = current_app.config.get("FUNCTIONS_TOKEN")
    if not expected:
        logger.error("FUNCTIONS_TOKEN is not set, refusing AI endpoint call")
        return _error("Unauthorized", 401)
    supplied = request.headers.get("Authorization", "")
    if not hmac.compare_digest(supplied.encode(), f"Bearer {expected}".encode()):
        return _error("Unauthorized", 401)


@functions_bp.route("/analyze-audio", methods=["POST"])
def analyze_audio():
    data = _payload()
    if not data.get("userId"):
        return _error("User ID is required")
    try:
        result = ai_proxy.analyze_audio(data["userId"], data.get("audioData"), data.get("transcript"))
    except MoneyTalkError as e:
        logger.error("Error analyzing audio: %s", e.message)
        return _error(e.message)
    return jsonify(result)


@functions_bp.route("/ai-insights", methods=["POST"])
def ai_insights():
    data = _payload()
    if not data.get("userId"):
        return _error("User ID is required")
    try:
        recommendations = ai_proxy.generate_recommendations(
            data["userId"], data.get("transactionSummary", ""), data.get("economicContext", "")
        )
    except MoneyTalkError as e:
        logger.error("Error generating AI insights: %s", e.message)
        return _error(e.message)
    return jsonify({"recommendations": recommendations})
