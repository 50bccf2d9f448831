"""Error types surfaced to users.

Only three outcomes exist for an action: it worked, the input was invalid,
or a network/API call failed. Each failure carries the text shown to the user.
"""
import logging

from flask import jsonify

logger = logging.getLogger(__name__)


class MoneyTalkError(Exception):
    status_code = 400

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationFailure(MoneyTalkError):
    status_code = 400


class APIFailure(MoneyTalkError):
    status_code = 502


class NotConfigured(MoneyTalkError):
    status_code = 400


def register_error_handlers(app):
    @app.errorhandler(MoneyTalkError)
    def handle_moneytalk_error(err):
        if isinstance(err, APIFailure):
            logger.error("API failure: %s", err.message)
        return jsonify({"ok": False, "message": err.message}), err.status_code

    @app.errorhandler(404)
    def handle_not_found(err):
        return jsonify({"ok": False, "message": "Not found"}), 404
