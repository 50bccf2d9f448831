"""Coercion helpers for submitted JSON and form values."""
import math

from flask import request

from .errors import ValidationFailure


def text_value(data, key) -> str:
    """Stripped string value of ``key``; missing or null gives ``""``."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationFailure(f"{key} must be text")
    return value.strip()


def number_value(value, message="Invalid amount") -> float:
    # float() accepts "nan" and "inf", which can't be stored or serialized
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationFailure(message)
    if not math.isfinite(number):
        raise ValidationFailure(message)
    return number


def request_data():
    """The JSON object body, or the form when the request has no JSON."""
    data = request.get_json(silent=True)
    if data is None:
        return request.form
    if not isinstance(data, dict):
        raise ValidationFailure("Expected a JSON object")
    return data
