import logging

from ..errors import ValidationFailure
from ..extensions import db
from ..models import BudgetLimit
from ..validation import number_value, text_value

logger = logging.getLogger(__name__)

INVALID_LIMIT = "Please enter a valid category and limit amount"


def parse_budget_limits(rows):
    """Validate submitted ``[{category, monthly_limit}]`` rows."""
    if not isinstance(rows, list):
        raise ValidationFailure("limits must be a list")

    parsed = []
    seen = set()
    for row in rows:
        if not isinstance(row, dict):
            raise ValidationFailure(INVALID_LIMIT)
        category = text_value(row, "category")
        limit = number_value(row.get("monthly_limit"), INVALID_LIMIT)
        if not category or limit <= 0:
            raise ValidationFailure(INVALID_LIMIT)
        if category.lower() in seen:
            raise ValidationFailure(f"Budget limit for {category} already exists")
        seen.add(category.lower())
        parsed.append((category, limit))
    return parsed


def replace_budget_limits(user_id, rows):
    """Delete every limit the user has, then insert the submitted set."""
    parsed = parse_budget_limits(rows)
    try:
        BudgetLimit.query.filter_by(user_id=user_id).delete()
        for category, limit in parsed:
            db.session.add(BudgetLimit(user_id=user_id, category=category, monthly_limit=limit))
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception("Error saving budget limits")
        raise
    return BudgetLimit.query.filter_by(user_id=user_id).order_by(BudgetLimit.category).all()
