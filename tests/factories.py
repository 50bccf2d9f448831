from datetime import datetime

from moneytalk.models import BudgetLimit, Transaction


def make_tx(amount, category, created_at, type="expense", description="", user_id=1):
    return Transaction(
        user_id=user_id,
        amount=amount,
        type=type,
        category=category,
        description=description or category,
        created_at=created_at,
        updated_at=created_at,
    )


def make_limit(category, monthly_limit, user_id=1):
    return BudgetLimit(user_id=user_id, category=category, monthly_limit=monthly_limit)


# Wednesday. Last week is Sun 4 Oct - Sat 10 Oct, the comparison week is Sun 6 Sep - Sat 12 Sep.
NOW = datetime(2026, 10, 14, 12, 0)
