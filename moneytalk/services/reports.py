"""Income/expense totals for the current week or month."""
import calendar
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Optional

from .insights import end_of_week, start_of_week

VIEWS = ("weekly", "monthly")


def period_bounds(view: str, now: datetime):
    if view == "weekly":
        return start_of_week(now), end_of_week(now)
    first = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    last_day = calendar.monthrange(now.year, now.month)[1]
    last = first.replace(day=last_day) + timedelta(days=1) - timedelta(microseconds=1)
    return first, last


def _sum(rows, kind):
    return sum(t.amount for t in rows if t.type == kind)


def build_report(transactions, view: str = "monthly", now: Optional[datetime] = None) -> dict:
    now = now or datetime.utcnow()
    if view not in VIEWS:
        view = "monthly"
    start, end = period_bounds(view, now)
    rows = [t for t in transactions if start <= t.created_at <= end]

    total_income = _sum(rows, "income")
    total_expenses = _sum(rows, "expense")

    breakdown = defaultdict(float)
    for t in rows:
        if t.type == "expense":
            breakdown[t.category] += t.amount
    categories = [
        {"category": name, "amount": amount}
        for name, amount in sorted(breakdown.items(), key=lambda kv: kv[1], reverse=True)
    ]

    labels, income, expenses = [], [], []
    if view == "weekly":
        for offset in range(7):
            day = (start + timedelta(days=offset)).date()
            day_rows = [t for t in rows if t.created_at.date() == day]
            labels.append(day.strftime("%a"))
            income.append(_sum(day_rows, "income"))
            expenses.append(_sum(day_rows, "expense"))
    else:
        week_start = start_of_week(start)
        index = 1
        while week_start <= end:
            week_end = week_start + timedelta(days=7) - timedelta(microseconds=1)
            week_rows = [t for t in rows if week_start <= t.created_at <= week_end]
            labels.append(f"Week {index}")
            income.append(_sum(week_rows, "income"))
            expenses.append(_sum(week_rows, "expense"))
            week_start += timedelta(days=7)
            index += 1

    return {
        "view": view,
        "start": start.isoformat(),
        "end": end.isoformat(),
        "summary": {
            "total_income": total_income,
            "total_expenses": total_expenses,
            "net_income": total_income - total_expenses,
            "transaction_count": len(rows),
        },
        "categories": categories,
        "series": {"labels": labels, "income": income, "expenses": expenses},
    }
