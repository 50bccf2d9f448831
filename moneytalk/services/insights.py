"""Spending insights computed from a user's transactions and budget limits.

Everything here is recomputed from scratch on each call. The only input that
is not passed in explicitly is the wall clock, and every function accepts a
``now`` override so results are reproducible.
"""
from collections import defaultdict
from datetime import datetime, timedelta
from typing import Dict, Iterable, List, Optional

TREND_THRESHOLD_PCT = 5.0
TOP_TRENDS = 5
WEEKEND_SHARE_ALERT_PCT = 35.0
TYPICAL_WEEKEND_SHARE_PCT = 28.0
COMPARISON_NOTABLE_PCT = 10.0


def start_of_week(moment: datetime) -> datetime:
    """Midnight on the Sunday that opens the week containing ``moment``."""
    days_since_sunday = (moment.weekday() + 1) % 7
    day = moment - timedelta(days=days_since_sunday)
    return day.replace(hour=0, minute=0, second=0, microsecond=0)


def end_of_week(moment: datetime) -> datetime:
    return start_of_week(moment) + timedelta(days=7) - timedelta(microseconds=1)


def week_window(moment: datetime):
    return start_of_week(moment), end_of_week(moment)


def _expenses(transactions):
    return [t for t in transactions if t.type == "expense"]


def _category_totals(transactions) -> Dict[str, float]:
    totals: Dict[str, float] = defaultdict(float)
    for t in transactions:
        totals[t.category] += t.amount
    return dict(totals)


def _within(t, start: datetime, end: datetime) -> bool:
    return start <= t.created_at <= end


def current_month_spending(transactions, now: Optional[datetime] = None) -> Dict[str, float]:
    now = now or datetime.utcnow()
    month_rows = [
        t for t in _expenses(transactions)
        if t.created_at.year == now.year and t.created_at.month == now.month
    ]
    return _category_totals(month_rows)


def compute_spending_trends(transactions, now: Optional[datetime] = None) -> List[dict]:
    """Compare last week's category spend with the same week a month earlier.

    "Last week" is the Sunday-based calendar week containing ``now - 1 week``
    and the comparison week is the one containing ``now - 5 weeks``. Only
    categories with spending last week are reported, largest first, top five.
    """
    now = now or datetime.utcnow()
    last_start, last_end = week_window(now - timedelta(weeks=1))
    prior_start, prior_end = week_window(now - timedelta(weeks=5))

    expenses = _expenses(transactions)
    last_week = _category_totals(t for t in expenses if _within(t, last_start, last_end))
    prior_week = _category_totals(t for t in expenses if _within(t, prior_start, prior_end))

    trends = []
    for category in set(last_week) | set(prior_week):
        amount = last_week.get(category, 0.0)
        prior = prior_week.get(category, 0.0)
        trend = "stable"
        change = 0.0
        if prior > 0:
            change = (amount - prior) / prior * 100
            if change > TREND_THRESHOLD_PCT:
                trend = "increasing"
            elif change < -TREND_THRESHOLD_PCT:
                trend = "decreasing"
        elif amount > 0:
            trend = "increasing"
            change = 100.0
        trends.append({
            "category": category,
            "amount": amount,
            "last_month_amount": prior,
            "trend": trend,
            "percentage": abs(change),
            "is_new": prior == 0 and amount > 0,
        })

    trends = [t for t in trends if t["amount"] > 0]
    # category name breaks ties so the output does not depend on set ordering
    trends.sort(key=lambda t: (-t["amount"], t["category"]))
    return trends[:TOP_TRENDS]


def compute_budget_alerts(transactions, budget_limits, now: Optional[datetime] = None) -> List[dict]:
    spending = current_month_spending(transactions, now)
    alerts = []
    for limit in budget_limits:
        spent = spending.get(limit.category, 0.0)
        if spent > limit.monthly_limit:
            alerts.append({
                "category": limit.category,
                "spent": spent,
                "budget": limit.monthly_limit,
                "over_budget": spent - limit.monthly_limit,
            })
    return alerts


def weekend_spending_pattern(transactions) -> Optional[dict]:
    weekend = weekday = 0.0
    for t in _expenses(transactions):
        if t.created_at.weekday() >= 5:
            weekend += t.amount
        else:
            weekday += t.amount

    if weekend <= 0 or weekday <= 0:
        return None
    share = weekend / (weekend + weekday) * 100
    if share <= WEEKEND_SHARE_ALERT_PCT:
        return None
    return {
        "type": "weekend_spending",
        "title": "High Weekend Spending Pattern",
        "share": share,
        "description": (
            f"{share:.1f}% of your spending occurs on weekends, which is above "
            f"the typical {TYPICAL_WEEKEND_SHARE_PCT:.0f}% average."
        ),
        "insight": "Consider planning weekend activities that align with your budget to reduce impulse spending.",
    }


def historical_comparison_pattern(trends: List[dict], now: Optional[datetime] = None) -> Optional[dict]:
    if not trends:
        return None
    total_last = sum(t["amount"] for t in trends)
    total_prior = sum(t["last_month_amount"] for t in trends)
    if total_prior <= 0:
        return None

    now = now or datetime.utcnow()
    prior_start, prior_end = week_window(now - timedelta(weeks=5))
    change = (total_last - total_prior) / total_prior * 100
    direction = "higher" if change > 0 else "lower"
    if change > COMPARISON_NOTABLE_PCT:
        insight = "Consider reviewing what drove the increase in spending last week."
    elif change < -COMPARISON_NOTABLE_PCT:
        insight = "Great job reducing your spending compared to last month!"
    else:
        insight = "Your spending patterns are relatively consistent week-to-week."
    return {
        "type": "historical_comparison",
        "title": "Weekly Spending Comparison",
        "change": change,
        "description": (
            f"Last week's spending was {abs(change):.1f}% {direction} than the same week last month "
            f"({prior_start:%b %d} - {prior_end:%b %d})."
        ),
        "insight": insight,
    }


def generate_basic_insights(transactions: Iterable, budget_limits: Iterable = (), now: Optional[datetime] = None) -> dict:
    """Trends, budget alerts and spending patterns for the insights panel.

    AI recommendations are produced separately, so ``recommendations`` is
    always empty here.
    """
    transactions = list(transactions)
    budget_limits = list(budget_limits)
    if not transactions:
        return {"spending_trends": [], "recommendations": [], "budget_alerts": [], "patterns": []}

    now = now or datetime.utcnow()
    trends = compute_spending_trends(transactions, now)
    patterns = [
        p for p in (
            weekend_spending_pattern(transactions),
            historical_comparison_pattern(trends, now),
        )
        if p
    ]
    return {
        "spending_trends": trends,
        "recommendations": [],
        "budget_alerts": compute_budget_alerts(transactions, budget_limits, now),
        "patterns": patterns,
    }
