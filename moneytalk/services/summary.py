"""Plain-text context sent along with a recommendation request."""
from collections import defaultdict
from datetime import datetime
from typing import Optional


def _previous_month(year: int, month: int):
    return (year - 1, 12) if month == 1 else (year, month - 1)


def _in_month(t, year: int, month: int) -> bool:
    return t.created_at.year == year and t.created_at.month == month


def _total(rows, kind: str) -> float:
    return sum(t.amount for t in rows if t.type == kind)


def _pct_change(current: float, previous: float) -> str:
    if previous > 0:
        return f"{(current - previous) / previous * 100:.1f}"
    return "N/A"


def budget_status(utilization: float) -> str:
    if utilization > 100:
        return "over"
    if utilization > 80:
        return "warning"
    return "good"


def prepare_transaction_summary(transactions, budget_limits, now: Optional[datetime] = None) -> str:
    now = now or datetime.utcnow()
    transactions = list(transactions)
    prev_year, prev_month = _previous_month(now.year, now.month)

    current = [t for t in transactions if _in_month(t, now.year, now.month)]
    previous = [t for t in transactions if _in_month(t, prev_year, prev_month)]

    current_income = _total(current, "income")
    current_expenses = _total(current, "expense")
    prev_income = _total(previous, "income")
    prev_expenses = _total(previous, "expense")
    savings_rate = (
        f"{(current_income - current_expenses) / current_income * 100:.1f}" if current_income > 0 else "0"
    )

    by_category = defaultdict(float)
    for t in current:
        if t.type == "expense":
            by_category[t.category] += t.amount
    category_lines = [
        f"- {category}: ${amount:.2f}"
        for category, amount in sorted(by_category.items(), key=lambda kv: kv[1], reverse=True)
    ]

    budget_lines = []
    for limit in budget_limits:
        spent = by_category.get(limit.category, 0.0)
        utilization = spent / limit.monthly_limit * 100
        budget_lines.append(
            f"- {limit.category}: ${spent:.2f}/${limit.monthly_limit:.2f} "
            f"({round(utilization)}% used) - {budget_status(utilization).upper()}"
        )

    average = sum(t.amount for t in transactions) / len(transactions) if transactions else 0.0

    return "\n".join([
        f"CURRENT MONTH ({now:%B %Y}):",
        f"- Income: ${current_income:.2f}",
        f"- Expenses: ${current_expenses:.2f}",
        f"- Net: ${current_income - current_expenses:.2f}",
        f"- Savings Rate: {savings_rate}%",
        "",
        "PREVIOUS MONTH COMPARISON:",
        f"- Income Change: {_pct_change(current_income, prev_income)}%",
        f"- Expense Change: {_pct_change(current_expenses, prev_expenses)}%",
        "",
        "SPENDING BY CATEGORY:",
        *category_lines,
        "",
        "BUDGET PERFORMANCE:",
        *budget_lines,
        "",
        f"TRANSACTION COUNT: {len(transactions)} total transactions",
        f"AVERAGE TRANSACTION: ${average:.2f}",
    ])


ECONOMIC_CONTEXT = """CURRENT ECONOMIC ENVIRONMENT ({year}):

INFLATION & INTEREST RATES:
- Federal Reserve continues to monitor inflation trends
- Interest rates remain elevated compared to 2020-2021 lows
- Impact: Higher borrowing costs, better savings account yields

EMPLOYMENT MARKET:
- Labor market remains relatively strong
- Wage growth continues but at moderated pace
- Impact: Job security generally good, but wage increases may not keep pace with inflation

CONSUMER SPENDING TRENDS:
- Shift toward experiences over goods continues
- Increased focus on value and essential purchases
- Impact: Discretionary spending under pressure

FINANCIAL RECOMMENDATIONS CONTEXT:
- Emergency funds more critical due to economic uncertainty
- High-yield savings accounts offering better returns
- Credit card debt more expensive due to higher rates
- Real estate market showing signs of cooling
- Stock market volatility requires diversified approach

KEY CONSIDERATIONS:
- Build emergency fund (3-6 months expenses)
- Pay down high-interest debt aggressively
- Take advantage of higher savings rates
- Review and optimize recurring subscriptions
- Consider inflation impact on fixed expenses
"""


def economic_context(now: Optional[datetime] = None) -> str:
    # TODO: pull live figures from the FRED API instead of this fixed text
    now = now or datetime.utcnow()
    return ECONOMIC_CONTEXT.format(year=now.year)
