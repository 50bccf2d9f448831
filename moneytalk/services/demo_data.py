"""Sample transactions so new users have something to look at."""
import random
from datetime import datetime, timedelta
from typing import Optional

from ..extensions import db
from ..models import Transaction

EXPENSE_AMOUNTS = {
    "Groceries": [45, 67, 89, 123, 156, 78, 92],
    "Food": [25, 35, 18, 42, 28, 55, 33],
    "Transport": [15, 45, 60, 25, 35, 50, 40],
    "Shopping": [85, 120, 200, 75, 95, 150, 180],
    "Bills": [120, 85, 200, 150, 95, 110, 175],
    "Drinks": [12, 8, 15, 22, 18, 25, 14],
    "Travel": [250, 180, 320, 150, 280, 200],
    "Education": [45, 89, 125, 67, 95],
    "Family": [75, 120, 95, 150, 85],
}

# Bills income covers refunds
INCOME_AMOUNTS = {
    "Salary": [2500, 2500, 2500],
    "Bills": [150, 200, 100],
}

DESCRIPTIONS = {
    "Groceries": ["Weekly grocery shopping", "Supermarket run", "Fresh produce", "Household essentials", "Organic groceries"],
    "Food": ["Lunch at cafe", "Dinner with friends", "Coffee and pastry", "Pizza delivery", "Restaurant meal"],
    "Transport": ["Gas fill-up", "Uber ride", "Bus pass", "Parking fee", "Taxi to airport"],
    "Shopping": ["New clothes", "Online purchase", "Electronics", "Home decor", "Gift for friend"],
    "Bills": ["Internet bill", "Phone bill", "Electricity", "Water bill", "Insurance payment"],
    "Drinks": ["Coffee shop", "Happy hour", "Wine for dinner", "Energy drink", "Smoothie"],
    "Travel": ["Flight booking", "Hotel stay", "Car rental", "Travel insurance", "Vacation expenses"],
    "Education": ["Online course", "Book purchase", "Workshop fee", "Certification exam"],
    "Family": ["Kids activities", "Family dinner", "Babysitter", "School supplies", "Family outing"],
    "Salary": ["Monthly salary", "Bi-weekly paycheck", "Salary deposit"],
}

WEEKEND_EXTRAS = [
    ("Food", 65, "Weekend brunch"),
    ("Drinks", 45, "Saturday night out"),
    ("Shopping", 120, "Weekend shopping spree"),
    ("Travel", 200, "Weekend getaway"),
]


def generate_demo_transactions(user_id, now: Optional[datetime] = None, rng: Optional[random.Random] = None):
    """Five weeks of transactions (so trends have a comparison week) plus
    weekend-heavy spending over the last three weekends."""
    now = now or datetime.utcnow()
    rng = rng or random.Random()
    rows = []

    for week in range(5):
        week_anchor = now - timedelta(weeks=week)
        for _ in range(rng.randint(8, 15)):
            when = week_anchor - timedelta(days=rng.randint(0, 6))
            is_expense = rng.random() < 0.85
            table = EXPENSE_AMOUNTS if is_expense else INCOME_AMOUNTS
            category = rng.choice(list(table))
            base = rng.choice(table[category])
            amount = round(base * (1 + (rng.random() - 0.5) * 0.3), 2)
            description = rng.choice(DESCRIPTIONS[category])
            if not is_expense and category == "Bills":
                description = "Bill refund"
            rows.append(Transaction(
                user_id=user_id,
                amount=amount,
                type="expense" if is_expense else "income",
                category=category,
                description=description,
                created_at=when,
                updated_at=when,
            ))

    days_back_to_saturday = (now.weekday() - 5) % 7
    for weekend in range(3):
        saturday = now - timedelta(days=days_back_to_saturday + weekend * 7)
        sunday = saturday + timedelta(days=1)
        for category, amount, description in WEEKEND_EXTRAS:
            when = saturday if rng.random() < 0.6 or sunday > now else sunday
            rows.append(Transaction(
                user_id=user_id,
                amount=round(max(amount + (rng.random() - 0.5) * 20, 1), 2),
                type="expense",
                category=category,
                description=description,
                created_at=when,
                updated_at=when,
            ))
    return rows


def seed_demo_data(user_id, now: Optional[datetime] = None, rng: Optional[random.Random] = None) -> int:
    rows = generate_demo_transactions(user_id, now, rng)
    db.session.add_all(rows)
    db.session.commit()
    return len(rows)


def clear_transactions(user_id) -> int:
    deleted = Transaction.query.filter_by(user_id=user_id).delete()
    db.session.commit()
    return deleted
