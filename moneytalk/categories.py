# Categories offered when recording or editing a transaction.
CATEGORIES = [
    "Salary", "Bills", "Shopping", "Groceries", "Transport",
    "Food", "Drinks", "Travel", "Loans", "Education", "Kids", "Family",
]

# Shortcuts offered by the budget limits screen.
PRESET_BUDGET_CATEGORIES = [
    "Food", "Shopping", "Transport", "Drinks", "Groceries",
    "Bills", "Travel", "Education", "Family", "Loans",
]

INCOME_KEYWORDS = ["salary", "income", "paid", "received", "earned", "bonus", "refund"]

# Order matters: the first category with any keyword hit wins.
CATEGORY_KEYWORDS = [
    ("Groceries", ["grocery", "groceries", "supermarket", "food shopping", "market"]),
    ("Food", ["restaurant", "lunch", "dinner", "breakfast", "cafe", "food"]),
    ("Transport", ["gas", "fuel", "taxi", "uber", "bus", "train", "transport"]),
    ("Shopping", ["shopping", "store", "mall", "online", "amazon", "clothes"]),
    ("Bills", ["bill", "electricity", "water", "internet", "phone", "rent"]),
    ("Drinks", ["coffee", "beer", "wine", "drinks", "bar", "alcohol"]),
    ("Travel", ["flight", "hotel", "vacation", "trip", "travel"]),
    ("Education", ["school", "course", "book", "education", "tuition"]),
    ("Family", ["family", "kids", "children", "babysitter"]),
    ("Salary", ["salary", "paycheck", "wage", "income"]),
    ("Loans", ["loan", "mortgage", "credit", "debt"]),
]

DEFAULT_CATEGORY = "Shopping"
