from .user import User
from .profile import UserProfile
from .transaction import Transaction, TRANSACTION_TYPES
from .budget_limit import BudgetLimit
from .recommendation_cache import RecommendationCacheEntry
from .subscription import StripeCustomer, StripeSubscription

__all__ = [
    "User",
    "UserProfile",
    "Transaction",
    "TRANSACTION_TYPES",
    "BudgetLimit",
    "RecommendationCacheEntry",
    "StripeCustomer",
    "StripeSubscription",
]
