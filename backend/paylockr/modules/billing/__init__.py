"""Billing module: subscriptions, profiles, transaction records and fee rates."""

from paylockr.modules.billing.models import (
    DEFAULT_FEE_RATE,
    PLAN_FEE_RATES,
    TRIAL_PERIOD_DAYS,
    PlanType,
    Profile,
    ProfileSubscriptionStatus,
    Subscription,
    SubscriptionStatus,
    Transaction,
    TransactionStatus,
    get_plan_fee_rate,
)
from paylockr.modules.billing.repository import (
    ProfileRepository,
    SubscriptionRepository,
    TransactionRepository,
)

__all__ = [
    # Models
    "Subscription",
    "Profile",
    "Transaction",
    "PlanType",
    "SubscriptionStatus",
    "ProfileSubscriptionStatus",
    "TransactionStatus",
    # Fee rates
    "PLAN_FEE_RATES",
    "DEFAULT_FEE_RATE",
    "TRIAL_PERIOD_DAYS",
    "get_plan_fee_rate",
    # Repositories
    "SubscriptionRepository",
    "ProfileRepository",
    "TransactionRepository",
]
