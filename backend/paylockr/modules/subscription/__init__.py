"""Subscription Module.

Activates pending subscriptions once the gateway confirms payment.
"""

from paylockr.modules.subscription.exceptions import (
    MissingReferenceError,
    MissingUserDataError,
    PaymentVerificationError,
    SubscriptionNotFoundError,
    SubscriptionUpdateError,
    SubscriptionVerificationError,
    UserProvisioningError,
)
from paylockr.modules.subscription.router import router
from paylockr.modules.subscription.service import (
    ActivationResult,
    SubscriptionActivationService,
    WriteOutcome,
)

__all__ = [
    "MissingReferenceError",
    "MissingUserDataError",
    "PaymentVerificationError",
    "SubscriptionNotFoundError",
    "SubscriptionUpdateError",
    "SubscriptionVerificationError",
    "UserProvisioningError",
    "router",
    "ActivationResult",
    "SubscriptionActivationService",
    "WriteOutcome",
]
