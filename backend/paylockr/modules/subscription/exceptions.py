"""Errors that abort subscription activation.

Every error maps to the same HTTP failure response; only the detail text
differs.
"""

from typing import Optional


class SubscriptionVerificationError(Exception):
    """Base exception for fatal activation failures."""

    detail = "Subscription verification failed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.detail
        super().__init__(self.detail)


class MissingReferenceError(SubscriptionVerificationError):
    detail = "Missing transaction reference"


class PaymentVerificationError(SubscriptionVerificationError):
    detail = "Payment verification failed"


class SubscriptionNotFoundError(SubscriptionVerificationError):
    detail = "Subscription not found"


class MissingUserDataError(SubscriptionVerificationError):
    detail = "No user data found"


class UserProvisioningError(SubscriptionVerificationError):
    detail = "Failed to create user account"


class SubscriptionUpdateError(SubscriptionVerificationError):
    detail = "Failed to update subscription"
