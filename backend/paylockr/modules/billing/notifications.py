"""Billing notification service.

Builds and stores the user-facing messages for subscription events.
"""

import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from paylockr.modules.billing.models import TRIAL_PERIOD_DAYS
from paylockr.modules.notification.models import Notification, NotificationType
from paylockr.modules.notification.repository import NotificationRepository

SUBSCRIPTION_ACTIVATED_TITLE = "Subscription Activated"


def subscription_activated_message(plan_type: Optional[str], is_trial: bool) -> str:
    """Human-readable activation message for a plan."""
    if is_trial:
        return (
            f"Your {plan_type} plan trial has started! "
            f"You have {TRIAL_PERIOD_DAYS} days to try all features."
        )
    return f"Your {plan_type} plan subscription is now active. Welcome to PayLockr!"


class BillingNotificationService:
    """Service for sending billing-related notifications."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.notification_repo = NotificationRepository(session)

    async def notify_subscription_activated(
        self,
        user_id: uuid.UUID,
        plan_type: Optional[str],
        subscription_id: uuid.UUID,
        is_trial: bool,
    ) -> Notification:
        """Store the notification for an activated (or trialing) subscription.

        Args:
            user_id: User ID
            plan_type: Activated plan
            subscription_id: Activated subscription
            is_trial: Whether the plan starts as a trial

        Returns:
            The created notification (flushed, not committed)
        """
        return await self.notification_repo.create(
            user_id=user_id,
            type=NotificationType.PAYMENT.value,
            title=SUBSCRIPTION_ACTIVATED_TITLE,
            message=subscription_activated_message(plan_type, is_trial),
            metadata={
                "plan_type": plan_type,
                "subscription_id": str(subscription_id),
                "is_trial": is_trial,
            },
        )
