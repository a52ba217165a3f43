"""Repository for billing data access."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from paylockr.modules.billing.models import (
    Profile,
    Subscription,
    SubscriptionStatus,
    Transaction,
    TransactionStatus,
)


class SubscriptionRepository:
    """Repository for subscription operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        gateway_tx_ref: str,
        plan_type: str,
        user_id: Optional[uuid.UUID] = None,
    ) -> Subscription:
        """Create a pending subscription for a checkout attempt."""
        subscription = Subscription(
            gateway_tx_ref=gateway_tx_ref,
            plan_type=plan_type,
            user_id=user_id,
            status=SubscriptionStatus.PENDING.value,
        )
        self.session.add(subscription)
        await self.session.flush()
        return subscription

    async def get_by_tx_ref(self, gateway_tx_ref: str) -> Subscription:
        """Get the single subscription for a transaction reference.

        Raises:
            NoResultFound: If no subscription matches
            MultipleResultsFound: If more than one subscription matches
        """
        result = await self.session.execute(
            select(Subscription)
            .where(Subscription.gateway_tx_ref == gateway_tx_ref)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one()

    async def activate(
        self,
        subscription_id: uuid.UUID,
        user_id: uuid.UUID,
        gateway_subscription_id: Optional[str],
    ) -> int:
        """Attach the user and mark the subscription active.

        Returns:
            Number of rows updated
        """
        result = await self.session.execute(
            update(Subscription)
            .where(Subscription.id == subscription_id)
            .values(
                user_id=user_id,
                status=SubscriptionStatus.ACTIVE.value,
                gateway_subscription_id=gateway_subscription_id,
                updated_at=datetime.now(timezone.utc),
            )
        )
        return result.rowcount


class ProfileRepository:
    """Repository for user profile operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: uuid.UUID,
        plan_type: Optional[str] = None,
        subscription_status: Optional[str] = None,
    ) -> Profile:
        profile = Profile(
            id=user_id,
            plan_type=plan_type,
            subscription_status=subscription_status,
        )
        self.session.add(profile)
        await self.session.flush()
        return profile

    async def get(self, user_id: uuid.UUID) -> Optional[Profile]:
        result = await self.session.execute(select(Profile).where(Profile.id == user_id))
        return result.scalar_one_or_none()

    async def update_plan(
        self,
        user_id: uuid.UUID,
        plan_type: Optional[str],
        subscription_status: str,
    ) -> int:
        """Set plan fields on the profile.

        Returns:
            Number of rows updated
        """
        result = await self.session.execute(
            update(Profile)
            .where(Profile.id == user_id)
            .values(
                plan_type=plan_type,
                subscription_status=subscription_status,
                updated_at=datetime.now(timezone.utc),
            )
        )
        return result.rowcount


class TransactionRepository:
    """Repository for the transaction audit log."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: uuid.UUID,
        gateway_tx_ref: str,
        gateway_tx_id: Optional[str],
        amount: Optional[float],
        currency: Optional[str],
        customer_email: Optional[str],
        customer_name: Optional[str],
        payment_method: Optional[str],
        plan_fee_rate: float,
        status: str = TransactionStatus.COMPLETED.value,
    ) -> Transaction:
        transaction = Transaction(
            user_id=user_id,
            gateway_tx_ref=gateway_tx_ref,
            gateway_tx_id=gateway_tx_id,
            amount=amount,
            currency=currency,
            status=status,
            customer_email=customer_email,
            customer_name=customer_name,
            payment_method=payment_method,
            plan_fee_rate=plan_fee_rate,
        )
        self.session.add(transaction)
        await self.session.flush()
        return transaction

    async def list_by_tx_ref(self, gateway_tx_ref: str) -> list[Transaction]:
        """List audit records for a transaction reference, oldest first."""
        result = await self.session.execute(
            select(Transaction)
            .where(Transaction.gateway_tx_ref == gateway_tx_ref)
            .order_by(Transaction.created_at)
        )
        return list(result.scalars().all())
