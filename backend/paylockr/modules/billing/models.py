"""Billing models for subscriptions, profiles and transaction records.

Also holds the plan fee rate table recorded against every completed payment.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Float, Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from paylockr.core.database import Base


class PlanType(str, Enum):
    """Subscription plan tiers."""
    STARTER = "starter"
    PROFESSIONAL = "professional"
    ENTERPRISE = "enterprise"


class SubscriptionStatus(str, Enum):
    """Subscription status values."""
    PENDING = "pending"
    ACTIVE = "active"


class ProfileSubscriptionStatus(str, Enum):
    """Subscription status mirrored on the user profile."""
    TRIAL = "trial"
    ACTIVE = "active"


class TransactionStatus(str, Enum):
    """Transaction audit record status values."""
    COMPLETED = "completed"


# Fee rate charged per plan tier, recorded on each transaction
PLAN_FEE_RATES = {
    PlanType.STARTER.value: 0.05,
    PlanType.PROFESSIONAL.value: 0.03,
    PlanType.ENTERPRISE.value: 0.01,
}

DEFAULT_FEE_RATE = 0.05

TRIAL_PERIOD_DAYS = 7


def get_plan_fee_rate(plan_type: Optional[str]) -> float:
    """Look up the fee rate for a plan, falling back to the default rate."""
    return PLAN_FEE_RATES.get(plan_type, DEFAULT_FEE_RATE)


class Subscription(Base):
    """Subscription created at checkout and activated after payment."""

    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)

    # Attached when the subscription is activated
    user_id: Mapped[Optional[uuid.UUID]] = mapped_column(Uuid, nullable=True, index=True)

    plan_type: Mapped[str] = mapped_column(String(50), nullable=False)
    status: Mapped[str] = mapped_column(
        String(50), default=SubscriptionStatus.PENDING.value, nullable=False, index=True
    )

    # Gateway references
    gateway_tx_ref: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True
    )
    gateway_subscription_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Subscription(id={self.id}, tx_ref={self.gateway_tx_ref}, status={self.status})>"

    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.ACTIVE.value


class Profile(Base):
    """User profile, one-to-one with the user account (shares its id)."""

    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True)
    plan_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    subscription_status: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<Profile(id={self.id}, plan={self.plan_type}, status={self.subscription_status})>"


class Transaction(Base):
    """Append-only audit record of a completed payment."""

    __tablename__ = "transactions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(Uuid, nullable=False, index=True)

    gateway_tx_ref: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    gateway_tx_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    currency: Mapped[Optional[str]] = mapped_column(String(3), nullable=True)
    status: Mapped[str] = mapped_column(
        String(50), default=TransactionStatus.COMPLETED.value, nullable=False
    )

    # Payer contact info
    customer_email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    customer_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    payment_method: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    plan_fee_rate: Mapped[float] = mapped_column(Float, nullable=False, default=DEFAULT_FEE_RATE)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_transactions_user_created", "user_id", "created_at"),
    )

    def __repr__(self) -> str:
        return f"<Transaction(id={self.id}, tx_ref={self.gateway_tx_ref}, amount={self.amount})>"
