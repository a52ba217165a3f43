"""Subscription activation service.

Turns a payment gateway redirect into an active subscription:

1. Verify the payment with the gateway.
2. Load the pending subscription for the transaction reference.
3. Provision the user account captured at checkout, unless one is attached.
4. Activate the subscription.
5. Update the profile, record the transaction and notify the user.

Steps 1-4 are fatal and raise a ``SubscriptionVerificationError``. The writes
in step 5 are best-effort: a failure is logged and reported in
``ActivationResult.diagnostics`` but the activation still succeeds.

Each step commits on its own. A failure in a later fatal step does not roll
back an account that was already provisioned.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from paylockr.core.logging import log_error, log_info, log_warning
from paylockr.modules.auth.service import AccountProvisioningError, AccountProvisioningService
from paylockr.modules.billing.models import ProfileSubscriptionStatus, get_plan_fee_rate
from paylockr.modules.billing.notifications import BillingNotificationService
from paylockr.modules.billing.repository import (
    ProfileRepository,
    SubscriptionRepository,
    TransactionRepository,
)
from paylockr.modules.payment_gateway.interface import (
    PaymentGatewayInterface,
    PaymentVerification,
)
from paylockr.modules.subscription.exceptions import (
    MissingReferenceError,
    MissingUserDataError,
    PaymentVerificationError,
    SubscriptionNotFoundError,
    SubscriptionUpdateError,
    UserProvisioningError,
)

logger = logging.getLogger(__name__)


@dataclass
class WriteOutcome:
    """Result of one best-effort write."""
    operation: str
    succeeded: bool
    error: Optional[str] = None


@dataclass
class ActivationResult:
    """Outcome of a successful activation."""
    subscription_id: uuid.UUID
    user_id: uuid.UUID
    plan_type: Optional[str]
    is_trial: bool
    user_created: bool = False
    diagnostics: list[WriteOutcome] = field(default_factory=list)

    @property
    def failed_writes(self) -> list[str]:
        return [d.operation for d in self.diagnostics if not d.succeeded]


class SubscriptionActivationService:
    """Activates subscriptions from verified gateway payments."""

    def __init__(self, session: AsyncSession, gateway: PaymentGatewayInterface):
        self.session = session
        self.gateway = gateway
        self.subscription_repo = SubscriptionRepository(session)
        self.profile_repo = ProfileRepository(session)
        self.transaction_repo = TransactionRepository(session)
        self.provisioning = AccountProvisioningService(session)
        self.notifications = BillingNotificationService(session)

    async def activate(
        self,
        tx_ref: Optional[str],
        transaction_id: Optional[str] = None,
        status_hint: Optional[str] = None,
    ) -> ActivationResult:
        """Verify the payment behind ``tx_ref`` and activate its subscription.

        Args:
            tx_ref: Merchant transaction reference of the checkout
            transaction_id: Gateway transaction ID to verify
            status_hint: Status reported on the redirect; logged, never trusted

        Returns:
            ActivationResult describing the activated subscription

        Raises:
            SubscriptionVerificationError: If any fatal step fails
        """
        if not tx_ref:
            raise MissingReferenceError()

        log_info(
            logger,
            "Verifying subscription payment",
            tx_ref=tx_ref,
            transaction_id=transaction_id,
            status_hint=status_hint,
        )

        payment = await self._verify_payment(transaction_id, tx_ref)

        subscription = await self._get_subscription(tx_ref)
        # Plain values only from here on; rollbacks expire ORM state
        subscription_id = subscription.id
        existing_user_id = subscription.user_id
        plan_type = payment.plan_type or subscription.plan_type
        is_trial = payment.is_trial

        user_created = existing_user_id is None
        if existing_user_id is not None:
            user_id = existing_user_id
        else:
            user_id = await self._provision_user(payment, tx_ref)

        await self._activate_subscription(subscription_id, user_id, payment.payment_id)

        diagnostics = [
            await self._best_effort(
                "profile_update",
                lambda: self._update_profile(user_id, plan_type, is_trial),
                user_id=user_id,
            ),
            await self._best_effort(
                "transaction_record",
                lambda: self._record_transaction(user_id, tx_ref, payment, plan_type),
                user_id=user_id,
            ),
            await self._best_effort(
                "notification",
                lambda: self.notifications.notify_subscription_activated(
                    user_id=user_id,
                    plan_type=plan_type,
                    subscription_id=subscription_id,
                    is_trial=is_trial,
                ),
                user_id=user_id,
            ),
        ]

        result = ActivationResult(
            subscription_id=subscription_id,
            user_id=user_id,
            plan_type=plan_type,
            is_trial=is_trial,
            user_created=user_created,
            diagnostics=diagnostics,
        )
        log_info(
            logger,
            "Subscription activated",
            tx_ref=tx_ref,
            subscription_id=str(subscription_id),
            user_id=str(user_id),
            plan_type=plan_type,
            is_trial=is_trial,
            failed_writes=result.failed_writes,
        )
        return result

    async def _verify_payment(
        self, transaction_id: Optional[str], tx_ref: str
    ) -> PaymentVerification:
        if not transaction_id:
            log_warning(logger, "Callback without transaction ID", tx_ref=tx_ref)
            raise PaymentVerificationError()

        verification = await self.gateway.verify_payment(transaction_id)
        if not verification.is_successful:
            log_warning(
                logger,
                "Payment verification failed",
                tx_ref=tx_ref,
                transaction_id=transaction_id,
                gateway_status=verification.status,
                transaction_status=verification.transaction_status,
                gateway_error=verification.error_message,
            )
            raise PaymentVerificationError()

        return verification

    async def _get_subscription(self, tx_ref: str):
        try:
            return await self.subscription_repo.get_by_tx_ref(tx_ref)
        except SQLAlchemyError as e:
            log_error(logger, "Subscription lookup failed", e, tx_ref=tx_ref)
            raise SubscriptionNotFoundError() from e

    async def _provision_user(self, payment: PaymentVerification, tx_ref: str) -> uuid.UUID:
        pending = payment.pending_user_data
        if not pending:
            log_warning(logger, "No pending user data on payment", tx_ref=tx_ref)
            raise MissingUserDataError()

        password = pending.get("password") if isinstance(pending, dict) else None
        try:
            user = await self.provisioning.create_user(
                email=payment.customer_email,
                password=password,
                email_confirm=True,
                user_metadata={"full_name": payment.customer_name},
            )
        except AccountProvisioningError as e:
            log_error(logger, "User provisioning failed", e, tx_ref=tx_ref)
            raise UserProvisioningError() from e

        return user.id

    async def _activate_subscription(
        self,
        subscription_id: uuid.UUID,
        user_id: uuid.UUID,
        gateway_subscription_id: Optional[str],
    ) -> None:
        try:
            await self.subscription_repo.activate(
                subscription_id=subscription_id,
                user_id=user_id,
                gateway_subscription_id=gateway_subscription_id,
            )
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            log_error(
                logger,
                "Subscription update failed",
                e,
                subscription_id=str(subscription_id),
            )
            raise SubscriptionUpdateError() from e

    async def _update_profile(
        self, user_id: uuid.UUID, plan_type: Optional[str], is_trial: bool
    ) -> None:
        status = (
            ProfileSubscriptionStatus.TRIAL if is_trial else ProfileSubscriptionStatus.ACTIVE
        )
        updated = await self.profile_repo.update_plan(
            user_id=user_id,
            plan_type=plan_type,
            subscription_status=status.value,
        )
        if not updated:
            log_warning(logger, "No profile row to update", user_id=str(user_id))

    async def _record_transaction(
        self,
        user_id: uuid.UUID,
        tx_ref: str,
        payment: PaymentVerification,
        plan_type: Optional[str],
    ) -> None:
        await self.transaction_repo.create(
            user_id=user_id,
            gateway_tx_ref=tx_ref,
            gateway_tx_id=payment.payment_id,
            amount=payment.amount,
            currency=payment.currency,
            customer_email=payment.customer_email,
            customer_name=payment.customer_name,
            payment_method=payment.payment_method,
            plan_fee_rate=get_plan_fee_rate(plan_type),
        )

    async def _best_effort(
        self,
        operation: str,
        write: Callable[[], Awaitable[Any]],
        **context: Any,
    ) -> WriteOutcome:
        try:
            await write()
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            log_error(
                logger,
                f"Best-effort write failed: {operation}",
                e,
                operation=operation,
                **{k: str(v) for k, v in context.items()},
            )
            return WriteOutcome(operation=operation, succeeded=False, error=str(e))

        return WriteOutcome(operation=operation, succeeded=True)
