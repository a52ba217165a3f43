"""Shared fixtures: an in-memory database and a scripted payment gateway."""

from typing import Any, Optional

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from paylockr.core.database import Base
from paylockr.modules.auth import models as auth_models  # noqa: F401
from paylockr.modules.billing import models as billing_models  # noqa: F401
from paylockr.modules.notification import models as notification_models  # noqa: F401
from paylockr.modules.payment_gateway.interface import (
    GatewayProvider,
    PaymentGatewayInterface,
    PaymentVerification,
)

CUSTOMER_EMAIL = "ada@example.com"
CUSTOMER_NAME = "Ada Lovelace"
CUSTOMER_PASSWORD = "S3cure!pass"


class ScriptedGateway(PaymentGatewayInterface):
    """Gateway that returns a fixed verification and records its calls."""

    provider = GatewayProvider.FLUTTERWAVE

    def __init__(self, verification: Optional[PaymentVerification] = None):
        super().__init__(secret_key="FLWSECK_TEST-scripted")
        self.verification = verification or PaymentVerification(
            payment_id=None, status="error", error_message="not scripted"
        )
        self.calls: list[str] = []

    async def verify_payment(self, payment_id: str) -> PaymentVerification:
        self.calls.append(payment_id)
        return self.verification


def build_verification(
    payment_id: str = "4975363",
    status: str = "success",
    transaction_status: str = "successful",
    plan_type: Optional[str] = "professional",
    is_trial: Any = False,
    pending_user_data: Any = None,
    **overrides: Any,
) -> PaymentVerification:
    meta: dict[str, Any] = {"is_trial": is_trial}
    if plan_type is not None:
        meta["plan_type"] = plan_type
    if pending_user_data is not None:
        meta["pending_user_data"] = pending_user_data

    fields: dict[str, Any] = {
        "payment_id": payment_id,
        "status": status,
        "transaction_status": transaction_status,
        "amount": 49.0,
        "currency": "USD",
        "payment_method": "card",
        "customer_email": CUSTOMER_EMAIL,
        "customer_name": CUSTOMER_NAME,
        "meta": meta,
    }
    fields.update(overrides)
    return PaymentVerification(**fields)


@pytest.fixture
def make_verification():
    """Factory for gateway verifications; successful by default."""
    return build_verification


@pytest.fixture
def make_gateway():
    """Factory for a gateway scripted with one verification."""
    return ScriptedGateway


@pytest.fixture
def pending_user_data() -> dict:
    return {"password": CUSTOMER_PASSWORD}


@pytest_asyncio.fixture
async def db_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_maker(db_engine):
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session
