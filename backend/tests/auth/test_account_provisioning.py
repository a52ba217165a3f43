"""Tests for account provisioning after a verified payment."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from paylockr.modules.auth.models import User, verify_password
from paylockr.modules.auth.service import (
    AccountProvisioningError,
    AccountProvisioningService,
    UserExistsError,
)
from paylockr.modules.billing.models import Profile


class TestCreateUser:
    """AccountProvisioningService.create_user"""

    @pytest.mark.asyncio
    async def test_creates_confirmed_user_with_profile(self, session) -> None:
        service = AccountProvisioningService(session)

        user = await service.create_user(
            email="Ada@Example.com",
            password="S3cure!pass",
            email_confirm=True,
            user_metadata={"full_name": "Ada Lovelace"},
        )

        stored = await session.scalar(select(User).where(User.id == user.id))
        assert stored.email == "ada@example.com"
        assert stored.is_email_confirmed
        assert stored.full_name == "Ada Lovelace"
        assert verify_password("S3cure!pass", stored.password_hash)

        profile = await session.scalar(select(Profile).where(Profile.id == user.id))
        assert profile is not None
        assert profile.plan_type is None
        assert profile.subscription_status is None

    @pytest.mark.asyncio
    async def test_unconfirmed_by_default(self, session) -> None:
        user = await AccountProvisioningService(session).create_user(
            email="grace@example.com", password="An0ther!pass"
        )
        assert not user.is_email_confirmed

    @pytest.mark.asyncio
    async def test_existing_email_rejected(self, session) -> None:
        service = AccountProvisioningService(session)
        await service.create_user(email="ada@example.com", password="S3cure!pass")

        with pytest.raises(UserExistsError):
            await service.create_user(email="ADA@example.com", password="S3cure!pass")

    @pytest.mark.asyncio
    async def test_user_exists_is_a_provisioning_error(self, session) -> None:
        service = AccountProvisioningService(session)
        await service.create_user(email="ada@example.com", password="S3cure!pass")

        with pytest.raises(AccountProvisioningError):
            await service.create_user(email="ada@example.com", password="S3cure!pass")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "email,password",
        [
            (None, "S3cure!pass"),
            ("", "S3cure!pass"),
            ("ada@example.com", None),
            ("ada@example.com", ""),
            ("ada@example.com", 12345678),
            ("ada@example.com", ["S3cure!pass"]),
            (42, "S3cure!pass"),
        ],
    )
    async def test_incomplete_data_rejected(self, session, email, password) -> None:
        with pytest.raises(AccountProvisioningError):
            await AccountProvisioningService(session).create_user(
                email=email, password=password
            )

        assert (await session.scalars(select(User))).all() == []

    @pytest.mark.asyncio
    async def test_lookup_failure_is_a_provisioning_error(self, session, monkeypatch) -> None:
        service = AccountProvisioningService(session)

        async def unavailable(email):
            raise SQLAlchemyError("users table unavailable")

        monkeypatch.setattr(service.user_repo, "exists_by_email", unavailable)

        with pytest.raises(AccountProvisioningError):
            await service.create_user(email="ada@example.com", password="S3cure!pass")

    @pytest.mark.asyncio
    async def test_hashing_failure_is_a_provisioning_error(self, session, monkeypatch) -> None:
        def reject(password):
            raise ValueError("password rejected by hasher")

        monkeypatch.setattr("paylockr.modules.auth.repository.hash_password", reject)

        with pytest.raises(AccountProvisioningError):
            await AccountProvisioningService(session).create_user(
                email="ada@example.com", password="S3cure!pass"
            )

        assert (await session.scalars(select(User))).all() == []

    @pytest.mark.asyncio
    async def test_get_user(self, session) -> None:
        service = AccountProvisioningService(session)
        user = await service.create_user(email="ada@example.com", password="S3cure!pass")

        fetched = await service.get_user(user.id)
        assert fetched is not None
        assert fetched.id == user.id
