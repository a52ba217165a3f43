"""Account provisioning service.

Accounts are created lazily: checkout captures the sign-up data before the
customer has paid, and the account only comes into existence once the
payment has been verified.
"""

import logging
import uuid
from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from paylockr.modules.auth.models import User
from paylockr.modules.auth.repository import UserRepository
from paylockr.modules.billing.repository import ProfileRepository

logger = logging.getLogger(__name__)


class AccountProvisioningError(Exception):
    """Exception raised when an account cannot be created."""

    pass


class UserExistsError(AccountProvisioningError):
    """Exception raised when the email is already registered."""

    pass


class AccountProvisioningService:
    """Creates user accounts together with their profile row."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)
        self.profile_repo = ProfileRepository(session)

    async def create_user(
        self,
        email: Optional[str],
        password: Optional[str],
        email_confirm: bool = False,
        user_metadata: Optional[dict] = None,
    ) -> User:
        """Create and commit a new user account.

        Args:
            email: Account email address
            password: Plain text password captured at checkout
            email_confirm: Create the account with a confirmed email
            user_metadata: Metadata stored on the account (e.g. full_name)

        Returns:
            User: The committed user

        Raises:
            AccountProvisioningError: If the data is incomplete or the write fails
            UserExistsError: If the email is already registered
        """
        if not email or not isinstance(email, str):
            raise AccountProvisioningError("Email is required")
        if not password or not isinstance(password, str):
            raise AccountProvisioningError("Password is required")

        try:
            if await self.user_repo.exists_by_email(email):
                raise UserExistsError(f"User with email {email} already exists")

            user = await self.user_repo.create(
                email=email,
                password=password,
                user_metadata=user_metadata,
                email_confirm=email_confirm,
            )
            await self.profile_repo.create(user.id)
            await self.session.commit()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise AccountProvisioningError(f"Failed to persist user {email}: {e}") from e
        except (TypeError, ValueError) as e:
            # Raised by the password hasher
            await self.session.rollback()
            raise AccountProvisioningError(f"Invalid credentials for {email}: {e}") from e

        logger.info(f"Created user {user.id}")
        return user

    async def get_user(self, user_id: uuid.UUID) -> Optional[User]:
        return await self.user_repo.get_by_id(user_id)
