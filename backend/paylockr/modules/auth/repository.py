"""User repository for database operations."""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paylockr.modules.auth.models import User, hash_password


class UserRepository:
    """Repository for User CRUD operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        email: str,
        password: str,
        user_metadata: Optional[dict] = None,
        email_confirm: bool = False,
    ) -> User:
        """Create a new user.

        Args:
            email: User email address
            password: Plain text password
            user_metadata: Free-form profile metadata (e.g. full_name)
            email_confirm: Mark the email address as already confirmed

        Returns:
            User: Created user instance
        """
        user = User(
            email=email.lower().strip(),
            password_hash=hash_password(password),
            user_metadata=user_metadata or {},
            email_confirmed_at=datetime.now(timezone.utc) if email_confirm else None,
        )
        self.session.add(user)
        await self.session.flush()
        return user

    async def get_by_id(self, user_id: uuid.UUID) -> Optional[User]:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.email == email.lower().strip())
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        return await self.get_by_email(email) is not None
