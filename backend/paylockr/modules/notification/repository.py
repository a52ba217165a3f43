"""Repository for notification operations."""

import uuid
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from paylockr.modules.notification.models import Notification


class NotificationRepository:
    """Repository for notification CRUD operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self,
        user_id: uuid.UUID,
        type: str,
        title: str,
        message: str,
        metadata: Optional[dict] = None,
    ) -> Notification:
        notification = Notification(
            user_id=user_id,
            type=type,
            title=title,
            message=message,
            notification_metadata=metadata,
        )
        self.session.add(notification)
        await self.session.flush()
        return notification

    async def list_for_user(self, user_id: uuid.UUID) -> list[Notification]:
        """List a user's notifications, newest first."""
        result = await self.session.execute(
            select(Notification)
            .where(Notification.user_id == user_id)
            .order_by(Notification.created_at.desc())
        )
        return list(result.scalars().all())
