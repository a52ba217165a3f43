"""Notification module for in-app user messages."""

from paylockr.modules.notification.models import Notification, NotificationType
from paylockr.modules.notification.repository import NotificationRepository

__all__ = [
    "Notification",
    "NotificationType",
    "NotificationRepository",
]
