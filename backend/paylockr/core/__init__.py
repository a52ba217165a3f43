"""Core module for configuration and utilities."""

from paylockr.core.config import settings
from paylockr.core.database import Base, get_session

__all__ = [
    "settings",
    "Base",
    "get_session",
]
