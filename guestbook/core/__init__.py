"""Core app configuration, database and security primitives."""

from guestbook.core.config import Settings, get_settings
from guestbook.core.database import get_db

__all__ = ["Settings", "get_settings", "get_db"]
