"""SQLAlchemy ORM models."""

from guestbook.models.base import Base
from guestbook.models.guestbook import GuestBookEntry
from guestbook.models.user import User

__all__ = ["Base", "GuestBookEntry", "User"]
