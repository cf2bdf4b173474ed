"""ORM model for registered accounts."""

from sqlalchemy import Column, DateTime, Identity, Integer, String, Text, func

from guestbook.models.base import Base


class User(Base):
    """
    Registered account. email and username are each unique.

    password_hash is written by the user service only and never leaves it
    or the session service.
    """

    __tablename__ = "users"

    id = Column(Integer, Identity(always=True), primary_key=True)
    email = Column(String(255), nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    username = Column(String(255), nullable=False, unique=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
