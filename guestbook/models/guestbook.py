"""ORM model for public guestbook entries."""

from sqlalchemy import Column, Identity, Integer, String

from guestbook.models.base import Base


class GuestBookEntry(Base):
    """One signature in the guestbook; email is unique so an address signs once."""

    __tablename__ = "guestBook"

    id = Column(Integer, Identity(always=True), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
