"""Guestbook service: sign the book and list its signatures."""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guestbook.models import GuestBookEntry
from guestbook.schemas.guestbook import GuestBookEntryOut
from guestbook.services.errors import GuestBookError

logger = logging.getLogger(__name__)

ADD_FAILED = "Error adding to guest book"


def add_guestbook_entry(db: Session, name: str, email: str) -> None:
    """Insert an entry. A reused email (or any store failure) raises GuestBookError."""
    try:
        db.add(GuestBookEntry(name=name, email=email))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("Guestbook insert failed", extra={"error": str(e)})
        raise GuestBookError(ADD_FAILED, cause=e) from e


def get_guestbook_entries(db: Session) -> list[GuestBookEntryOut]:
    """All entries as {id, name}; email is not selected."""
    rows = db.query(GuestBookEntry.id, GuestBookEntry.name).order_by(GuestBookEntry.id).all()
    return [GuestBookEntryOut(id=row.id, name=row.name) for row in rows]
