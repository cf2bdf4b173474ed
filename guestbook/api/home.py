"""Home page: guestbook listing for logged-in users and the public signing form."""

import logging
from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.responses import Response

from guestbook.api.dependencies import get_user_session_service
from guestbook.api.responses import run_handler
from guestbook.core.database import get_db
from guestbook.schemas.guestbook import GuestBookForm
from guestbook.schemas.results import ActionError, ActionResult, Ok
from guestbook.services.errors import GuestBookError
from guestbook.services.guestbook import add_guestbook_entry, get_guestbook_entries
from guestbook.services.session import UserSessionService

logger = logging.getLogger(__name__)

router = APIRouter()

GUESTBOOK_ERROR_KEY = "guestBookError"
FIELDS_REQUIRED = "Name and email are required"


def home_loader(request: Request, db: Session, sessions: UserSessionService) -> ActionResult:
    """Requires a session (redirects to /login otherwise); returns the guestbook and the user."""
    user = sessions.get_user_session_data(request)
    return Ok({"guestBook": get_guestbook_entries(db), "user": user})


def home_action(form_data: Mapping[str, Any], db: Session) -> ActionResult:
    try:
        form = GuestBookForm.model_validate(form_data)
    except ValidationError:
        return ActionError(FIELDS_REQUIRED)

    try:
        add_guestbook_entry(db, form.name, form.email)
    except GuestBookError as e:
        return ActionError(e.message)
    return Ok()


@router.get("/")
def home(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[UserSessionService, Depends(get_user_session_service)],
) -> Response:
    return run_handler(home_loader, request, db, sessions)


@router.post("/")
def sign_guestbook(
    db: Annotated[Session, Depends(get_db)],
    name: Annotated[str | None, Form()] = None,
    email: Annotated[str | None, Form()] = None,
) -> Response:
    """Add a guestbook entry; failures come back as {guestBookError}."""
    return run_handler(
        home_action,
        {"name": name, "email": email},
        db,
        error_key=GUESTBOOK_ERROR_KEY,
    )
