"""Login, registration and logout: form handlers plus their routes."""

import logging
from collections.abc import Mapping
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Form, Request
from pydantic import ValidationError
from sqlalchemy.orm import Session
from starlette.responses import Response

from guestbook.api.dependencies import get_user_session_service
from guestbook.api.responses import run_handler
from guestbook.core.config import Settings, get_settings
from guestbook.core.database import get_db
from guestbook.schemas.auth import LoginForm, RegisterForm
from guestbook.schemas.results import ActionError, ActionResult, Ok, Redirect
from guestbook.services.errors import CreationError
from guestbook.services.session import UserSessionService
from guestbook.services.users import LoginFailure, create_user, login_user

logger = logging.getLogger(__name__)

router = APIRouter()

INVALID_FORM = "Invalid form data"
UNKNOWN_ERROR = "An unknown error occurred"


def anonymous_loader(request: Request, sessions: UserSessionService) -> ActionResult:
    """Send logged-in users home; otherwise render an empty login/register form."""
    if sessions.get_user_id(request) is not None:
        return Redirect(location="/")
    return Ok({"user": None, "error": None})


def login_action(
    request: Request,
    form_data: Mapping[str, Any],
    db: Session,
    sessions: UserSessionService,
    *,
    rounds: int,
) -> ActionResult:
    try:
        form = LoginForm.model_validate(form_data)
    except ValidationError:
        return ActionError(INVALID_FORM)

    try:
        user = login_user(db, form.email, form.password, rounds=rounds)
        if isinstance(user, LoginFailure):
            logger.info("Login rejected")
            return ActionError(user.error)
        return sessions.create_user_session(request, user, remember=True)
    except Exception:
        logger.exception("Login failed unexpectedly")
        return ActionError(UNKNOWN_ERROR)


def register_action(
    request: Request,
    form_data: Mapping[str, Any],
    db: Session,
    sessions: UserSessionService,
    *,
    rounds: int,
) -> ActionResult:
    """Validate the registration form, create the user and log them in."""
    try:
        form = RegisterForm.model_validate(form_data)
    except ValidationError:
        return ActionError(INVALID_FORM)

    try:
        user = create_user(db, form.email, form.username, form.password, rounds=rounds)
        return sessions.create_user_session(request, user, remember=True)
    except CreationError as e:
        return ActionError(e.message)
    except Exception:
        logger.exception("Registration failed unexpectedly")
        return ActionError(UNKNOWN_ERROR)


def logout_action(request: Request, sessions: UserSessionService) -> ActionResult:
    return sessions.logout(request)


@router.get("/login")
def login_page(
    request: Request,
    sessions: Annotated[UserSessionService, Depends(get_user_session_service)],
) -> Response:
    return run_handler(anonymous_loader, request, sessions)


@router.post("/login")
def login(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[UserSessionService, Depends(get_user_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    email: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
) -> Response:
    """Check credentials; on success redirect to / with a fresh session cookie."""
    form_data = {"email": email, "password": password}
    return run_handler(
        login_action,
        request,
        form_data,
        db,
        sessions,
        rounds=settings.BCRYPT_ROUNDS,
    )


@router.get("/register")
def register_page(
    request: Request,
    sessions: Annotated[UserSessionService, Depends(get_user_session_service)],
) -> Response:
    return run_handler(anonymous_loader, request, sessions)


@router.post("/register")
def register(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    sessions: Annotated[UserSessionService, Depends(get_user_session_service)],
    settings: Annotated[Settings, Depends(get_settings)],
    email: Annotated[str | None, Form()] = None,
    username: Annotated[str | None, Form()] = None,
    password: Annotated[str | None, Form()] = None,
) -> Response:
    """Create an account and log it in; on success redirect to / with a session cookie."""
    form_data = {"email": email, "username": username, "password": password}
    return run_handler(
        register_action,
        request,
        form_data,
        db,
        sessions,
        rounds=settings.BCRYPT_ROUNDS,
    )


@router.post("/logout")
def logout(
    request: Request,
    sessions: Annotated[UserSessionService, Depends(get_user_session_service)],
) -> Response:
    return run_handler(logout_action, request, sessions)
