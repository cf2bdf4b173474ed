"""Pydantic request/response schemas and handler results."""

from guestbook.schemas.auth import LoginForm, RegisterForm, UserSession
from guestbook.schemas.guestbook import GuestBookEntryOut, GuestBookForm
from guestbook.schemas.health import HealthResponse
from guestbook.schemas.results import (
    ActionError,
    ActionResult,
    Ok,
    Redirect,
    RedirectRequired,
    SetCookie,
)

__all__ = [
    "ActionError",
    "ActionResult",
    "GuestBookEntryOut",
    "GuestBookForm",
    "HealthResponse",
    "LoginForm",
    "Ok",
    "Redirect",
    "RedirectRequired",
    "RegisterForm",
    "SetCookie",
    "UserSession",
]
