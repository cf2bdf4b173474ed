"""Handler outcomes, dispatched to HTTP responses by guestbook.api.responses."""

from dataclasses import dataclass, field
from typing import Any, Literal


@dataclass(frozen=True)
class SetCookie:
    """One Set-Cookie instruction; max_age None means a browser-session cookie."""

    name: str
    value: str
    max_age: int | None = None
    expires: int | None = None
    path: str = "/"
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "lax"
    secure: bool = False


@dataclass(frozen=True)
class Redirect:
    location: str
    status_code: int = 302
    cookies: tuple[SetCookie, ...] = ()
    kind: Literal["redirect"] = field(default="redirect", init=False)


@dataclass(frozen=True)
class ActionError:
    message: str
    kind: Literal["error"] = field(default="error", init=False)


@dataclass(frozen=True)
class Ok:
    data: dict[str, Any] = field(default_factory=dict)
    kind: Literal["ok"] = field(default="ok", init=False)


ActionResult = Redirect | ActionError | Ok


class RedirectRequired(Exception):
    """Raised by session checks that need the client sent elsewhere (e.g. to /login)."""

    def __init__(self, location: str) -> None:
        super().__init__(location)
        self.location = location

    def to_result(self) -> Redirect:
        return Redirect(location=self.location)
