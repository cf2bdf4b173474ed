"""
Cookie-backed user sessions.

The whole session lives in a signed cookie; there is no server-side store, so a
session ends when the cookie expires, is destroyed by logout, or its signing
secret is removed from SESSION_SECRETS.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import jwt
from pydantic import ValidationError
from starlette.requests import HTTPConnection

from guestbook.core.config import Settings
from guestbook.core.security import sign_session_token, unsign_session_token
from guestbook.schemas.auth import UserSession
from guestbook.schemas.results import Redirect, RedirectRequired, SetCookie

logger = logging.getLogger(__name__)

USER_SESSION_KEY = "user_info"
LOGIN_URL = "/login"


@dataclass(frozen=True)
class SessionConfig:
    """Cookie and signing parameters; built from Settings and passed to the storage."""

    cookie_name: str
    secrets: tuple[str, ...]
    max_age_seconds: int
    algorithm: str = "HS256"
    secure: bool = False
    samesite: str = "lax"
    path: str = "/"

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionConfig":
        return cls(
            cookie_name=settings.SESSION_COOKIE_NAME,
            secrets=tuple(s.get_secret_value() for s in settings.SESSION_SECRETS),
            max_age_seconds=settings.SESSION_MAX_AGE_SECONDS,
            algorithm=settings.SESSION_ALGORITHM,
            secure=settings.is_production,
        )


class CookieSession:
    """Key/value session data carried in the cookie."""

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value

    def unset(self, key: str) -> None:
        self.data.pop(key, None)


class CookieSessionStorage:
    """Serialize sessions into signed cookie values and back."""

    def __init__(self, config: SessionConfig) -> None:
        self.config = config

    def get_session(self, cookie_value: str | None) -> CookieSession:
        """Decode cookie_value; missing, tampered or expired cookies give an empty session."""
        if not cookie_value:
            return CookieSession()
        try:
            payload = unsign_session_token(
                cookie_value,
                self.config.secrets,
                algorithm=self.config.algorithm,
            )
        except jwt.PyJWTError as e:
            logger.debug("Ignoring invalid session cookie: %s", e)
            return CookieSession()
        data = payload.get("data")
        return CookieSession(data if isinstance(data, dict) else None)

    def commit_session(self, session: CookieSession, *, max_age: int | None) -> SetCookie:
        token = sign_session_token(
            {"data": session.data},
            self.config.secrets,
            algorithm=self.config.algorithm,
            max_age_seconds=self.config.max_age_seconds,
        )
        return self._cookie(token, max_age=max_age)

    def destroy_session(self, session: CookieSession) -> SetCookie:
        session.data.clear()
        return self._cookie("", max_age=0, expires=0)

    def _cookie(self, value: str, *, max_age: int | None, expires: int | None = None) -> SetCookie:
        return SetCookie(
            name=self.config.cookie_name,
            value=value,
            max_age=max_age,
            expires=expires,
            path=self.config.path,
            httponly=True,
            samesite=self.config.samesite,
            secure=self.config.secure,
        )


class UserSessionService:
    """Read, require, create and destroy the logged-in user's session."""

    def __init__(self, config: SessionConfig) -> None:
        self.config = config
        self.storage = CookieSessionStorage(config)

    def get_user_session(self, request: HTTPConnection) -> CookieSession:
        return self.storage.get_session(request.cookies.get(self.config.cookie_name))

    def _stored_user(self, request: HTTPConnection) -> UserSession | None:
        raw = self.get_user_session(request).get(USER_SESSION_KEY)
        if not isinstance(raw, dict):
            return None
        try:
            return UserSession.model_validate(raw)
        except ValidationError:
            logger.warning("Session cookie carried a malformed user payload")
            return None

    def get_user_id(self, request: HTTPConnection) -> int | None:
        user = self._stored_user(request)
        return user.id if user else None

    def require_user(self, request: HTTPConnection) -> int:
        """Return the logged-in user's id or raise RedirectRequired to the login page."""
        user_id = self.get_user_id(request)
        if user_id is None:
            raise RedirectRequired(LOGIN_URL)
        return user_id

    def get_user_session_data(
        self, request: HTTPConnection, redirect_url: str = LOGIN_URL
    ) -> UserSession:
        user = self._stored_user(request)
        if user is None:
            raise RedirectRequired(redirect_url)
        return user

    def create_user_session(
        self,
        request: HTTPConnection,
        user: Any,
        *,
        remember: bool = True,
        redirect_url: str = "/",
    ) -> Redirect:
        """
        Store user (minus its password hash) in the session and redirect to redirect_url.

        remember=True keeps the cookie for SESSION_MAX_AGE_SECONDS; otherwise it is
        dropped when the browser closes.
        """
        session = self.get_user_session(request)
        user_session = UserSession.model_validate(user)
        session.set(USER_SESSION_KEY, user_session.model_dump(mode="json"))
        cookie = self.storage.commit_session(
            session,
            max_age=self.config.max_age_seconds if remember else None,
        )
        logger.info("Session created", extra={"user_id": user_session.id, "remember": remember})
        return Redirect(location=redirect_url, status_code=303, cookies=(cookie,))

    def logout(self, request: HTTPConnection) -> Redirect:
        session = self.get_user_session(request)
        session.unset(USER_SESSION_KEY)
        return Redirect(location="/", status_code=303, cookies=(self.storage.destroy_session(session),))
