"""FastAPI dependencies that build services from settings."""

from typing import Annotated

from fastapi import Depends

from guestbook.core.config import Settings, get_settings
from guestbook.services.session import SessionConfig, UserSessionService


def get_session_config(settings: Annotated[Settings, Depends(get_settings)]) -> SessionConfig:
    return SessionConfig.from_settings(settings)


def get_user_session_service(
    config: Annotated[SessionConfig, Depends(get_session_config)],
) -> UserSessionService:
    """Dependency: session service bound to the configured cookie and secrets."""
    return UserSessionService(config)
