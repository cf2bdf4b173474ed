"""FastAPI application entrypoint. No business logic; only wiring."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from guestbook.api import router
from guestbook.core.config import Settings, get_settings
from guestbook.core.logging_config import configure_logging


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the app; logging is configured from settings before routes are mounted."""
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title="Guestbook",
        version="0.1.0",
        docs_url="/docs" if settings.APP_ENV == "dev" else None,
        redoc_url=None,
    )
    app.include_router(router)
    return app


app = create_app()
