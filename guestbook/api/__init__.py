"""Page and health routes."""

from fastapi import APIRouter

from guestbook.api import auth, health, home

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, tags=["auth"])
router.include_router(home.router, tags=["guestbook"])
