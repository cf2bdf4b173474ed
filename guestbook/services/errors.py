"""Exceptions raised by the user and guestbook services."""


class ServiceError(Exception):
    """Base for service failures whose message is safe to show to the client."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


class CreationError(ServiceError):
    """Raised when a user row cannot be inserted (duplicate email/username or store failure)."""


class GuestBookError(ServiceError):
    """Raised when a guestbook entry cannot be inserted."""
