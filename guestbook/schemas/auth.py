"""Form and session schemas for login and registration."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from guestbook.core.security import (
    FIELD_MAX_LEN,
    PASSWORD_MAX_BYTES,
    PASSWORD_MIN_LEN,
    USERNAME_MIN_LEN,
)


def _check_password_bytes(v: str) -> str:
    # bcrypt ignores everything past 72 bytes, so longer passwords are refused outright.
    if len(v.encode("utf-8")) > PASSWORD_MAX_BYTES:
        raise ValueError(f"Password must be at most {PASSWORD_MAX_BYTES} bytes")
    return v


class LoginForm(BaseModel):
    """Credentials posted to the login form."""

    email: EmailStr = Field(..., max_length=FIELD_MAX_LEN, description="Account email")
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, description="Password")

    @field_validator("email", mode="before")
    @classmethod
    def strip_email(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def limit_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class RegisterForm(BaseModel):
    """Fields posted to the registration form."""

    email: EmailStr = Field(..., max_length=FIELD_MAX_LEN, description="Account email")
    username: str = Field(
        ..., min_length=USERNAME_MIN_LEN, max_length=FIELD_MAX_LEN, description="Username"
    )
    password: str = Field(..., min_length=PASSWORD_MIN_LEN, description="Password")

    @field_validator("email", "username", mode="before")
    @classmethod
    def strip_whitespace(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v

    @field_validator("password")
    @classmethod
    def limit_password_bytes(cls, v: str) -> str:
        return _check_password_bytes(v)


class UserSession(BaseModel):
    """User as stored in the session cookie (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
