"""Password hashing and signing/verification of session cookie values."""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt

# Bcrypt cost (rounds) used when the caller does not pass one.
BCRYPT_ROUNDS = 10

# Length limits for form validation. bcrypt only reads the first 72 bytes of a password.
USERNAME_MIN_LEN = 1
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_BYTES = 72
FIELD_MAX_LEN = 255


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # Forms reject longer passwords; truncate so direct callers never hit bcrypt errors.
    pw_bytes = plain_password.encode("utf-8")[:PASSWORD_MAX_BYTES]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:PASSWORD_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache
def _dummy_hash(rounds: int) -> str:
    return hash_password("dummy-password-for-timing", rounds=rounds)


def burn_password_check(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> None:
    """Spend the same bcrypt work as a real check (at the same cost) when no user matched."""
    verify_password(plain_password, _dummy_hash(rounds))


def sign_session_token(
    data: dict[str, Any],
    secrets: Sequence[str],
    *,
    algorithm: str = "HS256",
    max_age_seconds: int,
) -> str:
    """Sign data with the first secret; the token expires after max_age_seconds."""
    if not secrets:
        raise ValueError("At least one signing secret is required")
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        **data,
        "iat": now,
        "exp": now + timedelta(seconds=max_age_seconds),
    }
    return jwt.encode(payload, secrets[0], algorithm=algorithm)


def unsign_session_token(
    token: str,
    secrets: Sequence[str],
    *,
    algorithm: str = "HS256",
) -> dict[str, Any]:
    """
    Verify token against each secret in order and return its payload.
    Raises jwt.PyJWTError on a malformed, expired or unverifiable token.
    """
    last_error: jwt.PyJWTError = jwt.InvalidSignatureError("No signing secret configured")
    for secret in secrets:
        try:
            return jwt.decode(token, secret, algorithms=[algorithm])
        except jwt.InvalidSignatureError as e:
            last_error = e
    raise last_error
