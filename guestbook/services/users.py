"""User service: account creation and credential checks."""

import logging
from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from guestbook.core.security import (
    BCRYPT_ROUNDS,
    burn_password_check,
    hash_password,
    verify_password,
)
from guestbook.models import User
from guestbook.services.errors import CreationError

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"
CREATION_FAILED = "Unable to create user"


@dataclass(frozen=True)
class LoginFailure:
    """Returned by login_user instead of a User; one message for every cause."""

    error: str = INVALID_CREDENTIALS


def create_user(
    db: Session,
    email: str,
    username: str,
    password: str,
    *,
    rounds: int = BCRYPT_ROUNDS,
) -> User:
    """
    Hash password and insert a new user. Returns the stored row, hash included;
    callers strip it before anything leaves the server.

    Raises CreationError on a uniqueness violation or when the store is unreachable.
    """
    user = User(
        email=email,
        username=username,
        password_hash=hash_password(password, rounds=rounds),
    )
    try:
        db.add(user)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(
            "User creation failed",
            extra={"email": email, "username": username, "error": str(e)},
        )
        raise CreationError(CREATION_FAILED, cause=e) from e

    logger.info("User created", extra={"user_id": user.id})
    return user


def login_user(
    db: Session,
    email: str,
    password: str,
    *,
    rounds: int = BCRYPT_ROUNDS,
) -> User | LoginFailure:
    """
    Look up a user by email and check password.

    Unknown email and wrong password both return LoginFailure with the same message,
    and an unknown email still pays for a bcrypt check at the configured cost.
    Store errors propagate to the caller.
    """
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        burn_password_check(password, rounds=rounds)
        return LoginFailure()
    if not verify_password(password, user.password_hash):
        return LoginFailure()
    return user
