"""
Create an account without going through the registration form. Run from project root:
  python -m guestbook.scripts.create_user EMAIL USERNAME PASSWORD
Example:
  python -m guestbook.scripts.create_user alice@example.com alice your-secure-password
"""
import argparse
import logging
import sys

from pydantic import ValidationError

from guestbook.core.config import get_settings
from guestbook.core.database import get_session_factory
from guestbook.core.logging_config import configure_logging
from guestbook.schemas.auth import RegisterForm
from guestbook.services.errors import CreationError
from guestbook.services.users import create_user

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a guestbook user account.")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("username", help="Username (unique, non-empty)")
    parser.add_argument("password", help="Password (6 characters to 72 bytes)")
    args = parser.parse_args(argv)

    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)

    try:
        form = RegisterForm(email=args.email, username=args.username, password=args.password)
    except ValidationError:
        print("Invalid email, username or password.", file=sys.stderr)
        return 1

    db = get_session_factory()()
    try:
        user = create_user(
            db, form.email, form.username, form.password, rounds=settings.BCRYPT_ROUNDS
        )
    except CreationError as e:
        print(f"{e.message} (email or username may already be taken).", file=sys.stderr)
        return 1
    finally:
        db.close()

    print(f"Created user '{user.username}' with id {user.id}.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
