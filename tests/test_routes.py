"""HTTP tests for the login, register, home and logout routes (FastAPI TestClient + SQLite)."""

import unittest
from collections.abc import Generator
from unittest.mock import patch

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from guestbook.core.config import Settings, get_settings
from guestbook.core.database import build_engine, build_sessionmaker, get_db
from guestbook.core.security import unsign_session_token, verify_password
from guestbook.main import create_app
from guestbook.models import Base, User

SECRET = "test-secret-0123456789abcdef0123456789"


class RouteTestCase(unittest.TestCase):
    """Fresh in-memory database and app per test; dependencies point at them."""

    def setUp(self) -> None:
        self.settings = Settings(
            _env_file=None,
            APP_ENV="dev",
            DATABASE_URL="sqlite://",
            SESSION_SECRETS=SECRET,
            BCRYPT_ROUNDS=4,
        )
        self.engine = build_engine("sqlite://")
        Base.metadata.create_all(self.engine)
        self.session_factory = build_sessionmaker(self.engine)

        def override_get_db() -> Generator[Session, None, None]:
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        self.app = create_app(self.settings)
        self.app.dependency_overrides[get_db] = override_get_db
        self.app.dependency_overrides[get_settings] = lambda: self.settings
        self.client = TestClient(self.app, follow_redirects=False)

    def tearDown(self) -> None:
        self.client.close()
        self.app.dependency_overrides.clear()
        self.engine.dispose()

    def register(self, email: str = "a@x.com", username: str = "alice", password: str = "secret1"):
        return self.client.post(
            "/register", data={"email": email, "username": username, "password": password}
        )

    def login(self, email: str = "a@x.com", password: str = "secret1"):
        return self.client.post("/login", data={"email": email, "password": password})


class TestRegister(RouteTestCase):
    def test_register_sets_session_cookie_matching_row(self) -> None:
        response = self.register()
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/")
        set_cookie = response.headers["set-cookie"]
        self.assertIn("__session=", set_cookie)
        self.assertIn("HttpOnly", set_cookie)
        self.assertIn("SameSite=lax", set_cookie)
        self.assertIn("Max-Age=604800", set_cookie)
        self.assertNotIn("Secure", set_cookie)

        payload = unsign_session_token(response.cookies["__session"], [SECRET])
        stored = payload["data"]["user_info"]
        with self.session_factory() as db:
            row = db.query(User).filter(User.email == "a@x.com").one()
        self.assertEqual(stored["id"], row.id)
        self.assertEqual(stored["email"], row.email)
        self.assertEqual(stored["username"], row.username)
        self.assertNotIn("password_hash", stored)
        self.assertNotIn(row.password_hash, str(payload))

    def test_duplicate_email_rejected_first_user_intact(self) -> None:
        self.register()
        self.client.cookies.clear()
        response = self.register(username="alice2", password="another1")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Unable to create user"})
        self.assertNotIn("set-cookie", response.headers)
        with self.session_factory() as db:
            users = db.query(User).all()
        self.assertEqual(len(users), 1)
        self.assertEqual(users[0].username, "alice")
        self.assertTrue(verify_password("secret1", users[0].password_hash))

    def test_invalid_forms_rejected_without_store_access(self) -> None:
        cases = [
            {"email": "not-an-email", "username": "alice", "password": "secret1"},
            {"email": "a@x.com", "username": "   ", "password": "secret1"},
            {"email": "a@x.com", "username": "alice", "password": "short"},
            {"email": "a@x.com", "username": "alice"},
        ]
        with patch("guestbook.api.auth.create_user") as create_user:
            for data in cases:
                response = self.client.post("/register", data=data)
                self.assertEqual(response.status_code, 400, msg=data)
                self.assertEqual(response.json(), {"error": "Invalid form data"})
            create_user.assert_not_called()

    def test_passwords_differing_after_72_bytes_cannot_register(self) -> None:
        for password in ("p" * 72 + "A", "\u00e9" * 37):
            response = self.register(password=password)
            self.assertEqual(response.status_code, 400, msg=password)
            self.assertEqual(response.json(), {"error": "Invalid form data"})
        with self.session_factory() as db:
            self.assertEqual(db.query(User).count(), 0)

    def test_password_of_exactly_72_bytes_accepted(self) -> None:
        response = self.register(password="p" * 72)
        self.assertEqual(response.status_code, 303)
        self.client.cookies.clear()
        self.assertEqual(self.login(password="p" * 72).status_code, 303)

    def test_register_page_redirects_when_logged_in(self) -> None:
        self.assertEqual(self.client.get("/register").json(), {"user": None, "error": None})
        self.register()
        response = self.client.get("/register")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/")


class TestLogin(RouteTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.register()
        self.client.cookies.clear()

    def test_login_succeeds_then_wrong_password_fails(self) -> None:
        response = self.login()
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/")
        self.assertIn("__session", response.cookies)

        self.client.cookies.clear()
        response = self.login(password="wrong1")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid email or password"})

    def test_unknown_email_gets_same_error(self) -> None:
        wrong_password = self.login(password="wrong1").json()
        unknown_email = self.login(email="nobody@x.com").json()
        self.assertEqual(wrong_password, unknown_email)

    def test_invalid_form(self) -> None:
        response = self.client.post("/login", data={"email": "a@x.com", "password": "12345"})
        self.assertEqual(response.json(), {"error": "Invalid form data"})

    def test_email_is_trimmed(self) -> None:
        response = self.login(email="  a@x.com  ")
        self.assertEqual(response.status_code, 303)

    def test_unknown_email_checks_at_configured_rounds(self) -> None:
        with patch("guestbook.services.users.burn_password_check") as burn:
            response = self.login(email="nobody@x.com")
        self.assertEqual(response.status_code, 400)
        burn.assert_called_once_with("secret1", rounds=self.settings.BCRYPT_ROUNDS)

    def test_password_longer_than_bcrypt_limit_rejected(self) -> None:
        response = self.login(password="p" * 73)
        self.assertEqual(response.json(), {"error": "Invalid form data"})

    def test_store_failure_becomes_unknown_error(self) -> None:
        error = OperationalError("SELECT", {}, Exception("connection refused"))
        with patch("guestbook.api.auth.login_user", side_effect=error):
            response = self.login()
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "An unknown error occurred"})

    def test_login_page_redirects_when_logged_in(self) -> None:
        self.assertEqual(self.client.get("/login").status_code, 200)
        self.login()
        response = self.client.get("/login")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/")


class TestHomeAndLogout(RouteTestCase):
    def test_home_requires_session(self) -> None:
        response = self.client.get("/")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/login")

    def test_home_lists_guestbook_and_user(self) -> None:
        self.register()
        self.client.post("/", data={"name": "Bob", "email": "b@x.com"})
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["user"]["username"], "alice")
        self.assertNotIn("password_hash", body["user"])
        self.assertEqual(len(body["guestBook"]), 1)
        self.assertEqual(set(body["guestBook"][0]), {"id", "name"})
        self.assertEqual(body["guestBook"][0]["name"], "Bob")

    def test_guestbook_duplicate_email(self) -> None:
        first = self.client.post("/", data={"name": "Bob", "email": "b@x.com"})
        self.assertEqual(first.status_code, 200)
        self.assertEqual(first.json(), {})
        second = self.client.post("/", data={"name": "Bobby", "email": "b@x.com"})
        self.assertEqual(second.status_code, 400)
        self.assertEqual(second.json(), {"guestBookError": "Error adding to guest book"})

    def test_guestbook_requires_name_and_email(self) -> None:
        for data in ({"name": "  ", "email": "b@x.com"}, {"name": "Bob"}, {}):
            response = self.client.post("/", data=data)
            self.assertEqual(response.status_code, 400, msg=data)
            self.assertEqual(response.json(), {"guestBookError": "Name and email are required"})

    def test_logout_clears_session(self) -> None:
        self.register()
        self.assertEqual(self.client.get("/").status_code, 200)

        response = self.client.post("/logout")
        self.assertEqual(response.status_code, 303)
        self.assertEqual(response.headers["location"], "/")
        self.assertIn("Max-Age=0", response.headers["set-cookie"])

        response = self.client.get("/")
        self.assertEqual(response.status_code, 302)
        self.assertEqual(response.headers["location"], "/login")


class TestHealth(RouteTestCase):
    def test_reports_database_connected(self) -> None:
        response = self.client.get("/health/")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(
            response.json(), {"status": "ok", "environment": "dev", "database": "connected"}
        )
