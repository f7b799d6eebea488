"""Shared test helpers: in-memory settings, app/client construction and login shortcuts."""

import unittest
from typing import Any

from fastapi.testclient import TestClient

from filmoteca.core.config import Settings
from filmoteca.core.context import AppContext
from filmoteca.factory import create_app
from filmoteca.models import Base
from filmoteca.services.users import UserStore

TEST_SECRET = "test-signing-secret"
ADMIN_USERNAME = "Rodar2025"
ADMIN_PASSWORD = "#Rodar2025@Rodar"


def make_settings(**overrides: Any) -> Settings:
    """Settings for an isolated in-memory SQLite database with cheap bcrypt."""
    values: dict[str, Any] = {
        "APP_ENV": "dev",
        "DATABASE_URL": "sqlite://",
        "DB_CREATE_ALL": True,
        "JWT_SECRET": TEST_SECRET,
        "BCRYPT_ROUNDS": 4,
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_context(**overrides: Any) -> AppContext:
    """AppContext with tables created but no bootstrap admin seeded."""
    ctx = AppContext.from_settings(make_settings(**overrides))
    Base.metadata.create_all(ctx.engine)
    return ctx


class ApiTestCase(unittest.TestCase):
    """Runs each test against a freshly bootstrapped app and database."""

    settings_overrides: dict[str, Any] = {}

    def setUp(self) -> None:
        self.settings = make_settings(**self.settings_overrides)
        self.app = create_app(self.settings)
        self.client = TestClient(self.app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    @property
    def ctx(self) -> AppContext:
        return self.app.state.ctx

    def api(self, path: str) -> str:
        return f"{self.settings.API_PREFIX}{path}"

    def login_token(self, username: str, password: str) -> str:
        """Log in, return the raw token and drop the cookie so later requests choose their own auth."""
        resp = self.client.post(self.api("/auth/login"), json={"username": username, "password": password})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.client.cookies.clear()
        return resp.json()["token"]

    def admin_headers(self) -> dict[str, str]:
        return bearer(self.login_token(ADMIN_USERNAME, ADMIN_PASSWORD))

    def create_user(self, username: str, password: str = "secret123", role: str = "editor") -> str:
        """Insert a user directly through the store; returns its id."""
        db = self.ctx.session_factory()
        try:
            store = UserStore(db, bcrypt_rounds=self.settings.BCRYPT_ROUNDS)
            return store.create(username, f"{username}@example.com", password, role=role).id
        finally:
            db.close()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}
