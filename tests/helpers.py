"""Shared test scaffolding: isolated in-memory database per test and authenticated API clients."""

import unittest
from datetime import timedelta

from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from taskmanager.core.database import build_engine, get_db
from taskmanager.core.tokens import TokenService, get_token_service
from taskmanager.main import app
from taskmanager.models import Base, Role, User
from taskmanager.schemas.auth import CurrentPrincipal
from taskmanager.services.users import insert_user

TEST_SECRET = "test-signing-secret-0123456789abcdef"
DEFAULT_PASSWORD = "password123"


def make_test_engine() -> Engine:
    """Fresh in-memory database shared by every connection of this engine."""
    engine = build_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(engine)
    return engine


def principal_for(user: User) -> CurrentPrincipal:
    return CurrentPrincipal(id=user.id, username=user.username, role=user.role)


def make_token_service(**kwargs: object) -> TokenService:
    kwargs.setdefault("ttl", timedelta(hours=24))
    return TokenService(secret=TEST_SECRET, **kwargs)


class DatabaseTestCase(unittest.TestCase):
    """Gives each test its own empty database and a session on it."""

    def setUp(self) -> None:
        self.engine = make_test_engine()
        self.session_factory = sessionmaker(bind=self.engine, autocommit=False, autoflush=False)
        self.db: Session = self.session_factory()

    def tearDown(self) -> None:
        self.db.close()
        self.engine.dispose()

    def make_user(
        self,
        username: str,
        email: str | None = None,
        password: str = DEFAULT_PASSWORD,
        role: Role = Role.REGULAR,
    ) -> User:
        return insert_user(self.db, username, email or f"{username}@example.com", password, role)


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db points at the test database."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db():
            db = self.session_factory()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def auth_headers(self, user: User) -> dict[str, str]:
        token = get_token_service().issue(user.username, user.role, principal_id=user.id)
        return {"Authorization": f"Bearer {token}"}
