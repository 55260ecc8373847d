"""Tests for taskmanager.services.auth: registration, login and credential error symmetry."""

import unittest
from unittest.mock import patch

from taskmanager.core.errors import DuplicateResourceError, ForbiddenError, UnauthorizedError
from taskmanager.core.security import verify_password
from taskmanager.models import Role, User
from taskmanager.schemas.auth import RegisterRequest
from taskmanager.services import auth as auth_service
from tests.helpers import DEFAULT_PASSWORD, DatabaseTestCase, make_token_service


def _register_body(username: str = "alice", email: str = "alice@example.com", **kwargs: object) -> RegisterRequest:
    return RegisterRequest(username=username, email=email, password=DEFAULT_PASSWORD, **kwargs)


class TestRegister(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.tokens = make_token_service()

    def test_creates_regular_user_and_token(self) -> None:
        user, token = auth_service.register(self.db, _register_body(), self.tokens)
        self.assertEqual(user.role, Role.REGULAR)
        self.assertNotEqual(user.password_hash, DEFAULT_PASSWORD)
        self.assertTrue(verify_password(DEFAULT_PASSWORD, user.password_hash))
        claims = self.tokens.verify(token)
        self.assertEqual((claims.identifier, claims.role, claims.principal_id), ("alice", Role.REGULAR, user.id))

    def test_explicit_regular_role_accepted(self) -> None:
        user, _ = auth_service.register(self.db, _register_body(role=Role.REGULAR), self.tokens)
        self.assertEqual(user.role, Role.REGULAR)

    def test_admin_role_rejected_without_writing(self) -> None:
        with self.assertRaises(ForbiddenError):
            auth_service.register(self.db, _register_body(role=Role.ADMIN), self.tokens)
        self.assertEqual(self.db.query(User).count(), 0)

    def test_duplicate_username_writes_nothing_and_issues_no_token(self) -> None:
        self.make_user("alice")
        with patch.object(self.tokens, "issue") as issue:
            with self.assertRaises(DuplicateResourceError) as ctx:
                auth_service.register(self.db, _register_body(email="other@example.com"), self.tokens)
            issue.assert_not_called()
        self.assertEqual(ctx.exception.message, "Username already exists")
        self.assertEqual(self.db.query(User).count(), 1)

    def test_duplicate_email(self) -> None:
        self.make_user("bob", email="alice@example.com")
        with self.assertRaises(DuplicateResourceError) as ctx:
            auth_service.register(self.db, _register_body(), self.tokens)
        self.assertEqual(ctx.exception.message, "Email already exists")


class TestLogin(DatabaseTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.tokens = make_token_service()
        self.alice = self.make_user("alice")

    def test_success_issues_token_with_current_role(self) -> None:
        self.alice.role = Role.ADMIN
        self.db.commit()
        user, token = auth_service.login(self.db, "alice", DEFAULT_PASSWORD, self.tokens)
        self.assertEqual(user.id, self.alice.id)
        self.assertEqual(self.tokens.verify(token).role, Role.ADMIN)

    def test_wrong_password_and_unknown_user_are_indistinguishable(self) -> None:
        with self.assertRaises(UnauthorizedError) as wrong:
            auth_service.login(self.db, "alice", "wrong-password", self.tokens)
        with self.assertRaises(UnauthorizedError) as ghost:
            auth_service.login(self.db, "ghost", DEFAULT_PASSWORD, self.tokens)
        self.assertEqual(wrong.exception.kind, ghost.exception.kind)
        self.assertEqual(wrong.exception.message, ghost.exception.message)
        self.assertEqual(type(wrong.exception), type(ghost.exception))

    def test_unknown_user_still_runs_a_password_check(self) -> None:
        with patch("taskmanager.services.auth.burn_password_check") as burn:
            with self.assertRaises(UnauthorizedError):
                auth_service.login(self.db, "ghost", "whatever-password", self.tokens)
        burn.assert_called_once_with("whatever-password")

    def test_failed_login_issues_no_token(self) -> None:
        with patch.object(self.tokens, "issue") as issue:
            with self.assertRaises(UnauthorizedError):
                auth_service.login(self.db, "alice", "wrong-password", self.tokens)
            issue.assert_not_called()


if __name__ == "__main__":
    unittest.main()
