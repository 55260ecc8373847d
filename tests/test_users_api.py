"""API tests for user routes: allow-listed responses, self-service update, admin-only management."""

from taskmanager.core.config import settings
from taskmanager.models import Role, Task, User
from tests.helpers import DEFAULT_PASSWORD, ApiTestCase

PREFIX = settings.API_V1_PREFIX
USER_FIELDS = {"id", "username", "email", "created_at", "updated_at"}


class UsersApiTestCase(ApiTestCase):
    def setUp(self) -> None:
        super().setUp()
        self.alice = self.make_user("alice")
        self.bob = self.make_user("bob")
        self.admin = self.make_user("root", role=Role.ADMIN)


class TestUserResponses(UsersApiTestCase):
    def test_response_is_allow_listed(self) -> None:
        r = self.client.get(f"{PREFIX}/users/{self.alice.id}", headers=self.auth_headers(self.alice))
        self.assertEqual(r.status_code, 200)
        self.assertEqual(set(r.json()), USER_FIELDS)

    def test_list_users_admin_only(self) -> None:
        r = self.client.get(f"{PREFIX}/users", headers=self.auth_headers(self.admin))
        self.assertEqual(r.status_code, 200)
        self.assertEqual([u["username"] for u in r.json()], ["alice", "bob", "root"])
        for item in r.json():
            self.assertNotIn("password_hash", item)
        r = self.client.get(f"{PREFIX}/users", headers=self.auth_headers(self.alice))
        self.assertEqual(r.status_code, 403)

    def test_other_profile_forbidden(self) -> None:
        r = self.client.get(f"{PREFIX}/users/{self.bob.id}", headers=self.auth_headers(self.alice))
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["message"], "You can only view your own profile!")


class TestUpdateUserApi(UsersApiTestCase):
    def test_self_update_username(self) -> None:
        before_hash = self.alice.password_hash
        r = self.client.put(
            f"{PREFIX}/users/{self.alice.id}",
            json={"username": "alice2"},
            headers=self.auth_headers(self.alice),
        )
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["username"], "alice2")
        self.assertEqual(r.json()["email"], "alice@example.com")
        self.db.expire_all()
        self.assertEqual(self.db.get(User, self.alice.id).password_hash, before_hash)

    def test_update_to_taken_username_conflicts(self) -> None:
        r = self.client.put(
            f"{PREFIX}/users/{self.alice.id}",
            json={"username": "bob"},
            headers=self.auth_headers(self.alice),
        )
        self.assertEqual(r.status_code, 409)
        self.assertEqual(r.json()["message"], "Username already exists")

    def test_update_to_own_username_is_ok(self) -> None:
        r = self.client.put(
            f"{PREFIX}/users/{self.alice.id}",
            json={"username": "alice", "email": "alice@example.com", "password": ""},
            headers=self.auth_headers(self.alice),
        )
        self.assertEqual(r.status_code, 200)

    def test_short_non_empty_password_rejected(self) -> None:
        r = self.client.put(
            f"{PREFIX}/users/{self.alice.id}",
            json={"password": "short"},
            headers=self.auth_headers(self.alice),
        )
        self.assertEqual(r.status_code, 422)

    def test_cannot_update_someone_else(self) -> None:
        r = self.client.put(
            f"{PREFIX}/users/{self.bob.id}",
            json={"username": "hijacked"},
            headers=self.auth_headers(self.alice),
        )
        self.assertEqual(r.status_code, 403)
        self.assertEqual(r.json()["message"], "You can only update your own profile!")


class TestAdminUserManagementApi(UsersApiTestCase):
    def test_admin_creates_admin(self) -> None:
        r = self.client.post(
            f"{PREFIX}/users",
            json={"username": "ops", "email": "ops@example.com", "password": DEFAULT_PASSWORD, "role": "ADMIN"},
            headers=self.auth_headers(self.admin),
        )
        self.assertEqual(r.status_code, 201)
        self.assertEqual(set(r.json()), USER_FIELDS)
        created = self.db.query(User).filter(User.username == "ops").one()
        self.assertEqual(created.role, Role.ADMIN)

    def test_regular_user_cannot_create_users(self) -> None:
        r = self.client.post(
            f"{PREFIX}/users",
            json={"username": "ops", "email": "ops@example.com", "password": DEFAULT_PASSWORD},
            headers=self.auth_headers(self.alice),
        )
        self.assertEqual(r.status_code, 403)

    def test_admin_delete_cascades(self) -> None:
        alice_id = self.alice.id
        self.client.post(
            f"{PREFIX}/users/{self.alice.id}/tasks",
            json={"title": "Doomed"},
            headers=self.auth_headers(self.alice),
        )
        r = self.client.delete(f"{PREFIX}/users/{alice_id}", headers=self.auth_headers(self.admin))
        self.assertEqual(r.status_code, 204)
        self.db.expire_all()
        self.assertIsNone(self.db.get(User, alice_id))
        self.assertEqual(self.db.query(Task).count(), 0)

    def test_regular_user_cannot_delete_self(self) -> None:
        r = self.client.delete(f"{PREFIX}/users/{self.alice.id}", headers=self.auth_headers(self.alice))
        self.assertEqual(r.status_code, 403)

    def test_delete_missing_user(self) -> None:
        r = self.client.delete(f"{PREFIX}/users/4242", headers=self.auth_headers(self.admin))
        self.assertEqual(r.status_code, 404)
