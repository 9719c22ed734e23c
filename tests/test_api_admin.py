"""HTTP tests for /admin role management."""

import unittest

from fastapi.testclient import TestClient

from notes_api.main import app
from notes_api.models import Role
from support import API, bearer, create_user, login, reset_database


class ApiAdminTestCase(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()
        self.client = TestClient(app)
        self.user_id = create_user("alice@example.com")
        create_user("admin@example.com", roles=(Role.BASE, Role.ADMIN))
        self.admin = bearer(login(self.client, "admin@example.com")["accessToken"])
        self.alice = bearer(login(self.client, "alice@example.com")["accessToken"])

    def roles_url(self, *parts: str, user_id: int | None = None) -> str:
        return "/".join([f"{API}/admin/users/{user_id or self.user_id}/roles", *parts])


class TestAddAndRemoveRole(ApiAdminTestCase):
    def test_add_then_remove_admin(self) -> None:
        added = self.client.post(self.roles_url("ROLE_ADMIN"), headers=self.admin)
        self.assertEqual(added.status_code, 200)
        self.assertEqual(added.json()["roles"], ["ROLE_ADMIN", "ROLE_USER"])
        # The promotion is effective immediately for the existing token.
        self.assertEqual(self.client.get(f"{API}/users", headers=self.alice).status_code, 200)

        removed = self.client.delete(self.roles_url("ROLE_ADMIN"), headers=self.admin)
        self.assertEqual(removed.status_code, 200)
        self.assertEqual(removed.json()["roles"], ["ROLE_USER"])
        self.assertEqual(self.client.get(f"{API}/users", headers=self.alice).status_code, 403)

    def test_removing_sole_base_role_rejected(self) -> None:
        response = self.client.delete(self.roles_url("ROLE_USER"), headers=self.admin)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"],
            "Cannot remove ROLE_USER when it's the only role. User must have at least one role.",
        )

    def test_removing_last_other_role_restores_base(self) -> None:
        self.client.put(self.roles_url(), headers=self.admin, json={"roles": ["ROLE_VIEWER"]})
        response = self.client.delete(self.roles_url("ROLE_VIEWER"), headers=self.admin)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["roles"], ["ROLE_USER"])

    def test_invalid_role_name(self) -> None:
        response = self.client.post(self.roles_url("ROLE_SUPERUSER"), headers=self.admin)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["message"],
            "Invalid role: ROLE_SUPERUSER. Valid roles are: "
            "ROLE_USER, ROLE_ADMIN, ROLE_MANAGER, ROLE_VIEWER",
        )


class TestReplaceRoles(ApiAdminTestCase):
    def test_replace(self) -> None:
        response = self.client.put(
            self.roles_url(), headers=self.admin, json={"roles": ["ROLE_MANAGER", "ROLE_USER"]}
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["roles"], ["ROLE_MANAGER", "ROLE_USER"])

    def test_replace_with_empty_list_keeps_base(self) -> None:
        response = self.client.put(self.roles_url(), headers=self.admin, json={"roles": []})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["roles"], ["ROLE_USER"])

    def test_replace_with_unknown_role_changes_nothing(self) -> None:
        response = self.client.put(
            self.roles_url(), headers=self.admin, json={"roles": ["ROLE_MANAGER", "ROLE_NOPE"]}
        )
        self.assertEqual(response.status_code, 400)
        user = self.client.get(f"{API}/users/{self.user_id}", headers=self.admin).json()
        self.assertEqual(user["roles"], ["ROLE_USER"])


class TestAdminGuard(ApiAdminTestCase):
    def test_non_admin_forbidden(self) -> None:
        response = self.client.post(self.roles_url("ROLE_ADMIN"), headers=self.alice)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()["message"], "Admin access required")

    def test_anonymous_unauthorized(self) -> None:
        self.assertEqual(self.client.post(self.roles_url("ROLE_ADMIN")).status_code, 401)

    def test_unknown_user(self) -> None:
        response = self.client.post(self.roles_url("ROLE_ADMIN", user_id=9999), headers=self.admin)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "User not found with id: 9999")


if __name__ == "__main__":
    unittest.main()
