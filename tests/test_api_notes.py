"""HTTP tests for /notes: ownership, role-based reads and validation."""

import unittest

from fastapi.testclient import TestClient

from notes_api.main import app
from notes_api.models import Role
from support import API, bearer, create_note, create_user, login, reset_database


class ApiNotesTestCase(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()
        self.client = TestClient(app)
        self.alice_id = create_user("alice@example.com", name="Alice")
        self.bob_id = create_user("bob@example.com", name="Bob")
        self.alice = bearer(login(self.client, "alice@example.com")["accessToken"])
        self.bob = bearer(login(self.client, "bob@example.com")["accessToken"])

    def _user(self, email: str, *roles: Role) -> dict[str, str]:
        create_user(email, roles=roles)
        return bearer(login(self.client, email)["accessToken"])


class TestCreateAndRead(ApiNotesTestCase):
    def test_create_note_owned_by_caller(self) -> None:
        response = self.client.post(
            f"{API}/notes", headers=self.alice, json={"title": "Groceries", "content": "Milk"}
        )
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["ownerId"], self.alice_id)
        self.assertEqual(body["title"], "Groceries")
        self.assertIn("createdAt", body)

        fetched = self.client.get(f"{API}/notes/{body['id']}", headers=self.alice)
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["content"], "Milk")

    def test_create_requires_authentication(self) -> None:
        response = self.client.post(f"{API}/notes", json={"title": "t", "content": "c"})
        self.assertEqual(response.status_code, 401)

    def test_validation_errors_are_reported_per_field(self) -> None:
        response = self.client.post(f"{API}/notes", headers=self.alice, json={"title": "  "})
        self.assertEqual(response.status_code, 400)
        errors = response.json()["validationErrors"]
        self.assertEqual(errors["title"], ["Field 'title' cannot be empty or blank"])
        self.assertEqual(
            errors["content"],
            ["Field 'content' is required and must be provided in the request body"],
        )

    def test_other_users_note_is_forbidden(self) -> None:
        note_id = create_note(self.alice_id)
        self.assertEqual(self.client.get(f"{API}/notes/{note_id}", headers=self.bob).status_code, 403)

    def test_unknown_note(self) -> None:
        response = self.client.get(f"{API}/notes/9999", headers=self.alice)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()["message"], "Note not found with id: 9999")

    def test_my_notes_with_title_filter(self) -> None:
        create_note(self.alice_id, title="Shopping list")
        create_note(self.alice_id, title="Work")
        create_note(self.bob_id, title="Shopping for Bob")

        mine = self.client.get(f"{API}/notes/me", headers=self.alice).json()
        self.assertEqual({n["title"] for n in mine}, {"Shopping list", "Work"})

        filtered = self.client.get(f"{API}/notes/me", headers=self.alice, params={"title": "shop"}).json()
        self.assertEqual([n["title"] for n in filtered], ["Shopping list"])

    def test_title_filter_matches_wildcards_literally(self) -> None:
        create_note(self.alice_id, title="50% off")
        create_note(self.alice_id, title="snake_case")
        create_note(self.alice_id, title="plain")
        manager = self._user("manager@example.com", Role.MANAGER)
        for term, expected in (("%", ["50% off"]), ("_", ["snake_case"]), ("e_c", ["snake_case"])):
            with self.subTest(term=term):
                mine = self.client.get(f"{API}/notes/me", headers=self.alice, params={"title": term}).json()
                self.assertEqual([n["title"] for n in mine], expected)
                every = self.client.get(f"{API}/notes", headers=manager, params={"title": term}).json()
                self.assertEqual([n["title"] for n in every], expected)


class TestReadAll(ApiNotesTestCase):
    def test_list_all_requires_manager_or_admin(self) -> None:
        create_note(self.alice_id)
        create_note(self.bob_id)
        self.assertEqual(self.client.get(f"{API}/notes", headers=self.alice).status_code, 403)

        manager = self._user("manager@example.com", Role.MANAGER)
        response = self.client.get(f"{API}/notes", headers=manager)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(len(response.json()), 2)

        admin = self._user("admin@example.com", Role.BASE, Role.ADMIN)
        self.assertEqual(len(self.client.get(f"{API}/notes", headers=admin).json()), 2)

    def test_manager_reads_but_cannot_modify_others(self) -> None:
        note_id = create_note(self.alice_id)
        manager = self._user("manager@example.com", Role.MANAGER)
        self.assertEqual(self.client.get(f"{API}/notes/{note_id}", headers=manager).status_code, 200)
        self.assertEqual(
            self.client.patch(f"{API}/notes/{note_id}", headers=manager, json={"title": "x"}).status_code,
            403,
        )
        self.assertEqual(self.client.delete(f"{API}/notes/{note_id}", headers=manager).status_code, 403)

    def test_viewer_cannot_create(self) -> None:
        viewer = self._user("viewer@example.com", Role.VIEWER)
        response = self.client.post(f"{API}/notes", headers=viewer, json={"title": "t", "content": "c"})
        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.client.get(f"{API}/notes/me", headers=viewer).json(), [])


class TestUpdateAndDelete(ApiNotesTestCase):
    def test_owner_updates_partially(self) -> None:
        note_id = create_note(self.alice_id, title="Old", content="Body")
        response = self.client.patch(f"{API}/notes/{note_id}", headers=self.alice, json={"title": "New"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["title"], "New")
        self.assertEqual(response.json()["content"], "Body")

    def test_non_owner_cannot_update_or_delete(self) -> None:
        note_id = create_note(self.alice_id)
        self.assertEqual(
            self.client.patch(f"{API}/notes/{note_id}", headers=self.bob, json={"title": "x"}).status_code,
            403,
        )
        self.assertEqual(self.client.delete(f"{API}/notes/{note_id}", headers=self.bob).status_code, 403)

    def test_owner_deletes(self) -> None:
        note_id = create_note(self.alice_id)
        self.assertEqual(self.client.delete(f"{API}/notes/{note_id}", headers=self.alice).status_code, 204)
        self.assertEqual(self.client.get(f"{API}/notes/{note_id}", headers=self.alice).status_code, 404)

    def test_admin_modifies_any_note(self) -> None:
        note_id = create_note(self.alice_id)
        admin = self._user("admin@example.com", Role.BASE, Role.ADMIN)
        response = self.client.patch(f"{API}/notes/{note_id}", headers=admin, json={"content": "edited"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["ownerId"], self.alice_id)


class TestOrphanedNotes(ApiNotesTestCase):
    def test_deleting_owner_orphans_notes(self) -> None:
        note_id = create_note(self.bob_id)
        admin = self._user("admin@example.com", Role.BASE, Role.ADMIN)
        self.assertEqual(self.client.delete(f"{API}/users/{self.bob_id}", headers=admin).status_code, 204)

        note = self.client.get(f"{API}/notes/{note_id}", headers=admin)
        self.assertEqual(note.status_code, 200)
        self.assertIsNone(note.json()["ownerId"])

    def test_orphan_is_admin_only_for_writes(self) -> None:
        note_id = create_note(None)
        manager = self._user("manager@example.com", Role.MANAGER)
        admin = self._user("admin@example.com", Role.BASE, Role.ADMIN)

        self.assertEqual(self.client.get(f"{API}/notes/{note_id}", headers=self.alice).status_code, 403)
        self.assertEqual(self.client.get(f"{API}/notes/{note_id}", headers=manager).status_code, 200)
        self.assertEqual(self.client.delete(f"{API}/notes/{note_id}", headers=manager).status_code, 403)
        self.assertEqual(self.client.delete(f"{API}/notes/{note_id}", headers=admin).status_code, 204)


if __name__ == "__main__":
    unittest.main()
