"""Unit tests for the access-control policy and role-set rules."""

import unittest

from notes_api.core.exceptions import AccessDeniedError, InvalidRoleError
from notes_api.models import Role
from notes_api.services import authorization as policy
from support import current_user


class TestReadAndWritePredicates(unittest.TestCase):
    def test_owner_can_read_and_mutate_own(self) -> None:
        user = current_user(1)
        self.assertTrue(policy.can_read(user, 1))
        self.assertTrue(policy.can_mutate(user, 1))
        self.assertFalse(policy.can_read(user, 2))
        self.assertFalse(policy.can_mutate(user, 2))

    def test_admin_can_do_everything(self) -> None:
        admin = current_user(1, Role.BASE, Role.ADMIN)
        self.assertTrue(policy.is_admin(admin))
        self.assertTrue(policy.can_read_all(admin))
        self.assertTrue(policy.can_read(admin, 99))
        self.assertTrue(policy.can_mutate(admin, 99))
        self.assertTrue(policy.can_mutate(admin, None))

    def test_manager_reads_all_but_writes_own(self) -> None:
        manager = current_user(5, Role.MANAGER)
        self.assertTrue(policy.can_read_all(manager))
        self.assertTrue(policy.can_read(manager, 99))
        self.assertFalse(policy.can_mutate(manager, 99))
        self.assertTrue(policy.can_mutate(manager, 5))
        self.assertTrue(policy.can_create(manager))

    def test_viewer_is_read_only(self) -> None:
        viewer = current_user(3, Role.VIEWER)
        self.assertFalse(policy.can_read_all(viewer))
        self.assertFalse(policy.can_create(viewer))
        with self.assertRaises(AccessDeniedError):
            policy.ensure_can_create(viewer)

    def test_orphaned_resource_is_admin_only(self) -> None:
        self.assertFalse(policy.can_mutate(current_user(1), None))
        self.assertFalse(policy.can_mutate(current_user(1, Role.MANAGER), None))
        self.assertFalse(policy.can_read(current_user(1), None))
        self.assertTrue(policy.can_read(current_user(1, Role.MANAGER), None))

    def test_ensure_helpers_raise_access_denied(self) -> None:
        user = current_user(1)
        with self.assertRaises(AccessDeniedError):
            policy.ensure_admin(user)
        with self.assertRaises(AccessDeniedError):
            policy.ensure_can_read_all(user)
        with self.assertRaises(AccessDeniedError):
            policy.ensure_can_read(user, 2)
        with self.assertRaises(AccessDeniedError):
            policy.ensure_can_mutate(user, 2)
        with self.assertRaises(AccessDeniedError):
            policy.ensure_admin_or_owner(user, 2)
        policy.ensure_admin_or_owner(user, 1)

    def test_admin_message(self) -> None:
        with self.assertRaises(AccessDeniedError) as ctx:
            policy.ensure_admin(current_user(1))
        self.assertEqual(ctx.exception.message, "Admin access required")


class TestIsOwner(unittest.TestCase):
    """is_owner never raises, whatever it is given."""

    def test_matches_caller(self) -> None:
        self.assertTrue(policy.is_owner(current_user(7), 7))
        self.assertFalse(policy.is_owner(current_user(7), 8))

    def test_anonymous_or_missing_account(self) -> None:
        self.assertFalse(policy.is_owner(None, 7))
        self.assertFalse(policy.is_owner(current_user(7), None))

    def test_non_numeric_account_id(self) -> None:
        self.assertFalse(policy.is_owner(current_user(7), "abc"))  # type: ignore[arg-type]


class TestParseRole(unittest.TestCase):
    def test_known_role(self) -> None:
        self.assertIs(policy.parse_role("ROLE_MANAGER"), Role.MANAGER)

    def test_unknown_role_lists_valid_roles(self) -> None:
        with self.assertRaises(InvalidRoleError) as ctx:
            policy.parse_role("ROLE_SUPERUSER")
        self.assertEqual(
            ctx.exception.message,
            "Invalid role: ROLE_SUPERUSER. Valid roles are: "
            "ROLE_USER, ROLE_ADMIN, ROLE_MANAGER, ROLE_VIEWER",
        )

    def test_names_are_case_sensitive(self) -> None:
        with self.assertRaises(InvalidRoleError):
            policy.parse_role("role_admin")


class TestRoleSetRules(unittest.TestCase):
    """Role mutations never leave an account without a role."""

    def test_add_role_keeps_existing(self) -> None:
        self.assertEqual(
            policy.add_role({"ROLE_USER"}, "ROLE_ADMIN"),
            {Role.BASE, Role.ADMIN},
        )

    def test_add_held_role_is_idempotent(self) -> None:
        self.assertEqual(policy.add_role({"ROLE_USER"}, "ROLE_USER"), {Role.BASE})

    def test_remove_role(self) -> None:
        self.assertEqual(
            policy.remove_role({"ROLE_USER", "ROLE_ADMIN"}, "ROLE_ADMIN"),
            {Role.BASE},
        )

    def test_remove_only_base_role_rejected(self) -> None:
        with self.assertRaises(InvalidRoleError) as ctx:
            policy.remove_role({"ROLE_USER"}, "ROLE_USER")
        self.assertEqual(
            ctx.exception.message,
            "Cannot remove ROLE_USER when it's the only role. User must have at least one role.",
        )

    def test_remove_last_non_base_role_falls_back_to_base(self) -> None:
        self.assertEqual(policy.remove_role({"ROLE_ADMIN"}, "ROLE_ADMIN"), {Role.BASE})

    def test_remove_unheld_role_is_noop(self) -> None:
        self.assertEqual(policy.remove_role({"ROLE_USER"}, "ROLE_VIEWER"), {Role.BASE})

    def test_remove_unknown_role_rejected(self) -> None:
        with self.assertRaises(InvalidRoleError):
            policy.remove_role({"ROLE_USER"}, "ROLE_NOPE")

    def test_replace_roles(self) -> None:
        self.assertEqual(
            policy.replace_roles(["ROLE_MANAGER", "ROLE_VIEWER"]),
            {Role.MANAGER, Role.VIEWER},
        )

    def test_replace_with_empty_falls_back_to_base(self) -> None:
        self.assertEqual(policy.replace_roles([]), {Role.BASE})

    def test_replace_with_unknown_role_rejected(self) -> None:
        with self.assertRaises(InvalidRoleError):
            policy.replace_roles(["ROLE_USER", "ROLE_GOD"])


if __name__ == "__main__":
    unittest.main()
