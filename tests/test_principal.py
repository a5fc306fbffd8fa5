"""Unit tests for the Principal and GrantedAuthority value objects."""

import unittest

from userlookup.exceptions import (
    AmbiguousUserError,
    UserNotFoundError,
    format_exception_for_cli,
)
from userlookup.models import User
from userlookup.principal import GrantedAuthority, Principal, principal_from_user


class TestGrantedAuthority(unittest.TestCase):
    def test_equality_by_value(self) -> None:
        self.assertEqual(GrantedAuthority("ROLE_USER"), GrantedAuthority("ROLE_USER"))
        self.assertNotEqual(GrantedAuthority("ROLE_USER"), GrantedAuthority("USER"))
        self.assertEqual(
            len({GrantedAuthority("A"), GrantedAuthority("A"), GrantedAuthority("B")}),
            2,
        )

    def test_str_is_authority(self) -> None:
        self.assertEqual(str(GrantedAuthority("ROLE_ADMIN")), "ROLE_ADMIN")


class TestPrincipal(unittest.TestCase):
    def test_repr_hides_password(self) -> None:
        principal = Principal(username="alice", password="s3cret", enabled=True)
        self.assertNotIn("s3cret", repr(principal))
        self.assertIn("alice", repr(principal))

    def test_authority_helpers(self) -> None:
        principal = Principal(
            username="alice",
            password="x",
            enabled=True,
            authorities=(GrantedAuthority("ADMIN"), GrantedAuthority("USER")),
        )
        self.assertEqual(principal.authority_names, {"ADMIN", "USER"})
        self.assertTrue(principal.has_authority("ADMIN"))
        self.assertFalse(principal.has_authority("ROLE_ADMIN"))

    def test_principal_from_user_copies_fields(self) -> None:
        user = User(username="bob", email="bob@example.com", password="pw", enabled=1)
        principal = principal_from_user(user, [GrantedAuthority("USER")])
        self.assertEqual(principal.username, "bob")
        self.assertEqual(principal.email, "bob@example.com")
        self.assertIs(principal.enabled, True)
        self.assertEqual(principal.authorities, (GrantedAuthority("USER"),))

        user.username = "robert"
        self.assertEqual(principal.username, "bob")


class TestFormatException(unittest.TestCase):
    def test_lookup_errors(self) -> None:
        self.assertEqual(
            format_exception_for_cli(UserNotFoundError("ghost")),
            "[NOT_FOUND:USER] No user found with username 'ghost'.",
        )
        self.assertTrue(
            format_exception_for_cli(
                AmbiguousUserError("a@example.com", field="email")
            ).startswith("[AMBIGUOUS:USER]")
        )

    def test_other_errors(self) -> None:
        self.assertEqual(format_exception_for_cli(ValueError("bad")), "[ERROR] bad")
        self.assertEqual(
            format_exception_for_cli(KeyError("k")),
            "[UNEXPECTED ERROR] KeyError: 'k'",
        )


if __name__ == "__main__":
    unittest.main()
