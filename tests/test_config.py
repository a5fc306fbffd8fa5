"""Unit tests for LookupConfig validation and Settings."""

import unittest

from pydantic import ValidationError

from userlookup.config import (
    DEF_AUTHORITIES_BY_USERNAME_QUERY,
    DEF_USERS_BY_EMAIL_QUERY,
    DEF_USERS_BY_USERNAME_QUERY,
    LookupConfig,
    Settings,
)


class TestLookupConfigDefaults(unittest.TestCase):
    def test_defaults(self) -> None:
        config = LookupConfig()
        self.assertEqual(config.users_by_username_query, DEF_USERS_BY_USERNAME_QUERY)
        self.assertEqual(config.users_by_email_query, DEF_USERS_BY_EMAIL_QUERY)
        self.assertEqual(
            config.authorities_by_username_query, DEF_AUTHORITIES_BY_USERNAME_QUERY
        )
        self.assertEqual(config.role_prefix, "")
        self.assertTrue(config.username_based_primary_key)
        self.assertTrue(config.enable_authorities)
        self.assertFalse(config.enable_groups)

    def test_username_based_primary_key_is_kept(self) -> None:
        config = LookupConfig(username_based_primary_key=False)
        self.assertFalse(config.username_based_primary_key)


class TestLookupConfigValidation(unittest.TestCase):
    def test_is_frozen(self) -> None:
        config = LookupConfig()
        with self.assertRaises(ValidationError):
            config.role_prefix = "ROLE_"

    def test_unknown_field_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            LookupConfig(prefix="ROLE_")

    def test_username_query_needs_username_param(self) -> None:
        with self.assertRaises(ValidationError):
            LookupConfig(users_by_username_query="SELECT * FROM users WHERE id = :id")

    def test_email_query_needs_email_param(self) -> None:
        with self.assertRaises(ValidationError):
            LookupConfig(
                users_by_email_query="SELECT * FROM users WHERE email = :username"
            )

    def test_empty_query_rejected(self) -> None:
        with self.assertRaises(ValidationError):
            LookupConfig(authorities_by_username_query="   ")

    def test_longer_param_name_does_not_count(self) -> None:
        with self.assertRaises(ValidationError):
            LookupConfig(
                authorities_by_username_query=(
                    "SELECT * FROM authorities WHERE username = :usernames"
                )
            )

    def test_query_is_stripped(self) -> None:
        config = LookupConfig(
            users_by_username_query="  " + DEF_USERS_BY_USERNAME_QUERY + "\n"
        )
        self.assertEqual(config.users_by_username_query, DEF_USERS_BY_USERNAME_QUERY)

    def test_an_authority_source_is_required(self) -> None:
        with self.assertRaises(ValidationError):
            LookupConfig(enable_authorities=False, enable_groups=False)


class TestSettings(unittest.TestCase):
    def test_lookup_config_uses_settings(self) -> None:
        settings = Settings(ROLE_PREFIX="ROLE_", ENABLE_GROUPS=True)
        config = settings.lookup_config()
        self.assertEqual(config.role_prefix, "ROLE_")
        self.assertTrue(config.enable_groups)

    def test_lookup_config_overrides(self) -> None:
        settings = Settings(ROLE_PREFIX="ROLE_")
        config = settings.lookup_config(role_prefix="", enable_groups=False)
        self.assertEqual(config.role_prefix, "")
        self.assertFalse(config.enable_groups)


if __name__ == "__main__":
    unittest.main()
