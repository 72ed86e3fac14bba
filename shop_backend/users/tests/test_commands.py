# users/tests/test_commands.py

from io import StringIO
from unittest import mock

from django.contrib.auth import get_user_model
from django.core.management import call_command
from django.test import TestCase

User = get_user_model()


class EnsureSuperuserTests(TestCase):
    def _run(self, **env):
        with mock.patch.dict("os.environ", env, clear=False):
            out = StringIO()
            call_command("ensure_superuser", stdout=out)
        return out.getvalue()

    def test_skips_without_env(self):
        with mock.patch.dict("os.environ", {"AUTO_ADMIN_EMAIL": "", "AUTO_ADMIN_PASSWORD": ""}):
            out = StringIO()
            call_command("ensure_superuser", stdout=out)

        self.assertIn("Skipping", out.getvalue())
        self.assertFalse(User.objects.exists())

    def test_creates_then_promotes(self):
        self._run(AUTO_ADMIN_EMAIL="boss@example.com", AUTO_ADMIN_PASSWORD="s3cret-pass")

        admin = User.objects.get(email="boss@example.com")
        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.is_superuser)

        admin.role = User.ROLE_USER
        admin.save()

        out = self._run(AUTO_ADMIN_EMAIL="boss@example.com", AUTO_ADMIN_PASSWORD="new-pass-123")

        admin.refresh_from_db()
        self.assertIn("updated", out)
        self.assertEqual(admin.role, User.ROLE_ADMIN)
        self.assertTrue(admin.check_password("new-pass-123"))
        self.assertNotIn("new-pass-123", out)


class SeedUsersTests(TestCase):
    def test_one_account_per_role_and_idempotent(self):
        call_command("seed_users", stdout=StringIO())
        call_command("seed_users", stdout=StringIO())

        self.assertEqual(
            dict(User.objects.values_list("email", "role")),
            {
                "admin@example.com": "admin",
                "manager@example.com": "manager",
                "shopper@example.com": "user",
            },
        )
        self.assertTrue(User.objects.get(email="shopper@example.com").check_password("Pass1234!"))
