from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()


class UserAccountTests(TestCase):
    """
    GUARANTEES:
    - Self-registration always yields a shopper
    - Login returns a JWT pair usable on /me
    """

    def setUp(self):
        self.client = APIClient()

    def test_create_user_normalises_email_and_defaults_role(self):
        user = User.objects.create_user(email="Ada@Example.COM", password="pass12345")

        self.assertEqual(user.email, "Ada@example.com")
        self.assertEqual(user.role, User.ROLE_USER)
        self.assertFalse(user.is_admin)

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email="", password="x")

    def test_create_superuser_is_admin(self):
        user = User.objects.create_superuser(email="root@example.com", password="pass12345")

        self.assertTrue(user.is_admin)
        self.assertTrue(user.is_staff)
        self.assertTrue(user.is_superuser)

    def test_register_ignores_role_and_returns_profile(self):
        res = self.client.post(
            "/api/auth/register/",
            {
                "email": "new@example.com",
                "name": "New Shopper",
                "password": "a-long-Passw0rd!",
                "role": "admin",
            },
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(res.data["role"], "user")
        self.assertEqual(User.objects.get(email="new@example.com").role, "user")

    def test_register_rejects_duplicate_email(self):
        User.objects.create_user(email="dup@example.com", password="pass12345")

        res = self.client.post(
            "/api/auth/register/",
            {"email": "DUP@example.com", "password": "a-long-Passw0rd!"},
            format="json",
        )

        self.assertEqual(res.status_code, 400)

    def test_login_then_me(self):
        User.objects.create_user(email="me@example.com", password="pass12345", name="Me")

        res = self.client.post(
            "/api/auth/login/",
            {"email": "me@example.com", "password": "pass12345"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)
        self.assertIn("access", res.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {res.data['access']}")
        me = self.client.get("/api/auth/me/")

        self.assertEqual(me.status_code, 200)
        self.assertEqual(me.data["email"], "me@example.com")
        self.assertEqual(me.data["name"], "Me")

    def test_login_with_wrong_password_is_401(self):
        User.objects.create_user(email="me@example.com", password="pass12345")

        res = self.client.post(
            "/api/auth/login/",
            {"email": "me@example.com", "password": "nope"},
            format="json",
        )

        self.assertEqual(res.status_code, 401)

