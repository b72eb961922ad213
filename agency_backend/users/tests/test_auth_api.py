# users/tests/test_auth_api.py

from django.contrib.auth import get_user_model
from django.test import TestCase
from rest_framework.test import APIClient

User = get_user_model()


class AuthApiTests(TestCase):
    def setUp(self):
        self.client = APIClient()
        self.user = User.objects.create_user(
            email="agent@example.com",
            username="agent",
            password="S3cure-pass!",
            role="agent",
        )

    def test_login_with_email_returns_tokens(self):
        res = self.client.post(
            "/api/auth/login/",
            {"identifier": "agent@example.com", "password": "S3cure-pass!"},
            format="json",
        )

        self.assertEqual(res.status_code, 200)
        self.assertTrue(res.data["success"])
        self.assertIn("access", res.data)
        self.assertEqual(res.data["user"]["role"], "agent")

    def test_login_with_username(self):
        res = self.client.post(
            "/api/auth/login/",
            {"identifier": "agent", "password": "S3cure-pass!"},
            format="json",
        )
        self.assertEqual(res.status_code, 200)

    def test_bad_credentials_rejected(self):
        res = self.client.post(
            "/api/auth/login/",
            {"identifier": "agent", "password": "wrong"},
            format="json",
        )

        self.assertEqual(res.status_code, 401)
        self.assertFalse(res.data["success"])

    def test_me_requires_authentication(self):
        self.assertEqual(self.client.get("/api/auth/me/").status_code, 401)

        self.client.force_authenticate(self.user)
        res = self.client.get("/api/auth/me/")

        self.assertEqual(res.status_code, 200)
        self.assertEqual(res.data["email"], "agent@example.com")

    def test_register_creates_agent(self):
        res = self.client.post(
            "/api/auth/register/",
            {"email": "new@example.com", "password": "An0ther-pass!", "first_name": "New"},
            format="json",
        )

        self.assertEqual(res.status_code, 201)
        self.assertEqual(User.objects.get(email="new@example.com").role, "agent")
