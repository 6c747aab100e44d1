from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.auth_app.models import User


class RegisterViewTest(APITestCase):
    def setUp(self):
        self.url = reverse("register")
        self.valid_data = {
            "name": "Ada Lovelace",
            "email": "Ada@Example.com",
            "password": "secret1",
            "role": "tutor",
        }

    def test_register_returns_user_and_tokens(self):
        response = self.client.post(self.url, self.valid_data, format="json")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["user"]["email"], "ada@example.com")
        self.assertEqual(response.data["user"]["role"], "tutor")
        self.assertEqual(response.data["user"]["subjects"], [])
        self.assertIn("access", response.data)
        self.assertIn("refresh", response.data)
        self.assertTrue(User.objects.get(email="ada@example.com").check_password("secret1"))

    def test_duplicate_email_is_rejected(self):
        self.client.post(self.url, self.valid_data, format="json")
        response = self.client.post(self.url, {**self.valid_data, "email": "ada@example.com"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"]["email"], ["Email already registered"])

    def test_invalid_role_is_rejected(self):
        response = self.client.post(self.url, {**self.valid_data, "role": "admin"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("role", response.data["message"])

    def test_short_password_is_rejected(self):
        response = self.client.post(self.url, {**self.valid_data, "password": "12345"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn("password", response.data["message"])

    def test_missing_fields_are_rejected(self):
        response = self.client.post(self.url, {}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(set(response.data["message"]), {"name", "email", "password", "role"})


class LoginViewTest(APITestCase):
    def setUp(self):
        self.url = reverse("login")
        self.user = User.objects.create_user(
            email="student@example.com",
            password="secret1",
            name="Sam Student",
            role=User.Role.STUDENT,
        )

    def test_login_success(self):
        response = self.client.post(self.url, {"email": "Student@example.com", "password": "secret1"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["user"]["id"], str(self.user.id))
        self.assertIn("access", response.data)

    def test_wrong_password_returns_401(self):
        response = self.client.post(self.url, {"email": "student@example.com", "password": "nope"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["message"], "Invalid email or password")

    def test_unknown_email_returns_401(self):
        response = self.client.post(self.url, {"email": "ghost@example.com", "password": "secret1"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_fields_return_400(self):
        response = self.client.post(self.url, {"email": "student@example.com"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_access_token_authenticates_api_calls(self):
        login = self.client.post(self.url, {"email": "student@example.com", "password": "secret1"}, format="json")

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {login.data['access']}")
        response = self.client.get(reverse("profile"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["email"], "student@example.com")


class RefreshAndLogoutViewTest(APITestCase):
    def setUp(self):
        User.objects.create_user(
            email="tutor@example.com", password="secret1", name="Tina Tutor", role=User.Role.TUTOR
        )
        login = self.client.post(
            reverse("login"), {"email": "tutor@example.com", "password": "secret1"}, format="json"
        )
        self.refresh = login.data["refresh"]

    def test_refresh_returns_new_access_token(self):
        response = self.client.post(reverse("token-refresh"), {"refresh": self.refresh}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn("access", response.data)

    def test_invalid_refresh_token_returns_400(self):
        response = self.client.post(reverse("token-refresh"), {"refresh": "garbage"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_logout_blacklists_refresh_token(self):
        response = self.client.post(reverse("logout"), {"refresh": self.refresh}, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        response = self.client.post(reverse("token-refresh"), {"refresh": self.refresh}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
