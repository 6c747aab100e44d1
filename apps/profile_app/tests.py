from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.auth_app.models import User


class ProfileViewsTest(APITestCase):
    def setUp(self):
        self.tutor = User.objects.create_user(
            email="tutor@example.com", password="secret1", name="Tina Tutor", role=User.Role.TUTOR
        )
        self.other_tutor = User.objects.create_user(
            email="alan@example.com", password="secret1", name="Alan Tutor", role=User.Role.TUTOR,
            subjects=["Logic"],
        )
        self.student = User.objects.create_user(
            email="student@example.com", password="secret1", name="Sam Student", role=User.Role.STUDENT
        )

    def update(self, user, target, data):
        self.client.force_authenticate(user=user)
        return self.client.put(reverse("user-update", kwargs={"user_id": target.id}), data, format="json")

    def test_me_returns_current_user(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("profile"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["id"], str(self.student.id))
        self.assertEqual(response.data["role"], "student")

    def test_user_updates_own_subjects(self):
        response = self.update(self.tutor, self.tutor, {"subjects": [" Algebra", "Physics", "Algebra", ""]})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["subjects"], ["Algebra", "Physics"])
        self.tutor.refresh_from_db()
        self.assertEqual(self.tutor.subjects, ["Algebra", "Physics"])

    def test_user_updates_name_and_email(self):
        response = self.update(self.tutor, self.tutor, {"name": "Tina T.", "email": "TINA@example.com"})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Tina T.")
        self.assertEqual(response.data["email"], "tina@example.com")

    def test_blank_values_leave_fields_unchanged(self):
        response = self.update(self.tutor, self.tutor, {"name": "", "email": ""})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["name"], "Tina Tutor")
        self.assertEqual(response.data["email"], "tutor@example.com")

    def test_cannot_update_someone_else(self):
        response = self.update(self.student, self.tutor, {"name": "Hacked"})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.tutor.refresh_from_db()
        self.assertEqual(self.tutor.name, "Tina Tutor")

    def test_malformed_user_id_returns_json_404(self):
        self.client.force_authenticate(user=self.tutor)
        response = self.client.put(reverse("user-update", kwargs={"user_id": "not-a-uuid"}), {"name": "x"}, format="json")

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "User not found")

    def test_uppercase_own_id_is_accepted(self):
        self.client.force_authenticate(user=self.tutor)
        url = reverse("user-update", kwargs={"user_id": str(self.tutor.id).upper()})
        response = self.client.put(url, {"name": "Tina T."}, format="json")

        self.assertEqual(response.status_code, status.HTTP_200_OK)

    def test_email_must_stay_unique(self):
        response = self.update(self.tutor, self.tutor, {"email": "student@example.com"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_subjects_must_be_a_list_of_strings(self):
        response = self.update(self.tutor, self.tutor, {"subjects": "Algebra"})
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_tutor_list_contains_only_tutors_ordered_by_name(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("tutor-list"))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([t["name"] for t in response.data], ["Alan Tutor", "Tina Tutor"])
        self.assertEqual(response.data[0]["subjects"], ["Logic"])
        self.assertNotIn("role", response.data[0])
