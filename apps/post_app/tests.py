import uuid

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.auth_app.models import User
from apps.post_app.models import Post
from apps.request_app.models import TeachRequest


class PostViewsTest(APITestCase):
    def setUp(self):
        self.student = User.objects.create_user(
            email="student@example.com", password="secret1", name="Sam Student", role=User.Role.STUDENT
        )
        self.other_student = User.objects.create_user(
            email="other@example.com", password="secret1", name="Olga Student", role=User.Role.STUDENT
        )
        self.tutor = User.objects.create_user(
            email="tutor@example.com", password="secret1", name="Tina Tutor", role=User.Role.TUTOR
        )
        self.list_url = reverse("post-list")
        self.valid_data = {
            "title": "Quadratic equations",
            "subject": "Math",
            "description": "I keep mixing up the formula.",
            "level": "beginner",
        }

    def create_post(self, user=None, **overrides):
        self.client.force_authenticate(user=user or self.student)
        return self.client.post(self.list_url, {**self.valid_data, **overrides}, format="json")

    def test_student_creates_post(self):
        response = self.create_post()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["title"], "Quadratic equations")
        self.assertEqual(response.data["studentId"], str(self.student.id))
        self.assertEqual(response.data["studentName"], "Sam Student")
        self.assertEqual(response.data["level"], "beginner")

    def test_tutor_cannot_create_post(self):
        response = self.create_post(user=self.tutor)
        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertFalse(Post.objects.exists())

    def test_invalid_level_returns_400(self):
        response = self.create_post(level="expert")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"]["level"], ["Invalid level"])

    def test_missing_fields_return_400(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post(self.list_url, {"title": "Only a title"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_list_posts_newest_first(self):
        first = self.create_post(title="First")
        second = self.create_post(user=self.other_student, title="Second")

        self.client.force_authenticate(user=self.tutor)
        response = self.client.get(self.list_url)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([p["id"] for p in response.data], [second.data["id"], first.data["id"]])

    def test_list_requires_authentication(self):
        response = self.client.get(self.list_url)
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_owner_updates_post_partially(self):
        post_id = self.create_post().data["id"]

        response = self.client.put(
            reverse("post-detail", kwargs={"post_id": post_id}),
            {"title": "Quadratics, again", "description": "", "level": "intermediate"},
            format="json",
        )

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["title"], "Quadratics, again")
        self.assertEqual(response.data["description"], "I keep mixing up the formula.")
        self.assertEqual(response.data["level"], "intermediate")

    def test_update_with_invalid_level_returns_400(self):
        post_id = self.create_post().data["id"]
        response = self.client.put(
            reverse("post-detail", kwargs={"post_id": post_id}), {"level": "expert"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_non_owner_cannot_update_or_delete(self):
        post_id = self.create_post().data["id"]
        url = reverse("post-detail", kwargs={"post_id": post_id})

        self.client.force_authenticate(user=self.other_student)
        self.assertEqual(self.client.put(url, {"title": "Hijacked"}, format="json").status_code,
                         status.HTTP_403_FORBIDDEN)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(Post.objects.get(id=post_id).title, "Quadratic equations")

    def test_missing_post_returns_404(self):
        self.client.force_authenticate(user=self.student)
        url = reverse("post-detail", kwargs={"post_id": uuid.uuid4()})
        self.assertEqual(self.client.put(url, {"title": "x"}, format="json").status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(self.client.delete(url).status_code, status.HTTP_404_NOT_FOUND)

    def test_malformed_post_id_returns_json_404(self):
        self.client.force_authenticate(user=self.student)
        url = reverse("post-detail", kwargs={"post_id": "not-a-uuid"})

        for response in (self.client.put(url, {"title": "x"}, format="json"), self.client.delete(url)):
            self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
            self.assertEqual(response["Content-Type"], "application/json")
            self.assertEqual(response.data["message"], "Post not found")
            self.assertEqual(response.data["path"], url)

    def test_owner_deletes_post_and_requests_survive(self):
        post = Post.objects.get(id=self.create_post().data["id"])
        teach_request = TeachRequest.for_post(post, self.tutor)
        teach_request.save()

        self.client.force_authenticate(user=self.student)
        response = self.client.delete(reverse("post-detail", kwargs={"post_id": post.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data["message"], "Post deleted successfully")
        self.assertFalse(Post.objects.filter(id=post.id).exists())
        self.assertTrue(TeachRequest.objects.filter(id=teach_request.id).exists())
