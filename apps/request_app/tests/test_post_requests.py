import uuid
from unittest import mock

from django.urls import reverse
from rest_framework import status

from apps.request_app.models import TeachRequest, TeachRequestQuerySet
from apps.request_app.tests.base import MatchingAPITestCase


class CreatePostRequestViewTest(MatchingAPITestCase):
    def test_tutor_requests_to_teach_post(self):
        response = self.request_to_teach(self.tutor, self.post)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["postId"], str(self.post.id))
        self.assertNotIn("subject", response.data)
        self.assertEqual(response.data["tutorId"], str(self.tutor.id))
        self.assertEqual(response.data["tutorName"], "Tina Tutor")
        self.assertEqual(response.data["studentId"], str(self.student.id))
        self.assertEqual(response.data["studentName"], "Sam Student")
        self.assertEqual(response.data["status"], "pending")
        self.assertIn("createdAt", response.data)
        self.assertTrue(TeachRequest.objects.filter(id=response.data["id"], kind=TeachRequest.Kind.POST).exists())

    def test_missing_post_returns_404(self):
        self.client.force_authenticate(user=self.tutor)
        url = reverse("post-requests", kwargs={"post_id": uuid.uuid4()})
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Post not found")
        self.assertEqual(response.data["error"], "Not Found")
        self.assertEqual(response.data["path"], url)

    def test_missing_post_wins_over_role_check(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.post(reverse("post-requests", kwargs={"post_id": uuid.uuid4()}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_malformed_post_id_returns_json_404(self):
        self.client.force_authenticate(user=self.tutor)
        url = reverse("post-requests", kwargs={"post_id": "not-a-uuid"})
        response = self.client.post(url)

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response["Content-Type"], "application/json")
        self.assertEqual(response.data["message"], "Post not found")
        self.assertEqual(response.data["path"], url)

    def test_student_cannot_request_to_teach(self):
        response = self.request_to_teach(self.other_student, self.post)

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertEqual(response.data["message"], "Only tutors can request to teach")
        self.assertFalse(TeachRequest.objects.exists())

    def test_post_author_cannot_request_own_post(self):
        # Role is only checked at creation time, so the author may have become a tutor since.
        self.student.role = self.student.Role.TUTOR
        self.student.save()

        response = self.request_to_teach(self.student, self.post)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "You cannot request to teach your own post")

    def test_duplicate_pending_request_returns_409(self):
        first = self.request_to_teach(self.tutor, self.post)
        self.assertEqual(first.status_code, status.HTTP_201_CREATED)

        second = self.request_to_teach(self.tutor, self.post)

        self.assertEqual(second.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(second.data["message"], "You already have a pending request for this post")
        self.assertEqual(TeachRequest.objects.get(id=first.data["id"]).status, TeachRequest.Status.PENDING)
        self.assertEqual(TeachRequest.objects.count(), 1)

    def test_duplicate_that_passes_the_pre_check_still_returns_409(self):
        self.request_to_teach(self.tutor, self.post)

        with mock.patch.object(TeachRequestQuerySet, "exists", return_value=False):
            response = self.request_to_teach(self.tutor, self.post)

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], "You already have a pending request for this post")
        self.assertEqual(TeachRequest.objects.filter(post=self.post, tutor=self.tutor).count(), 1)

    def test_other_tutor_can_request_same_post(self):
        self.request_to_teach(self.tutor, self.post)
        response = self.request_to_teach(self.other_tutor, self.post)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_new_request_allowed_after_previous_was_decided(self):
        first = self.request_to_teach(self.tutor, self.post)
        self.decide(self.student, first.data["id"], "rejected")

        response = self.request_to_teach(self.tutor, self.post)

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertNotEqual(response.data["id"], first.data["id"])

    def test_unauthenticated_returns_401(self):
        response = self.client.post(reverse("post-requests", kwargs={"post_id": self.post.id}))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data["status"], 401)


class PostRequestsListViewTest(MatchingAPITestCase):
    def test_owner_sees_requests_newest_first(self):
        first = self.request_to_teach(self.tutor, self.post)
        second = self.request_to_teach(self.other_tutor, self.post)

        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("post-requests", kwargs={"post_id": self.post.id}))

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in response.data], [second.data["id"], first.data["id"]])

    def test_only_requests_for_this_post_are_listed(self):
        other_post = self.make_post(self.student, title="Another topic")
        self.request_to_teach(self.tutor, self.post)
        self.request_to_teach(self.tutor, other_post)

        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("post-requests", kwargs={"post_id": other_post.id}))

        self.assertEqual(len(response.data), 1)
        self.assertEqual(response.data[0]["postId"], str(other_post.id))

    def test_non_owner_gets_403(self):
        self.request_to_teach(self.tutor, self.post)

        for user in (self.other_student, self.tutor):
            self.client.force_authenticate(user=user)
            response = self.client.get(reverse("post-requests", kwargs={"post_id": self.post.id}))
            self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
            self.assertEqual(response.data["message"], "Only the post owner can view requests")

    def test_missing_post_returns_404(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("post-requests", kwargs={"post_id": uuid.uuid4()}))
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_malformed_post_id_returns_json_404(self):
        self.client.force_authenticate(user=self.student)
        response = self.client.get(reverse("post-requests", kwargs={"post_id": "12345"}))

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Post not found")
