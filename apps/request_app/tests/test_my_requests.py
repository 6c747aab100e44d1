import uuid

from django.urls import reverse
from rest_framework import status

from apps.request_app.models import TeachRequest
from apps.request_app.tests.base import MatchingAPITestCase


class MyRequestsViewTest(MatchingAPITestCase):
    def test_requests_are_split_into_sent_and_received(self):
        sent = self.request_to_teach(self.tutor, self.post).data
        received = self.request_to_learn(self.student, self.tutor.id, "Algebra").data

        response = self.my_requests(self.tutor)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual([r["id"] for r in response.data["sent"]], [sent["id"]])
        self.assertEqual([r["id"] for r in response.data["received"]], [received["id"]])
        self.assertEqual(response.data["sent"][0]["postTitle"], "Need help with limits")
        self.assertNotIn("postTitle", response.data["received"][0])
        self.assertEqual(response.data["received"][0]["subject"], "Algebra")

    def test_every_request_lands_in_exactly_one_list(self):
        other_post = self.make_post(self.other_student, title="Organic chemistry")
        ids = {
            self.request_to_teach(self.tutor, self.post).data["id"],
            self.request_to_teach(self.tutor, other_post).data["id"],
            self.request_to_learn(self.student, self.tutor.id, "Algebra").data["id"],
            self.request_to_learn(self.other_student, self.tutor.id, "Physics").data["id"],
        }
        # Belongs to another tutor and must not show up.
        self.request_to_learn(self.student, self.other_tutor.id, "Algebra")

        response = self.my_requests(self.tutor)

        sent_ids = {r["id"] for r in response.data["sent"]}
        received_ids = {r["id"] for r in response.data["received"]}
        self.assertFalse(sent_ids & received_ids)
        self.assertEqual(sent_ids | received_ids, ids)
        self.assertTrue(all("postId" in r for r in response.data["sent"]))
        self.assertTrue(all("postId" not in r for r in response.data["received"]))

    def test_lists_are_newest_first(self):
        first = self.request_to_learn(self.student, self.tutor.id, "Algebra").data
        second = self.request_to_learn(self.student, self.tutor.id, "Physics").data

        response = self.my_requests(self.tutor)

        self.assertEqual([r["id"] for r in response.data["received"]], [second["id"], first["id"]])

    def test_same_timestamp_is_ordered_by_id(self):
        ids = [
            self.request_to_learn(self.student, self.tutor.id, subject).data["id"]
            for subject in ("Algebra", "Physics", "Geometry")
        ]
        TeachRequest.objects.filter(id__in=ids).update(created_at=TeachRequest.objects.get(id=ids[0]).created_at)

        for _ in range(2):
            response = self.my_requests(self.tutor)
            self.assertEqual(
                [r["id"] for r in response.data["received"]],
                sorted(ids, key=lambda i: uuid.UUID(i).hex, reverse=True),
            )

    def test_post_title_is_read_at_request_time(self):
        self.request_to_teach(self.tutor, self.post)
        self.post.title = "Limits and continuity"
        self.post.save()

        response = self.my_requests(self.tutor)

        self.assertEqual(response.data["sent"][0]["postTitle"], "Limits and continuity")

    def test_deleted_post_has_no_title(self):
        created = self.request_to_teach(self.tutor, self.post).data
        self.post.delete()

        response = self.my_requests(self.tutor)

        self.assertEqual(response.data["sent"][0]["id"], created["id"])
        self.assertEqual(response.data["sent"][0]["postId"], created["postId"])
        self.assertNotIn("postTitle", response.data["sent"][0])

    def test_student_gets_empty_lists(self):
        self.request_to_learn(self.student, self.tutor.id, "Algebra")

        response = self.my_requests(self.student)

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data, {"sent": [], "received": []})

    def test_unauthenticated_returns_401(self):
        response = self.client.get(reverse("requests"))
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
