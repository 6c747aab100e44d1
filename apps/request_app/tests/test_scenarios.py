from django.urls import reverse
from rest_framework import status

from apps.request_app.tests.base import MatchingAPITestCase


class MatchingScenarioTest(MatchingAPITestCase):
    def test_tutor_offer_on_post_lifecycle(self):
        r1 = self.request_to_teach(self.tutor, self.post)
        self.assertEqual(r1.status_code, status.HTTP_201_CREATED)
        self.assertEqual(r1.data["status"], "pending")

        self.assertEqual(self.request_to_teach(self.tutor, self.post).status_code, status.HTTP_409_CONFLICT)

        self.client.force_authenticate(user=self.student)
        listed = self.client.get(reverse("post-requests", kwargs={"post_id": self.post.id}))
        self.assertEqual([r["id"] for r in listed.data], [r1.data["id"]])

        accepted = self.decide(self.student, r1.data["id"], "accepted")
        self.assertEqual(accepted.data["status"], "accepted")

        again = self.request_to_teach(self.tutor, self.post)
        self.assertEqual(again.status_code, status.HTTP_201_CREATED)
        self.assertNotEqual(again.data["id"], r1.data["id"])

    def test_student_subject_request_lifecycle(self):
        r2 = self.request_to_learn(self.other_student, self.other_tutor.id, "Algebra")
        self.assertEqual(r2.status_code, status.HTTP_201_CREATED)
        self.assertEqual(r2.data["status"], "pending")

        duplicate = self.request_to_learn(self.other_student, self.other_tutor.id, "Algebra")
        self.assertEqual(duplicate.status_code, status.HTTP_409_CONFLICT)

        rejected = self.decide(self.other_tutor, r2.data["id"], "rejected")
        self.assertEqual(rejected.data["status"], "rejected")

        mine = self.my_requests(self.other_tutor)
        self.assertEqual(mine.data["sent"], [])
        self.assertEqual([r["id"] for r in mine.data["received"]], [r2.data["id"]])
        self.assertEqual(mine.data["received"][0]["status"], "rejected")
