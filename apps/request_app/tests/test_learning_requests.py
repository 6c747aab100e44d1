import uuid
from unittest import mock

from django.urls import reverse
from rest_framework import status

from apps.request_app.models import TeachRequest, TeachRequestQuerySet
from apps.request_app.tests.base import MatchingAPITestCase


class CreateLearningRequestViewTest(MatchingAPITestCase):
    def test_student_asks_tutor_for_subject(self):
        response = self.request_to_learn(self.student, self.tutor.id, "Algebra")

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["subject"], "Algebra")
        self.assertNotIn("postId", response.data)
        self.assertEqual(response.data["tutorId"], str(self.tutor.id))
        self.assertEqual(response.data["tutorName"], "Tina Tutor")
        self.assertEqual(response.data["studentId"], str(self.student.id))
        self.assertEqual(response.data["studentName"], "Sam Student")
        self.assertEqual(response.data["status"], "pending")
        self.assertEqual(TeachRequest.objects.get(id=response.data["id"]).kind, TeachRequest.Kind.SUBJECT)

    def test_subject_is_trimmed(self):
        response = self.request_to_learn(self.student, self.tutor.id, "  Algebra  ")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data["subject"], "Algebra")

    def test_unauthenticated_returns_401(self):
        response = self.client.post(reverse("requests"), {"tutorId": str(self.tutor.id), "subject": "Algebra"})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_fields_return_400(self):
        for payload in ({}, {"tutorId": str(self.tutor.id)}, {"subject": "Algebra"}, {"tutorId": "", "subject": " "}):
            self.client.force_authenticate(user=self.student)
            response = self.client.post(reverse("requests"), payload, format="json")
            self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, payload)
            self.assertEqual(response.data["message"], "tutorId and subject are required")

    def test_unknown_tutor_returns_404(self):
        response = self.request_to_learn(self.student, uuid.uuid4(), "Algebra")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data["message"], "Tutor not found")

    def test_malformed_tutor_id_returns_404(self):
        response = self.request_to_learn(self.student, "not-a-uuid", "Algebra")
        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)

    def test_subject_longer_than_100_characters_returns_400(self):
        response = self.request_to_learn(self.student, self.tutor.id, "A" * 101)

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "subject must be at most 100 characters")
        self.assertFalse(TeachRequest.objects.exists())

    def test_subject_of_exactly_100_characters_is_accepted(self):
        response = self.request_to_learn(self.student, self.tutor.id, "A" * 100)
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_target_must_be_a_tutor(self):
        response = self.request_to_learn(self.student, self.other_student.id, "Algebra")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertEqual(response.data["message"], "User is not a tutor")

    def test_tutor_cannot_ask_themselves(self):
        response = self.request_to_learn(self.tutor, self.tutor.id, "Algebra")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertFalse(TeachRequest.objects.exists())

    def test_duplicate_pending_request_returns_409(self):
        self.request_to_learn(self.student, self.tutor.id, "Algebra")
        response = self.request_to_learn(self.student, self.tutor.id, "Algebra")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], "You already have a pending request for this tutor and subject")
        self.assertEqual(TeachRequest.objects.count(), 1)

    def test_duplicate_that_passes_the_pre_check_still_returns_409(self):
        self.request_to_learn(self.student, self.tutor.id, "Algebra")

        with mock.patch.object(TeachRequestQuerySet, "exists", return_value=False):
            response = self.request_to_learn(self.student, self.tutor.id, "Algebra")

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.data["message"], "You already have a pending request for this tutor and subject")
        self.assertEqual(
            TeachRequest.objects.filter(tutor=self.tutor, student=self.student, subject="Algebra").count(), 1
        )

    def test_different_subject_or_student_is_not_a_duplicate(self):
        self.request_to_learn(self.student, self.tutor.id, "Algebra")

        self.assertEqual(
            self.request_to_learn(self.student, self.tutor.id, "Physics").status_code, status.HTTP_201_CREATED
        )
        self.assertEqual(
            self.request_to_learn(self.other_student, self.tutor.id, "Algebra").status_code, status.HTTP_201_CREATED
        )

    def test_new_request_allowed_after_previous_was_decided(self):
        first = self.request_to_learn(self.student, self.tutor.id, "Algebra")
        self.decide(self.tutor, first.data["id"], "accepted")

        response = self.request_to_learn(self.student, self.tutor.id, "Algebra")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_snapshot_names_do_not_follow_profile_changes(self):
        created = self.request_to_learn(self.student, self.tutor.id, "Algebra")

        self.tutor.name = "Tina Renamed"
        self.tutor.save()

        response = self.my_requests(self.tutor)
        self.assertEqual(response.data["received"][0]["id"], created.data["id"])
        self.assertEqual(response.data["received"][0]["tutorName"], "Tina Tutor")
