from django.urls import reverse
from rest_framework.test import APITestCase

from apps.auth_app.models import User
from apps.post_app.models import Post


class MatchingAPITestCase(APITestCase):
    def setUp(self):
        self.student = User.objects.create_user(
            email="student@example.com",
            password="password1",
            name="Sam Student",
            role=User.Role.STUDENT,
        )
        self.other_student = User.objects.create_user(
            email="other.student@example.com",
            password="password1",
            name="Olga Student",
            role=User.Role.STUDENT,
        )
        self.tutor = User.objects.create_user(
            email="tutor@example.com",
            password="password1",
            name="Tina Tutor",
            role=User.Role.TUTOR,
            subjects=["Algebra", "Physics"],
        )
        self.other_tutor = User.objects.create_user(
            email="other.tutor@example.com",
            password="password1",
            name="Tom Tutor",
            role=User.Role.TUTOR,
        )
        self.post = self.make_post(self.student, title="Need help with limits")

    @staticmethod
    def make_post(student, **overrides):
        data = {
            "title": "Learning request",
            "subject": "Calculus",
            "description": "Struggling with the basics.",
            "level": Post.Level.BEGINNER,
        }
        data.update(overrides)
        return Post.objects.create(student=student, student_name=student.name, **data)

    def request_to_teach(self, user, post):
        self.client.force_authenticate(user=user)
        return self.client.post(reverse("post-requests", kwargs={"post_id": post.id}))

    def request_to_learn(self, user, tutor_id, subject):
        self.client.force_authenticate(user=user)
        return self.client.post(reverse("requests"), {"tutorId": str(tutor_id), "subject": subject}, format="json")

    def decide(self, user, request_id, status):
        self.client.force_authenticate(user=user)
        return self.client.patch(
            reverse("request-detail", kwargs={"request_id": request_id}),
            {"status": status},
            format="json",
        )

    def my_requests(self, user):
        self.client.force_authenticate(user=user)
        return self.client.get(reverse("requests"))
