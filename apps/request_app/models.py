import uuid

from django.conf import settings
from django.db import models
from django.db.models import Q


class TeachRequestQuerySet(models.QuerySet):
    def pending(self):
        return self.filter(status=TeachRequest.Status.PENDING)

    def post_bound(self):
        return self.filter(kind=TeachRequest.Kind.POST)

    def subject_bound(self):
        return self.filter(kind=TeachRequest.Kind.SUBJECT)

    def for_tutor(self, tutor):
        return self.filter(tutor=tutor)

    def pending_for_post(self, post, tutor):
        return self.post_bound().pending().filter(post=post, tutor=tutor)

    def pending_for_subject(self, tutor, student, subject):
        return self.subject_bound().pending().filter(tutor=tutor, student=student, subject=subject)


class TeachRequest(models.Model):
    """
    A match request between a tutor and a student.

    Two shapes share the table and are told apart by ``kind``:

    * ``post``: a tutor offers to teach a student's post. ``post`` is set, ``subject`` is null,
      and only the student (the post owner) may decide it.
    * ``subject``: a student asks a tutor to teach a subject. ``subject`` is set, ``post`` is null,
      and only the tutor may decide it.

    ``tutor_name`` and ``student_name`` are snapshots taken at creation and are never refreshed.
    """

    class Kind(models.TextChoices):
        POST = "post", "Post-bound"
        SUBJECT = "subject", "Subject-bound"

    class Status(models.TextChoices):
        PENDING = "pending", "Pending"
        ACCEPTED = "accepted", "Accepted"
        REJECTED = "rejected", "Rejected"

    TERMINAL_STATUSES = (Status.ACCEPTED, Status.REJECTED)
    SUBJECT_MAX_LENGTH = 100

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    kind = models.CharField(max_length=10, choices=Kind.choices, editable=False)
    # Requests outlive the post they point at, so no cascade and no DB-level FK.
    post = models.ForeignKey(
        "post_app.Post",
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        null=True,
        blank=True,
        related_name="teach_requests",
    )
    subject = models.CharField(max_length=SUBJECT_MAX_LENGTH, null=True, blank=True)
    tutor = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="teach_requests_as_tutor",
        limit_choices_to={"role": "tutor"},
    )
    tutor_name = models.CharField(max_length=100)
    student = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="teach_requests_as_student",
    )
    student_name = models.CharField(max_length=100)
    status = models.CharField(max_length=20, choices=Status.choices, default=Status.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = TeachRequestQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(
                condition=(
                    Q(kind="post", post__isnull=False, subject__isnull=True)
                    | (Q(kind="subject", post__isnull=True, subject__isnull=False) & ~Q(subject=""))
                ),
                name="teach_request_post_xor_subject",
            ),
            models.UniqueConstraint(
                fields=["post", "tutor"],
                condition=Q(status="pending", kind="post"),
                name="unique_pending_post_request",
            ),
            models.UniqueConstraint(
                fields=["tutor", "student", "subject"],
                condition=Q(status="pending", kind="subject"),
                name="unique_pending_subject_request",
            ),
        ]

    def __str__(self):
        target = self.subject if self.is_subject_bound else f"post {self.post_id}"
        return f"TeachRequest({self.tutor_name} ↔ {self.student_name}, {target}, {self.status})"

    @classmethod
    def for_post(cls, post, tutor):
        return cls(
            kind=cls.Kind.POST,
            post=post,
            tutor=tutor,
            tutor_name=tutor.name,
            student_id=post.student_id,
            student_name=post.student_name,
        )

    @classmethod
    def for_subject(cls, tutor, student, subject):
        return cls(
            kind=cls.Kind.SUBJECT,
            subject=subject,
            tutor=tutor,
            tutor_name=tutor.name,
            student=student,
            student_name=student.name,
        )

    @property
    def is_post_bound(self):
        return self.kind == self.Kind.POST

    @property
    def is_subject_bound(self):
        return self.kind == self.Kind.SUBJECT

    @property
    def is_pending(self):
        return self.status == self.Status.PENDING

    def decide(self, status):
        if status not in self.TERMINAL_STATUSES:
            raise ValueError(f"Invalid status: {status}")
        if not self.is_pending:
            raise RequestAlreadyDecided(self)
        self.status = status
        self.save(update_fields=["status", "updated_at"])


class RequestAlreadyDecided(Exception):
    def __init__(self, teach_request):
        self.teach_request = teach_request
        super().__init__(f"Request has already been {teach_request.status}")
