import logging

from django.contrib.auth import get_user_model
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError, transaction
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.post_app.models import Post
from apps.post_app.views import get_post_or_404
from apps.request_app.models import TeachRequest, RequestAlreadyDecided
from apps.request_app.policies import can_decide, forbidden_message
from apps.request_app.serializers import TeachRequestResponseSerializer, SentTeachRequestSerializer, \
    MyTeachRequestsResponseSerializer, LearningRequestCreateSerializer, TeachRequestStatusSerializer
from core.exceptions import Conflict
from core.mixins import ErrorResponseMixin
from core.serializers import ErrorResponseSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


def save_new_request(teach_request, conflict_message):
    # The partial unique constraints catch a duplicate that slipped past the pre-check.
    try:
        with transaction.atomic():
            teach_request.save()
    except IntegrityError:
        logger.warning(
            "Duplicate pending %s request rejected by the database (tutor=%s, student=%s)",
            teach_request.kind, teach_request.tutor_id, teach_request.student_id,
        )
        raise Conflict(conflict_message)
    return teach_request


class PostTeachRequestsView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=["Requests"],
        operation_summary="Requests to teach a post",
        operation_description="Only the student who owns the post can see who offered to teach it. Newest first.",
        responses={
            200: openapi.Response(description="Requests bound to the post", schema=TeachRequestResponseSerializer(many=True)),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Not the owner of the post", schema=ErrorResponseSerializer),
            404: openapi.Response(description="Post not found", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def get(self, request, post_id):
        post = get_post_or_404(post_id)

        if not post.is_owned_by(request.user):
            return self.format_error(request, 403, "Forbidden", "Only the post owner can view requests")

        requests = TeachRequest.objects.post_bound().filter(post=post).order_by("-created_at", "-id")
        return Response(TeachRequestResponseSerializer(requests, many=True).data, status=200)

    @swagger_auto_schema(
        tags=["Requests"],
        operation_summary="Offer to teach a post",
        operation_description="A tutor asks the student who wrote the post to accept them as a tutor.",
        responses={
            201: openapi.Response(description="Request created", schema=TeachRequestResponseSerializer),
            400: openapi.Response(description="Tutor is the author of the post", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Only tutors can request to teach", schema=ErrorResponseSerializer),
            404: openapi.Response(description="Post not found", schema=ErrorResponseSerializer),
            409: openapi.Response(description="A pending request for this post already exists", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request, post_id):
        post = get_post_or_404(post_id)
        tutor = request.user

        if not tutor.is_tutor:
            return self.format_error(request, 403, "Forbidden", "Only tutors can request to teach")

        if post.student_id == tutor.id:
            return self.format_error(request, 400, "Bad Request", "You cannot request to teach your own post")

        conflict_message = "You already have a pending request for this post"
        if TeachRequest.objects.pending_for_post(post, tutor).exists():
            return self.format_error(request, 409, "Conflict", conflict_message)

        teach_request = save_new_request(TeachRequest.for_post(post, tutor), conflict_message)
        logger.info("Tutor %s requested to teach post %s (request %s)", tutor.id, post.id, teach_request.id)
        return Response(TeachRequestResponseSerializer(teach_request).data, status=201)


class TeachRequestsView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=["Requests"],
        operation_summary="My requests as a tutor",
        operation_description=(
            "All requests where the caller is the tutor, newest first.\n"
            "`sent` holds offers the tutor made on posts (with the post's current title), "
            "`received` holds subject requests students sent to the tutor."
        ),
        responses={
            200: openapi.Response(description="Sent and received requests", schema=MyTeachRequestsResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        requests = list(TeachRequest.objects.for_tutor(request.user).order_by("-created_at", "-id"))

        sent = [r for r in requests if r.is_post_bound]
        received = [r for r in requests if not r.is_post_bound]

        post_titles = dict(
            Post.objects.filter(id__in={r.post_id for r in sent}).values_list("id", "title")
        )

        return Response({
            "sent": SentTeachRequestSerializer(sent, many=True, context={"post_titles": post_titles}).data,
            "received": TeachRequestResponseSerializer(received, many=True).data,
        }, status=200)

    @swagger_auto_schema(
        tags=["Requests"],
        operation_summary="Ask a tutor to teach a subject",
        request_body=LearningRequestCreateSerializer,
        responses={
            201: openapi.Response(description="Request created", schema=TeachRequestResponseSerializer),
            400: openapi.Response(description="Missing fields, user is not a tutor, or tutor is the caller", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            404: openapi.Response(description="Tutor not found", schema=ErrorResponseSerializer),
            409: openapi.Response(description="A pending request for this tutor and subject already exists", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = LearningRequestCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)

        tutor_id = serializer.validated_data.get("tutorId")
        subject = serializer.validated_data.get("subject")
        if not tutor_id or not subject:
            return self.format_error(request, 400, "Bad Request", "tutorId and subject are required")
        if len(subject) > TeachRequest.SUBJECT_MAX_LENGTH:
            return self.format_error(
                request, 400, "Bad Request", f"subject must be at most {TeachRequest.SUBJECT_MAX_LENGTH} characters"
            )

        try:
            tutor = User.objects.get(id=tutor_id)
        except (User.DoesNotExist, DjangoValidationError):
            raise NotFound("Tutor not found")

        if not tutor.is_tutor:
            return self.format_error(request, 400, "Bad Request", "User is not a tutor")

        student = request.user
        if tutor.id == student.id:
            return self.format_error(request, 400, "Bad Request", "You cannot send a learning request to yourself")

        conflict_message = "You already have a pending request for this tutor and subject"
        if TeachRequest.objects.pending_for_subject(tutor, student, subject).exists():
            return self.format_error(request, 409, "Conflict", conflict_message)

        teach_request = save_new_request(TeachRequest.for_subject(tutor, student, subject), conflict_message)
        logger.info("Student %s asked tutor %s for %r (request %s)", student.id, tutor.id, subject, teach_request.id)
        return Response(TeachRequestResponseSerializer(teach_request).data, status=201)


class TeachRequestDetailView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=["Requests"],
        operation_summary="Accept or reject a request",
        operation_description=(
            "Requests on a post are decided by the student who owns the post; "
            "subject requests are decided by the tutor. A decided request cannot change again."
        ),
        request_body=TeachRequestStatusSerializer,
        responses={
            200: openapi.Response(description="Request updated", schema=TeachRequestResponseSerializer),
            400: openapi.Response(description="Invalid status or request already decided", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Caller may not decide this request", schema=ErrorResponseSerializer),
            404: openapi.Response(description="Request not found", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def patch(self, request, request_id):
        serializer = TeachRequestStatusSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", "Invalid status")
        new_status = serializer.validated_data["status"]

        try:
            teach_request = TeachRequest.objects.get(id=request_id)
        except (TeachRequest.DoesNotExist, DjangoValidationError):
            raise NotFound("Request not found")

        if not can_decide(teach_request, request.user):
            return self.format_error(request, 403, "Forbidden", forbidden_message(teach_request))

        try:
            teach_request.decide(new_status)
        except RequestAlreadyDecided as e:
            return self.format_error(request, 400, "Bad Request", str(e))

        logger.info("User %s marked request %s as %s", request.user.id, teach_request.id, new_status)
        return Response(TeachRequestResponseSerializer(teach_request).data, status=200)
