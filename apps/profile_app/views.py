import logging
import uuid

from django.contrib.auth import get_user_model
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework import status
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.auth_app.serializers import UserResponseSerializer
from apps.profile_app.serializers import UpdateProfileRequestSerializer, TutorResponseSerializer
from core.mixins import ErrorResponseMixin
from core.serializers import ErrorResponseSerializer

User = get_user_model()
logger = logging.getLogger(__name__)


class ProfileView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=['Profile'],
        operation_summary="Current user's profile",
        responses={
            200: openapi.Response(description="Current user", schema=UserResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        }
    )
    def get(self, request):
        return Response(UserResponseSerializer(request.user).data, status=status.HTTP_200_OK)


class UserUpdateView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=['Profile'],
        operation_summary="Update own profile",
        operation_description=(
            "Updates `name`, `email` and/or `subjects` of the caller. "
            "Names already copied onto existing requests and posts are not changed."
        ),
        request_body=UpdateProfileRequestSerializer,
        responses={
            200: openapi.Response(description="Profile updated", schema=UserResponseSerializer),
            400: openapi.Response(description="Validation error", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Not authorized to update this user", schema=ErrorResponseSerializer),
            404: openapi.Response(description="User not found", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def put(self, request, user_id):
        try:
            user_id = uuid.UUID(user_id)
        except ValueError:
            raise NotFound("User not found")

        if request.user.id != user_id:
            return self.format_error(request, 403, "Forbidden", "Not authorized to update this user")

        try:
            user = User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise NotFound("User not found")

        serializer = UpdateProfileRequestSerializer(user, data=request.data, partial=True)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)
        user = serializer.save()

        logger.info("User %s updated profile fields %s", user.id, sorted(serializer.validated_data))
        return Response(UserResponseSerializer(user).data, status=status.HTTP_200_OK)


class TutorListView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=['Tutors'],
        operation_summary="List tutors",
        responses={
            200: openapi.Response(description="Tutors", schema=TutorResponseSerializer(many=True)),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        tutors = User.objects.filter(role=User.Role.TUTOR).order_by("name")
        return Response(TutorResponseSerializer(tutors, many=True).data, status=status.HTTP_200_OK)
