import logging

from django.contrib.auth import get_user_model
from django.db import IntegrityError
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken

from core.mixins import ErrorResponseMixin
from core.serializers import ErrorResponseSerializer
from .serializers import (
    RegisterRequestSerializer, LoginRequestSerializer, AuthResponseSerializer,
    RefreshRequestSerializer, RefreshResponseSerializer,
    LogoutRequestSerializer, UserResponseSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def issue_tokens(user):
    refresh = RefreshToken.for_user(user)
    return {
        "user": UserResponseSerializer(user).data,
        "access": str(refresh.access_token),
        "refresh": str(refresh),
    }


class RegisterView(ErrorResponseMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        tags=['Auth'],
        operation_summary="Register a student or tutor",
        request_body=RegisterRequestSerializer,
        responses={
            201: openapi.Response(description="User registered", schema=AuthResponseSerializer),
            400: openapi.Response(description="Invalid data or email already registered", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RegisterRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)

        try:
            user = serializer.save()
        except IntegrityError:
            return self.format_error(request, 400, "Bad Request", "Email already registered")

        logger.info("Registered %s %s", user.role, user.id)
        return Response(issue_tokens(user), status=201)


class LoginView(ErrorResponseMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        tags=['Auth'],
        operation_summary="Log in with email and password",
        request_body=LoginRequestSerializer,
        responses={
            200: openapi.Response(description="Logged in", schema=AuthResponseSerializer),
            400: openapi.Response(description="Email and password are required", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Invalid credentials", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = LoginRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", "Email and password are required")

        email = serializer.validated_data["email"].lower()
        password = serializer.validated_data["password"]

        user = User.objects.filter(email=email).first()
        if not user or not user.check_password(password):
            return self.format_error(request, 401, "Unauthorized", "Invalid email or password")

        return Response(issue_tokens(user), status=200)


class RefreshView(ErrorResponseMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        tags=['Auth'],
        operation_summary="Refresh the access token",
        request_body=RefreshRequestSerializer,
        responses={
            200: openapi.Response(description="New access token", schema=RefreshResponseSerializer),
            400: openapi.Response(description="Invalid or expired refresh token", schema=ErrorResponseSerializer),
            404: openapi.Response(description="User not found", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = RefreshRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)

        try:
            refresh = RefreshToken(serializer.validated_data["refresh"])
        except TokenError:
            return self.format_error(request, 400, "Bad Request", "Invalid or expired refresh token")

        user_id = refresh.get("user_id")
        if not User.objects.filter(id=user_id).exists():
            return self.format_error(request, 404, "Not Found", f"User with id={user_id} not found")

        return Response({"access": str(refresh.access_token)}, 200)


class LogoutView(ErrorResponseMixin, APIView):
    permission_classes = [AllowAny]
    authentication_classes = []

    @swagger_auto_schema(
        tags=['Auth'],
        operation_summary="Log out (blacklist the refresh token)",
        request_body=LogoutRequestSerializer,
        responses={
            200: openapi.Response(description="Logged out"),
            400: openapi.Response(description="Invalid or already revoked refresh token", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = LogoutRequestSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)

        try:
            RefreshToken(serializer.validated_data["refresh"]).blacklist()
        except TokenError:
            return self.format_error(request, 400, "Bad Request", "Invalid or expired refresh token")

        return Response(status=200)
