import logging

from django.core.exceptions import ValidationError as DjangoValidationError
from drf_yasg import openapi
from drf_yasg.utils import swagger_auto_schema
from rest_framework.exceptions import NotFound
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from apps.post_app.models import Post
from apps.post_app.serializers import PostCreateSerializer, PostUpdateSerializer, PostResponseSerializer
from core.mixins import ErrorResponseMixin
from core.serializers import ErrorResponseSerializer, MessageResponseSerializer

logger = logging.getLogger(__name__)


def get_post_or_404(post_id):
    try:
        return Post.objects.get(id=post_id)
    except (Post.DoesNotExist, DjangoValidationError):
        raise NotFound("Post not found")


class PostListCreateView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=["Posts"],
        operation_summary="List all learning posts",
        operation_description="Returns every post, newest first.",
        responses={
            200: openapi.Response(description="Posts", schema=PostResponseSerializer(many=True)),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def get(self, request):
        posts = Post.objects.all().order_by("-created_at", "-id")
        return Response(PostResponseSerializer(posts, many=True).data, status=200)

    @swagger_auto_schema(
        tags=["Posts"],
        operation_summary="Create a learning post",
        request_body=PostCreateSerializer,
        responses={
            201: openapi.Response(description="Post created", schema=PostResponseSerializer),
            400: openapi.Response(description="Missing fields or invalid level", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Only students can create posts", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def post(self, request):
        serializer = PostCreateSerializer(data=request.data)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)

        if not request.user.is_student:
            return self.format_error(request, 403, "Forbidden", "Only students can create learning requests")

        post = serializer.save(student=request.user, student_name=request.user.name)
        logger.info("Student %s created post %s", request.user.id, post.id)
        return Response(PostResponseSerializer(post).data, status=201)


class PostDetailView(ErrorResponseMixin, APIView):
    permission_classes = [IsAuthenticated]

    @swagger_auto_schema(
        tags=["Posts"],
        operation_summary="Update own learning post",
        operation_description="Partial update. Blank values leave the field unchanged.",
        request_body=PostUpdateSerializer,
        responses={
            200: openapi.Response(description="Post updated", schema=PostResponseSerializer),
            400: openapi.Response(description="Invalid level", schema=ErrorResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Not the owner of the post", schema=ErrorResponseSerializer),
            404: openapi.Response(description="Post not found", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def put(self, request, post_id):
        post = get_post_or_404(post_id)

        if not post.is_owned_by(request.user):
            return self.format_error(request, 403, "Forbidden", "You can only update your own posts")

        serializer = PostUpdateSerializer(post, data=request.data, partial=True)
        if not serializer.is_valid():
            return self.format_error(request, 400, "Bad Request", serializer.errors)
        post = serializer.save()

        return Response(PostResponseSerializer(post).data, status=200)

    @swagger_auto_schema(
        tags=["Posts"],
        operation_summary="Delete own learning post",
        operation_description="Teach requests bound to the post are kept.",
        responses={
            200: openapi.Response(description="Post deleted", schema=MessageResponseSerializer),
            401: openapi.Response(description="Unauthorized", schema=ErrorResponseSerializer),
            403: openapi.Response(description="Not the owner of the post", schema=ErrorResponseSerializer),
            404: openapi.Response(description="Post not found", schema=ErrorResponseSerializer),
            500: openapi.Response(description="Internal server error", schema=ErrorResponseSerializer),
        },
    )
    def delete(self, request, post_id):
        post = get_post_or_404(post_id)

        if not post.is_owned_by(request.user):
            return self.format_error(request, 403, "Forbidden", "You can only delete your own posts")

        post.delete()
        logger.info("Student %s deleted post %s", request.user.id, post_id)
        return Response({"message": "Post deleted successfully"}, status=200)
