from rest_framework import serializers

from apps.post_app.models import Post


class PostCreateSerializer(serializers.ModelSerializer):
    level = serializers.ChoiceField(
        choices=Post.Level.choices,
        error_messages={"invalid_choice": "Invalid level"},
    )

    class Meta:
        model = Post
        fields = ["title", "subject", "description", "level"]


class PostUpdateSerializer(serializers.ModelSerializer):
    title = serializers.CharField(required=False, allow_blank=True, max_length=255)
    subject = serializers.CharField(required=False, allow_blank=True, max_length=100)
    description = serializers.CharField(required=False, allow_blank=True)
    level = serializers.ChoiceField(
        choices=Post.Level.choices,
        required=False,
        allow_blank=True,
        error_messages={"invalid_choice": "Invalid level"},
    )

    class Meta:
        model = Post
        fields = ["title", "subject", "description", "level"]

    def update(self, instance, validated_data):
        changes = {field: value for field, value in validated_data.items() if value}
        return super().update(instance, changes)


class PostResponseSerializer(serializers.ModelSerializer):
    studentId = serializers.UUIDField(source="student_id", read_only=True)
    studentName = serializers.CharField(source="student_name", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Post
        fields = [
            "id",
            "title",
            "subject",
            "description",
            "level",
            "studentId",
            "studentName",
            "createdAt",
        ]
