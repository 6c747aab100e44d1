from rest_framework import serializers

from apps.request_app.models import TeachRequest


class TeachRequestResponseSerializer(serializers.ModelSerializer):
    postId = serializers.UUIDField(source="post_id", read_only=True)
    tutorId = serializers.UUIDField(source="tutor_id", read_only=True)
    tutorName = serializers.CharField(source="tutor_name", read_only=True)
    studentId = serializers.UUIDField(source="student_id", read_only=True)
    studentName = serializers.CharField(source="student_name", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    optional_fields = ("postId", "subject")

    class Meta:
        model = TeachRequest
        fields = [
            "id",
            "postId",
            "tutorId",
            "tutorName",
            "studentId",
            "studentName",
            "subject",
            "status",
            "createdAt",
        ]

    def to_representation(self, instance):
        data = super().to_representation(instance)
        for field in self.optional_fields:
            if data.get(field) is None:
                data.pop(field, None)
        return data


class SentTeachRequestSerializer(TeachRequestResponseSerializer):
    """Post-bound request annotated with the current title of its post, when the post still exists."""

    postTitle = serializers.SerializerMethodField()

    optional_fields = ("postId", "subject", "postTitle")

    class Meta(TeachRequestResponseSerializer.Meta):
        fields = TeachRequestResponseSerializer.Meta.fields + ["postTitle"]

    def get_postTitle(self, obj):
        return self.context.get("post_titles", {}).get(obj.post_id)


class MyTeachRequestsResponseSerializer(serializers.Serializer):
    sent = SentTeachRequestSerializer(many=True)
    received = TeachRequestResponseSerializer(many=True)


class LearningRequestCreateSerializer(serializers.Serializer):
    tutorId = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)
    subject = serializers.CharField(required=False, allow_blank=True, trim_whitespace=True)


class TeachRequestStatusSerializer(serializers.Serializer):
    status = serializers.ChoiceField(
        choices=[TeachRequest.Status.ACCEPTED, TeachRequest.Status.REJECTED],
        error_messages={
            "invalid_choice": "Invalid status",
            "required": "Invalid status",
            "null": "Invalid status",
        },
    )
