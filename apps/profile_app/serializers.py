from django.contrib.auth import get_user_model
from rest_framework import serializers

from apps.auth_app.validators import validate_display_name, normalize_subjects

User = get_user_model()


class TutorResponseSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ["id", "name", "email", "subjects", "createdAt"]


class UpdateProfileRequestSerializer(serializers.ModelSerializer):
    name = serializers.CharField(required=False, allow_blank=True)
    email = serializers.EmailField(required=False, allow_blank=True)
    subjects = serializers.JSONField(required=False)

    class Meta:
        model = User
        fields = ['name', 'email', 'subjects']

    @staticmethod
    def validate_name(value):
        if value:
            try:
                validate_display_name(value, "name")
            except ValueError as e:
                raise serializers.ValidationError(str(e))
            value = value.strip()
        return value

    def validate_email(self, value):
        if value:
            value = value.lower()
            if User.objects.filter(email=value).exclude(id=self.instance.id).exists():
                raise serializers.ValidationError("This email is already in use by another user.")
        return value

    @staticmethod
    def validate_subjects(value):
        try:
            return normalize_subjects(value)
        except ValueError as e:
            raise serializers.ValidationError(str(e))

    def update(self, instance, validated_data):
        # Blank name/email mean "leave unchanged"; an explicit list always replaces subjects.
        changes = {
            field: value for field, value in validated_data.items()
            if field == "subjects" or value
        }
        return super().update(instance, changes)
