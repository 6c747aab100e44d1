from rest_framework import serializers
from django.contrib.auth import get_user_model

from apps.auth_app.validators import validate_display_name

User = get_user_model()


class UserResponseSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = User
        fields = ("id", "name", "email", "role", "subjects", "createdAt")
        read_only_fields = fields


class RegisterRequestSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=100)
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        min_length=6,
        style={'input_type': 'password'},
        error_messages={"min_length": "Password must be at least 6 characters"},
    )
    role = serializers.ChoiceField(
        choices=User.Role.choices,
        error_messages={"invalid_choice": "Invalid role. Must be student or tutor"},
    )

    @staticmethod
    def validate_name(value):
        try:
            validate_display_name(value, "name")
        except ValueError as e:
            raise serializers.ValidationError(str(e))
        return value.strip()

    @staticmethod
    def validate_email(value):
        value = value.lower()
        if User.objects.filter(email=value).exists():
            raise serializers.ValidationError("Email already registered")
        return value

    def create(self, validated_data):
        return User.objects.create_user(**validated_data)


class LoginRequestSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={'input_type': 'password'})


class AuthResponseSerializer(serializers.Serializer):
    user = UserResponseSerializer()
    access = serializers.CharField()
    refresh = serializers.CharField()


class RefreshRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()

class RefreshResponseSerializer(serializers.Serializer):
    access = serializers.CharField()


class LogoutRequestSerializer(serializers.Serializer):
    refresh = serializers.CharField()
