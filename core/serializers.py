from rest_framework import serializers


class ErrorResponseSerializer(serializers.Serializer):
    status = serializers.IntegerField()
    error = serializers.CharField()
    message = serializers.JSONField()
    path = serializers.CharField()


class MessageResponseSerializer(serializers.Serializer):
    message = serializers.CharField()
