# pqr_core/notifications/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.notifications.models import Notification, NotificationType


class NotificationSerializer(serializers.ModelSerializer):
    user_id = serializers.IntegerField(read_only=True, allow_null=True)
    client_id = serializers.UUIDField(read_only=True, allow_null=True)
    appointment_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Notification
        fields = [
            "id",
            "tenant_id",
            "user_id",
            "client_id",
            "appointment_id",
            "notification_type",
            "title",
            "message",
            "delivery_status",
            "sent_at",
            "error_message",
            "is_read",
            "read_at",
            "metadata",
            "created_at",
        ]
        read_only_fields = fields


class NotificationCreateSerializer(serializers.Serializer):
    notification_type = serializers.ChoiceField(choices=NotificationType.choices)
    title = serializers.CharField(max_length=255)
    message = serializers.CharField()
    user_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    client_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    appointment_id = serializers.UUIDField(required=False, allow_null=True, default=None)
    metadata = serializers.JSONField(required=False, default=dict)


class UnreadCountSerializer(serializers.Serializer):
    unread = serializers.IntegerField()
