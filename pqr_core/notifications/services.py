# pqr_core/notifications/services.py
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction

from pqr_core.common.errors import ValidationError
from pqr_core.notifications.models import Notification, NotificationType

logger = logging.getLogger(__name__)


class NotificationService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        tenant_id: UUID,
        notification_type: str,
        title: str,
        message: str,
        user_id: int | None = None,
        client_id: UUID | None = None,
        appointment_id: UUID | None = None,
        metadata: dict | None = None,
    ) -> Notification:
        """
        Exactly one of user_id / client_id must be given.
        """
        if user_id is None and client_id is None:
            raise ValidationError("recipient", "Either user_id or client_id is required.")
        if user_id is not None and client_id is not None:
            raise ValidationError("recipient", "A notification goes to a user or a client, not both.")

        kind = (notification_type or "").strip().upper()
        if kind not in NotificationType.values:
            raise ValidationError(
                "notification_type",
                f"Must be one of {', '.join(NotificationType.values)}.",
            )

        title = (title or "").strip()
        message = (message or "").strip()
        if not title:
            raise ValidationError("title", "Title is required.")
        if not message:
            raise ValidationError("message", "Message is required.")

        return Notification.objects.create(
            tenant_id=tenant_id,
            notification_type=kind,
            title=title,
            message=message,
            user_id=user_id,
            client_id=client_id,
            appointment_id=appointment_id,
            metadata=metadata or {},
        )

    @staticmethod
    @transaction.atomic
    def mark_sent(*, tenant_id: UUID, notification_id: UUID) -> Notification:
        n = Notification.objects.select_for_update().get(id=notification_id, tenant_id=tenant_id)
        n.mark_sent()
        n.save(update_fields=["delivery_status", "sent_at", "error_message", "updated_at"])
        return n

    @staticmethod
    @transaction.atomic
    def mark_failed(*, tenant_id: UUID, notification_id: UUID, error_message: str) -> Notification:
        error_message = (error_message or "").strip()
        if not error_message:
            raise ValidationError("error_message", "Error message is required.")

        n = Notification.objects.select_for_update().get(id=notification_id, tenant_id=tenant_id)
        n.mark_failed(error_message)
        n.save(update_fields=["delivery_status", "error_message", "updated_at"])
        logger.warning("Notification %s failed: %s", n.id, error_message)
        return n

    @staticmethod
    @transaction.atomic
    def mark_read(*, tenant_id: UUID, notification_id: UUID, user_id: int | None = None) -> Notification:
        """
        Idempotent. When user_id is given the notification must belong to that user.
        """
        qs = Notification.objects.select_for_update().filter(tenant_id=tenant_id)
        if user_id is not None:
            qs = qs.filter(user_id=user_id)
        n = qs.get(id=notification_id)
        if n.mark_read():
            n.save(update_fields=["is_read", "read_at", "updated_at"])
        return n

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, notification_id: UUID) -> Notification:
        n = Notification.objects.select_for_update().get(id=notification_id, tenant_id=tenant_id)
        if n.deactivate():
            n.save(update_fields=["status", "deactivated_at", "updated_at"])
        return n
