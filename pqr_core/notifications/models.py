# pqr_core/notifications/models.py
from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import Q
from django.utils import timezone

from pqr_core.appointments.models import Appointment
from pqr_core.clients.models import Client
from pqr_core.common.models import TenantScopedModel


class NotificationType(models.TextChoices):
    EMAIL = "EMAIL", "Email"
    SMS = "SMS", "SMS"
    WHATSAPP = "WHATSAPP", "WhatsApp"
    IN_APP = "IN_APP", "In App"


class NotificationStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    SENT = "SENT", "Sent"
    FAILED = "FAILED", "Failed"


class Notification(TenantScopedModel):
    """
    A message addressed to exactly one recipient: a staff user or a client.
    Delivery state (PENDING/SENT/FAILED) is independent of read state.
    """
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="pqr_notifications",
    )
    client = models.ForeignKey(
        Client,
        null=True,
        blank=True,
        on_delete=models.CASCADE,
        related_name="notifications",
    )
    appointment = models.ForeignKey(
        Appointment,
        null=True,
        blank=True,
        on_delete=models.SET_NULL,
        related_name="notifications",
    )

    notification_type = models.CharField(
        max_length=16,
        choices=NotificationType.choices,
        default=NotificationType.IN_APP,
        db_index=True,
    )
    title = models.CharField(max_length=255)
    message = models.TextField()

    delivery_status = models.CharField(
        max_length=16,
        choices=NotificationStatus.choices,
        default=NotificationStatus.PENDING,
        db_index=True,
    )
    sent_at = models.DateTimeField(null=True, blank=True)
    error_message = models.TextField(blank=True, default="")

    is_read = models.BooleanField(default=False, db_index=True)
    read_at = models.DateTimeField(null=True, blank=True)

    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "notifications_notification"
        constraints = [
            models.CheckConstraint(
                condition=(Q(user__isnull=False, client__isnull=True) | Q(user__isnull=True, client__isnull=False)),
                name="ck_notification_single_recipient",
            ),
        ]
        indexes = [
            models.Index(fields=["tenant_id", "user", "is_read"]),
            models.Index(fields=["tenant_id", "client"]),
        ]
        ordering = ["-created_at"]

    def __str__(self) -> str:
        return f"{self.notification_type}: {self.title}"

    def mark_sent(self) -> None:
        self.delivery_status = NotificationStatus.SENT
        self.sent_at = timezone.now()
        self.error_message = ""

    def mark_failed(self, error_message: str) -> None:
        self.delivery_status = NotificationStatus.FAILED
        self.error_message = error_message

    def mark_read(self) -> bool:
        if self.is_read:
            return False
        self.is_read = True
        self.read_at = timezone.now()
        return True
