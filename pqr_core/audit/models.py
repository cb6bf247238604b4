# pqr_core/audit/models.py
import uuid

from django.conf import settings
from django.db import models


class AuditEvent(models.Model):
    """
    Append-only trail of changes made through the services: appointment
    lifecycle, client records and RBAC grants. Rows are never updated.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    tenant_id = models.UUIDField(db_index=True)

    # "<entity>.<verb>", e.g. "appointment.cancelled"
    event_code = models.CharField(max_length=128)
    entity_type = models.CharField(max_length=64)
    entity_id = models.UUIDField()

    actor_user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        related_name="pqr_audit_events",
        null=True,
        blank=True,
    )

    occurred_at = models.DateTimeField(auto_now_add=True)
    metadata = models.JSONField(default=dict, blank=True)

    class Meta:
        db_table = "audit_event"
        ordering = ["-occurred_at"]
        indexes = [
            models.Index(fields=["tenant_id", "event_code"]),
            models.Index(fields=["tenant_id", "entity_type", "entity_id"]),
        ]

    def __str__(self) -> str:
        return f"{self.event_code} {self.entity_type}:{self.entity_id}"

    def save(self, *args, **kwargs):
        if not self._state.adding:
            raise RuntimeError("Audit events are append-only.")
        super().save(*args, **kwargs)
