# pqr_core/common/models.py
from __future__ import annotations

import uuid

from django.db import models
from django.utils import timezone


class RecordStatus(models.TextChoices):
    """
    Soft-delete state carried by every administrable row.
    Rows are never physically removed; INACTIVE rows drop out of "active" reads.
    """
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"


class TimeStampedModel(models.Model):
    """
    Standard timestamps for all entities.
    """
    created_at = models.DateTimeField(auto_now_add=True, db_index=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class SoftDeleteModel(TimeStampedModel):
    status = models.CharField(
        max_length=16,
        choices=RecordStatus.choices,
        default=RecordStatus.ACTIVE,
        db_index=True,
    )
    deactivated_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        abstract = True

    @property
    def is_active(self) -> bool:
        return self.status == RecordStatus.ACTIVE

    def deactivate(self) -> bool:
        """Returns False when the row was already inactive (idempotent no-op)."""
        if self.status == RecordStatus.INACTIVE:
            return False
        self.status = RecordStatus.INACTIVE
        self.deactivated_at = timezone.now()
        return True

    def reactivate(self) -> bool:
        if self.status == RecordStatus.ACTIVE:
            return False
        self.status = RecordStatus.ACTIVE
        self.deactivated_at = None
        return True


class TenantScopedModel(SoftDeleteModel):
    """
    Enforces multi-tenant scope at the data layer.
    (Middleware enforces request scope; this enforces persistence scope.)
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant_id = models.UUIDField(db_index=True)

    class Meta:
        abstract = True
