# pqr_core/branches/models.py
from __future__ import annotations

import uuid

from django.db import models
from django.db.models import Q

from pqr_core.common.models import SoftDeleteModel
from pqr_core.tenants.models import Tenant


class Branch(SoftDeleteModel):
    """
    A customer-service office of the tenant where appointments are attended.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey(Tenant, on_delete=models.PROTECT, related_name="branches")

    name = models.CharField(max_length=255)
    code = models.SlugField(max_length=64)  # unique per tenant

    # Address (validated as a whole)
    street = models.CharField(max_length=255)
    city = models.CharField(max_length=128)
    state = models.CharField(max_length=128)
    postal_code = models.CharField(max_length=16, blank=True, default="")

    # Contact (optional)
    phone = models.CharField(max_length=16, blank=True, default="")
    email = models.EmailField(blank=True, default="")

    is_main = models.BooleanField(default=False)
    color_primary = models.CharField(max_length=16, blank=True, default="")

    class Meta:
        db_table = "branches_branch"
        constraints = [
            models.UniqueConstraint(fields=["tenant", "code"], name="uq_branch_tenant_code"),
            models.UniqueConstraint(fields=["tenant"], condition=Q(is_main=True), name="uq_branch_tenant_main"),
        ]
        indexes = [
            models.Index(fields=["tenant", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"

    @property
    def full_address(self) -> str:
        parts = f"{self.street}, {self.city}, {self.state}"
        return f"{parts} {self.postal_code}" if self.postal_code else parts
