# pqr_core/tenants/models.py
import uuid

from django.db import models


class TenantStatus(models.TextChoices):
    ACTIVE = "ACTIVE", "Active"
    INACTIVE = "INACTIVE", "Inactive"
    SUSPENDED = "SUSPENDED", "Suspended"


class Tenant(models.Model):
    """
    A utility company running its own scheduling portal. Every scoped row
    (branches, clients, roles, appointments...) carries its id.

    Only ACTIVE tenants accept scoped requests; see iam.services.membership.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=255)
    code = models.SlugField(max_length=64, unique=True)

    # company identity shown on notifications and receipts
    nit = models.CharField(max_length=15, blank=True, default="")
    contact_email = models.EmailField(blank=True, default="")
    support_phone = models.CharField(max_length=16, blank=True, default="")

    status = models.CharField(max_length=16, choices=TenantStatus.choices, default=TenantStatus.ACTIVE)
    metadata = models.JSONField(default=dict, blank=True)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "tenants_tenant"
        ordering = ["name"]
        indexes = [models.Index(fields=["status"])]

    def __str__(self) -> str:
        return self.name

    @property
    def is_active(self) -> bool:
        return self.status == TenantStatus.ACTIVE
