# pqr_core/iam/models.py
import uuid

from django.conf import settings
from django.db import models

from pqr_core.common.models import SoftDeleteModel
from pqr_core.tenants.models import Tenant
from pqr_core.values import DocumentType


class Role(SoftDeleteModel):
    """
    Role is tenant-scoped (each tenant defines its own roles).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    tenant = models.ForeignKey(Tenant, on_delete=models.PROTECT, related_name="roles")

    name = models.CharField(max_length=128)
    code = models.SlugField(max_length=64)  # unique per tenant
    description = models.CharField(max_length=255, blank=True, default="")

    class Meta:
        db_table = "iam_role"
        constraints = [
            models.UniqueConstraint(fields=["tenant", "code"], name="uq_role_tenant_code"),
        ]
        indexes = [
            models.Index(fields=["tenant", "code"]),
            models.Index(fields=["tenant", "status"]),
        ]

    def __str__(self) -> str:
        return self.code


class Form(SoftDeleteModel):
    """
    A protectable screen / API resource, e.g. "APPOINTMENTS", "CLIENTS".
    Global: every tenant's roles are granted against the same catalog.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    code = models.CharField(max_length=64, unique=True)
    name = models.CharField(max_length=128)
    description = models.CharField(max_length=255, blank=True, default="")
    module = models.CharField(max_length=64, blank=True, default="", db_index=True)

    class Meta:
        db_table = "iam_form"
        ordering = ["module", "code"]

    def __str__(self) -> str:
        return self.code


class Permission(SoftDeleteModel):
    """
    Reusable CRUD bundle. Shared by many (role, form) grants and never
    mutated in place: a different flag set means a different bundle.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    name = models.CharField(max_length=64, unique=True)

    can_read = models.BooleanField(default=False)
    can_create = models.BooleanField(default=False)
    can_update = models.BooleanField(default=False)
    can_delete = models.BooleanField(default=False)

    class Meta:
        db_table = "iam_permission"
        constraints = [
            models.UniqueConstraint(
                fields=["can_read", "can_create", "can_update", "can_delete"],
                name="uq_permission_flags",
            ),
        ]

    def __str__(self) -> str:
        return self.name


class RoleFormPermission(SoftDeleteModel):
    """
    Grants `permission` on `form` to `role`. At most one row per (role, form).
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    role = models.ForeignKey(Role, on_delete=models.CASCADE, related_name="form_permissions")
    form = models.ForeignKey(Form, on_delete=models.PROTECT, related_name="role_permissions")
    permission = models.ForeignKey(Permission, on_delete=models.PROTECT, related_name="role_form_grants")

    class Meta:
        db_table = "iam_role_form_permission"
        constraints = [
            models.UniqueConstraint(fields=["role", "form"], name="uq_role_form"),
        ]
        indexes = [
            models.Index(fields=["role", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.role_id}:{self.form_id} -> {self.permission_id}"


class UserProfile(SoftDeleteModel):
    """
    Portal user profile anchored to Django's AUTH_USER_MODEL.
    A user belongs to exactly one tenant.
    """
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user = models.OneToOneField(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="pqr_profile")
    tenant = models.ForeignKey(Tenant, on_delete=models.PROTECT, related_name="user_profiles")

    document_type = models.CharField(max_length=8, choices=DocumentType.choices(), blank=True, default="")
    document_number = models.CharField(max_length=20, blank=True, default="")
    phone = models.CharField(max_length=16, blank=True, default="")

    roles = models.ManyToManyField(Role, through="UserRole", related_name="user_profiles")

    class Meta:
        db_table = "iam_user_profile"
        indexes = [
            models.Index(fields=["tenant", "status"]),
        ]

    def __str__(self) -> str:
        return f"{self.user.get_username()} ({self.tenant.code})"


class UserRole(models.Model):
    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)

    user_profile = models.ForeignKey(UserProfile, on_delete=models.CASCADE, related_name="user_roles")
    role = models.ForeignKey(Role, on_delete=models.PROTECT, related_name="user_roles")

    assigned_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "iam_user_role"
        constraints = [
            models.UniqueConstraint(fields=["user_profile", "role"], name="uq_user_profile_role"),
        ]
