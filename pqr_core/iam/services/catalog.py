# pqr_core/iam/services/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from django.db import IntegrityError, transaction
from rest_framework.exceptions import ValidationError

from pqr_core.audit.services import AuditService
from pqr_core.common.errors import BusinessRuleError, NotFoundError
from pqr_core.iam.models import Form, Permission, Role
from pqr_core.iam.services.authorization import PermissionFlags
from pqr_core.tenants.models import Tenant

logger = logging.getLogger(__name__)


def _required(field: str, value: Optional[str]) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError({field: "This field is required."})
    return value


def _free_bundle_name(base: str) -> str:
    """base, or "base (2)", "base (3)"... when an admin already took that name."""
    name, n = base, 1
    while Permission.objects.filter(name=name).exists():
        n += 1
        name = f"{base} ({n})"
    return name


@dataclass(frozen=True)
class RoleUpdate:
    name: Optional[str] = None
    code: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class FormUpdate:
    name: Optional[str] = None
    description: Optional[str] = None
    module: Optional[str] = None


class RoleService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        tenant_id: UUID,
        code: str,
        name: str,
        description: str = "",
        actor_user_id: int | None = None,
    ) -> Role:
        code = _required("code", code).lower()
        name = _required("name", name)

        if not Tenant.objects.filter(id=tenant_id).exists():
            raise NotFoundError("Tenant", tenant_id)

        if Role.objects.filter(tenant_id=tenant_id, code=code).exists():
            raise ValidationError({"code": "A role with this code already exists in this tenant."})

        role = Role.objects.create(tenant_id=tenant_id, code=code, name=name, description=description or "")

        AuditService.log(
            event_code="role.created",
            entity_type="Role",
            entity_id=role.id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={"code": code},
        )
        return role

    @staticmethod
    @transaction.atomic
    def update(*, tenant_id: UUID, role_id: UUID, patch: RoleUpdate) -> Role:
        role = Role.objects.select_for_update().get(id=role_id, tenant_id=tenant_id)

        if patch.code is not None:
            code = _required("code", patch.code).lower()
            if Role.objects.filter(tenant_id=tenant_id, code=code).exclude(id=role.id).exists():
                raise ValidationError({"code": "A role with this code already exists in this tenant."})
            role.code = code
        if patch.name is not None:
            role.name = _required("name", patch.name)
        if patch.description is not None:
            role.description = patch.description

        role.save()
        return role

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, role_id: UUID, actor_user_id: int | None = None) -> Role:
        """
        Soft delete. Grants and user assignments are kept; the resolver simply
        stops seeing them while the role is INACTIVE.
        """
        role = Role.objects.select_for_update().get(id=role_id, tenant_id=tenant_id)
        if role.deactivate():
            role.save(update_fields=["status", "deactivated_at", "updated_at"])
            logger.info("Role %s deactivated in tenant %s", role.code, tenant_id)
            AuditService.log(
                event_code="role.deactivated",
                entity_type="Role",
                entity_id=role.id,
                tenant_id=tenant_id,
                actor_user_id=actor_user_id,
            )
        return role

    @staticmethod
    @transaction.atomic
    def reactivate(*, tenant_id: UUID, role_id: UUID) -> Role:
        role = Role.objects.select_for_update().get(id=role_id, tenant_id=tenant_id)
        if role.reactivate():
            role.save(update_fields=["status", "deactivated_at", "updated_at"])
        return role


class FormService:
    @staticmethod
    @transaction.atomic
    def create(*, code: str, name: str, description: str = "", module: str = "") -> Form:
        code = _required("code", code).upper()
        name = _required("name", name)

        try:
            with transaction.atomic():
                form = Form.objects.create(
                    code=code,
                    name=name,
                    description=description or "",
                    module=(module or "").strip().upper(),
                )
        except IntegrityError:
            raise ValidationError({"code": "A form with this code already exists."})

        logger.info("Form %s created", code)
        return form

    @staticmethod
    @transaction.atomic
    def update(*, form_id: UUID, patch: FormUpdate) -> Form:
        form = Form.objects.select_for_update().get(id=form_id)

        if patch.name is not None:
            form.name = _required("name", patch.name)
        if patch.description is not None:
            form.description = patch.description
        if patch.module is not None:
            form.module = patch.module.strip().upper()

        form.save()
        return form

    @staticmethod
    @transaction.atomic
    def deactivate(*, form_id: UUID) -> Form:
        form = Form.objects.select_for_update().get(id=form_id)
        if form.deactivate():
            form.save(update_fields=["status", "deactivated_at", "updated_at"])
            logger.info("Form %s deactivated", form.code)
        return form

    @staticmethod
    @transaction.atomic
    def reactivate(*, form_id: UUID) -> Form:
        form = Form.objects.select_for_update().get(id=form_id)
        if form.reactivate():
            form.save(update_fields=["status", "deactivated_at", "updated_at"])
        return form


class PermissionService:
    """
    Bundles are keyed by their flag combination. Creating a bundle for a
    combination that already exists is rejected; use get_or_create_bundle.
    """

    @staticmethod
    @transaction.atomic
    def create(*, flags: PermissionFlags, name: Optional[str] = None) -> Permission:
        name = (name or "").strip() or flags.name

        if Permission.objects.filter(**flags.as_dict()).exists():
            raise ValidationError({"flags": "A permission with this flag combination already exists."})
        if Permission.objects.filter(name=name).exists():
            raise ValidationError({"name": "A permission with this name already exists."})

        return Permission.objects.create(name=name, **flags.as_dict())

    @staticmethod
    @transaction.atomic
    def ensure_bundle(*, flags: PermissionFlags) -> Permission:
        """
        Returns the bundle for exactly these flags, whatever its status, creating
        it when missing. A deactivated bundle stays deactivated.
        """
        bundle = Permission.objects.select_for_update().filter(**flags.as_dict()).first()
        if bundle is not None:
            return bundle
        return Permission.objects.create(name=_free_bundle_name(flags.name), **flags.as_dict())

    @staticmethod
    @transaction.atomic
    def get_or_create_bundle(*, flags: PermissionFlags) -> Permission:
        """
        Active bundle for exactly these flags. Raises BusinessRuleError when it
        was deactivated: only PermissionService.reactivate brings it back.
        """
        bundle = PermissionService.ensure_bundle(flags=flags)
        if not bundle.is_active:
            raise BusinessRuleError(
                f"Permission bundle {bundle.name} is deactivated; reactivate it first.",
                code="permission_inactive",
            )
        return bundle

    @staticmethod
    @transaction.atomic
    def rename(*, permission_id: UUID, name: str) -> Permission:
        name = _required("name", name)
        bundle = Permission.objects.select_for_update().get(id=permission_id)
        if Permission.objects.filter(name=name).exclude(id=bundle.id).exists():
            raise ValidationError({"name": "A permission with this name already exists."})
        bundle.name = name
        bundle.save(update_fields=["name", "updated_at"])
        return bundle

    @staticmethod
    @transaction.atomic
    def deactivate(*, permission_id: UUID) -> Permission:
        bundle = Permission.objects.select_for_update().get(id=permission_id)
        if bundle.deactivate():
            bundle.save(update_fields=["status", "deactivated_at", "updated_at"])
            logger.info("Permission bundle %s deactivated", bundle.name)
        return bundle

    @staticmethod
    @transaction.atomic
    def reactivate(*, permission_id: UUID) -> Permission:
        bundle = Permission.objects.select_for_update().get(id=permission_id)
        if bundle.reactivate():
            bundle.save(update_fields=["status", "deactivated_at", "updated_at"])
        return bundle
