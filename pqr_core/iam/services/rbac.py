# pqr_core/iam/services/rbac.py
from __future__ import annotations

import logging
from typing import Iterable
from uuid import UUID

from django.db import transaction
from rest_framework.exceptions import ValidationError

from pqr_core.audit.services import AuditService
from pqr_core.common.errors import NotFoundError
from pqr_core.common.models import RecordStatus
from pqr_core.iam.models import Form, Permission, Role, RoleFormPermission, UserProfile, UserRole
from pqr_core.iam.services.authorization import PermissionFlags
from pqr_core.iam.services.catalog import PermissionService

logger = logging.getLogger(__name__)


def _active(model, entity: str, pk: UUID):
    obj = model.objects.filter(id=pk, status=RecordStatus.ACTIVE).first()
    if obj is None:
        raise NotFoundError(entity, pk)
    return obj


class RbacService:
    """
    Write side of the role -> form -> permission graph.
    Bundles (Permission rows) are shared and never mutated here; a grant is
    changed by pointing it at another bundle.
    """

    @staticmethod
    @transaction.atomic
    def assign_permission(
        *,
        role_id: UUID,
        form_id: UUID,
        permission_id: UUID,
        actor_user_id: int | None = None,
    ) -> RoleFormPermission:
        role = _active(Role, "Role", role_id)
        form = _active(Form, "Form", form_id)
        bundle = _active(Permission, "Permission", permission_id)

        grant = RoleFormPermission.objects.select_for_update().filter(role=role, form=form).first()
        if grant is None:
            grant = RoleFormPermission.objects.create(role=role, form=form, permission=bundle)
        else:
            # one row per (role, form): re-point and revive instead of duplicating
            grant.permission = bundle
            grant.reactivate()
            grant.save(update_fields=["permission", "status", "deactivated_at", "updated_at"])

        logger.info("Granted %s on %s to role %s", bundle.name, form.code, role.code)
        AuditService.log(
            event_code="rbac.permission_assigned",
            entity_type="RoleFormPermission",
            entity_id=grant.id,
            tenant_id=role.tenant_id,
            actor_user_id=actor_user_id,
            metadata={"role": role.code, "form": form.code, "permission": bundle.name},
        )
        return grant

    @staticmethod
    @transaction.atomic
    def revoke_permission(*, role_id: UUID, form_id: UUID, actor_user_id: int | None = None) -> bool:
        """
        Deletes the (role, form) grant. Returns False when there was nothing to delete.
        """
        grant = (
            RoleFormPermission.objects.select_for_update()
            .select_related("role", "form")
            .filter(role_id=role_id, form_id=form_id)
            .first()
        )
        if grant is None:
            return False

        role, form, grant_id = grant.role, grant.form, grant.id
        grant.delete()

        logger.info("Revoked %s from role %s", form.code, role.code)
        AuditService.log(
            event_code="rbac.permission_revoked",
            entity_type="RoleFormPermission",
            entity_id=grant_id,
            tenant_id=role.tenant_id,
            actor_user_id=actor_user_id,
            metadata={"role": role.code, "form": form.code},
        )
        return True

    @staticmethod
    @transaction.atomic
    def update_role_form_permission(
        *,
        role_id: UUID,
        form_id: UUID,
        flags: PermissionFlags,
        actor_user_id: int | None = None,
    ) -> RoleFormPermission:
        """
        Applies a new flag set to an existing grant by re-pointing it at the
        bundle holding exactly those flags (created on demand).
        """
        grant = (
            RoleFormPermission.objects.select_for_update()
            .select_related("role", "form", "permission")
            .filter(role_id=role_id, form_id=form_id)
            .first()
        )
        if grant is None:
            raise NotFoundError("RoleFormPermission", f"{role_id}/{form_id}")

        previous = grant.permission.name
        bundle = PermissionService.get_or_create_bundle(flags=flags)
        grant.permission = bundle
        grant.save(update_fields=["permission", "updated_at"])

        logger.info("Grant %s on role %s changed %s -> %s", grant.form.code, grant.role.code, previous, bundle.name)
        AuditService.log(
            event_code="rbac.permission_updated",
            entity_type="RoleFormPermission",
            entity_id=grant.id,
            tenant_id=grant.role.tenant_id,
            actor_user_id=actor_user_id,
            metadata={"from": previous, "to": bundle.name},
        )
        return grant

    @staticmethod
    @transaction.atomic
    def set_grant_status(*, role_form_permission_id: UUID, active: bool) -> RoleFormPermission:
        grant = RoleFormPermission.objects.select_for_update().get(id=role_form_permission_id)
        changed = grant.reactivate() if active else grant.deactivate()
        if changed:
            grant.save(update_fields=["status", "deactivated_at", "updated_at"])
        return grant

    @staticmethod
    @transaction.atomic
    def assign_roles_to_user(
        *,
        tenant_id: UUID,
        user_profile_id: UUID,
        role_ids: Iterable[UUID],
        actor_user_id: int | None = None,
    ) -> list[Role]:
        """
        Replaces the profile's role set. Every role must belong to the profile's tenant.
        """
        profile = UserProfile.objects.select_for_update().filter(id=user_profile_id, tenant_id=tenant_id).first()
        if profile is None:
            raise NotFoundError("UserProfile", user_profile_id)

        wanted = set(role_ids)
        roles = list(Role.objects.filter(id__in=wanted, tenant_id=tenant_id))
        if len(roles) != len(wanted):
            raise ValidationError({"role_ids": "Every role must exist in this tenant."})

        UserRole.objects.filter(user_profile=profile).exclude(role_id__in=wanted).delete()
        existing = set(UserRole.objects.filter(user_profile=profile).values_list("role_id", flat=True))
        UserRole.objects.bulk_create(
            [UserRole(user_profile=profile, role=r) for r in roles if r.id not in existing]
        )

        AuditService.log(
            event_code="rbac.roles_assigned",
            entity_type="UserProfile",
            entity_id=profile.id,
            tenant_id=tenant_id,
            actor_user_id=actor_user_id,
            metadata={"roles": sorted(r.code for r in roles)},
        )
        return roles
