# pqr_core/iam/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from pqr_core.common.models import RecordStatus
from pqr_core.iam.models import Form, Permission, Role, RoleFormPermission, UserProfile
from pqr_core.iam.services.authorization import PermissionFlags


def roles_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[Role]:
    qs = Role.objects.filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("code")


def role_by_id(*, tenant_id: UUID, role_id: UUID) -> Role:
    return Role.objects.get(id=role_id, tenant_id=tenant_id)


def forms(*, active_only: bool = True, module: str | None = None) -> QuerySet[Form]:
    qs = Form.objects.all()
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    if module:
        qs = qs.filter(module=module.strip().upper())
    return qs.order_by("module", "code")


def form_by_code(*, code: str) -> Form:
    return Form.objects.get(code=(code or "").strip().upper())


def permissions(*, active_only: bool = True) -> QuerySet[Permission]:
    qs = Permission.objects.all()
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("name")


def role_form_assignments(
    *,
    tenant_id: UUID,
    role_id: UUID | None = None,
    form_id: UUID | None = None,
    active_only: bool = False,
) -> QuerySet[RoleFormPermission]:
    qs = RoleFormPermission.objects.select_related("role", "form", "permission").filter(role__tenant_id=tenant_id)
    if role_id:
        qs = qs.filter(role_id=role_id)
    if form_id:
        qs = qs.filter(form_id=form_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("role__code", "form__code")


def role_permission_summary(*, tenant_id: UUID) -> list[dict]:
    """
    Per active role: the forms it can reach and the flags on each.
    Inactive forms, bundles and grants are left out.
    """
    summary: dict[UUID, dict] = {}
    for role in roles_for_tenant(tenant_id=tenant_id):
        summary[role.id] = {"role_id": str(role.id), "role_code": role.code, "role_name": role.name, "forms": []}

    grants = role_form_assignments(tenant_id=tenant_id, active_only=True).filter(
        role__status=RecordStatus.ACTIVE,
        form__status=RecordStatus.ACTIVE,
        permission__status=RecordStatus.ACTIVE,
    )
    for g in grants:
        summary[g.role_id]["forms"].append(
            {"form_code": g.form.code, "permission": g.permission.name, **PermissionFlags.of(g.permission).as_dict()}
        )
    return list(summary.values())


def profiles_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[UserProfile]:
    qs = UserProfile.objects.select_related("user").filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("user__username")
