# pqr_core/iam/services/membership.py
from __future__ import annotations

from uuid import UUID

from pqr_core.common.models import RecordStatus
from pqr_core.iam.models import UserProfile
from pqr_core.tenants.models import TenantStatus


def list_user_tenants(user_id: int) -> list[dict]:
    """
    Tenant memberships for the /me response.

    Membership graph:
      auth_user -> UserProfile -> Tenant (+ UserRole -> Role)
    """
    qs = (
        UserProfile.objects.select_related("tenant")
        .prefetch_related("roles")
        .filter(user_id=user_id, status=RecordStatus.ACTIVE, tenant__status=TenantStatus.ACTIVE)
    )

    items: list[dict] = []
    for p in qs:
        t = p.tenant
        items.append(
            {
                "tenant_id": str(t.id),
                "tenant_code": t.code,
                "tenant_name": t.name,
                "roles": sorted(r.code for r in p.roles.all() if r.is_active),
            }
        )
    return items


def is_user_member_of_tenant(*, user_id: int, tenant_id: UUID) -> bool:
    """
    Validate user -> tenant membership.
    This is the single source of truth used by scope enforcement.
    """
    return UserProfile.objects.filter(
        user_id=user_id,
        user__is_active=True,
        tenant_id=tenant_id,
        tenant__status=TenantStatus.ACTIVE,
        status=RecordStatus.ACTIVE,
    ).exists()
