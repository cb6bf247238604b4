# pqr_core/tenants/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import Q, QuerySet

from pqr_core.tenants.models import Tenant


def search_tenants(*, status: str | None = None, q: str | None = None) -> QuerySet[Tenant]:
    qs = Tenant.objects.all()
    if status:
        qs = qs.filter(status=status.strip().upper())
    qv = (q or "").strip()
    if qv:
        qs = qs.filter(Q(name__icontains=qv) | Q(code__icontains=qv) | Q(nit__icontains=qv))
    return qs.order_by("name")


def get_tenant(*, tenant_id: UUID) -> Tenant:
    return Tenant.objects.get(id=tenant_id)


def tenant_by_code(*, code: str) -> Tenant | None:
    return Tenant.objects.filter(code=(code or "").strip().lower()).first()
