# pqr_core/branches/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from pqr_core.branches.models import Branch
from pqr_core.common.errors import NotFoundError
from pqr_core.common.models import RecordStatus


def branches_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[Branch]:
    qs = Branch.objects.filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("-is_main", "name")


def branch_by_id(*, tenant_id: UUID, branch_id: UUID) -> Branch:
    return Branch.objects.get(id=branch_id, tenant_id=tenant_id)


def active_branch(*, tenant_id: UUID, branch_id: UUID) -> Branch:
    b = Branch.objects.filter(id=branch_id, tenant_id=tenant_id, status=RecordStatus.ACTIVE).first()
    if b is None:
        raise NotFoundError("Branch", branch_id)
    return b


def main_branch(*, tenant_id: UUID) -> Branch | None:
    return Branch.objects.filter(tenant_id=tenant_id, is_main=True, status=RecordStatus.ACTIVE).first()
