# pqr_core/holidays/selectors.py
from __future__ import annotations

from datetime import date
from uuid import UUID

from django.db.models import Q, QuerySet

from pqr_core.common.models import RecordStatus
from pqr_core.holidays.models import Holiday


def holidays_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[Holiday]:
    qs = Holiday.objects.filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("date")


def holidays_for_branch(*, tenant_id: UUID, branch_id: UUID | None) -> QuerySet[Holiday]:
    """Active holidays that close the given branch (tenant-wide ones included)."""
    qs = holidays_for_tenant(tenant_id=tenant_id)
    if branch_id is None:
        return qs.filter(branch__isnull=True)
    return qs.filter(Q(branch__isnull=True) | Q(branch_id=branch_id))


def is_holiday(*, tenant_id: UUID, on: date, branch_id: UUID | None = None) -> bool:
    return holidays_for_branch(tenant_id=tenant_id, branch_id=branch_id).filter(date=on).exists()


def holidays_between(
    *,
    tenant_id: UUID,
    start: date,
    end: date,
    branch_id: UUID | None = None,
) -> QuerySet[Holiday]:
    qs = holidays_for_tenant(tenant_id=tenant_id).filter(date__gte=start, date__lte=end)
    if branch_id is not None:
        qs = qs.filter(Q(branch__isnull=True) | Q(branch_id=branch_id))
    return qs


def holidays_in_year(*, tenant_id: UUID, year: int) -> QuerySet[Holiday]:
    return holidays_for_tenant(tenant_id=tenant_id).filter(date__year=year)
