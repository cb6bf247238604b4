# pqr_core/holidays/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional
from uuid import UUID

from django.db import transaction

from pqr_core.branches.selectors import active_branch
from pqr_core.common.errors import ValidationError
from pqr_core.common.models import RecordStatus
from pqr_core.holidays.models import Holiday, HolidayType

logger = logging.getLogger(__name__)

_UNSET = object()


@dataclass(frozen=True)
class HolidayUpdate:
    date: Optional[date] = None
    name: Optional[str] = None
    holiday_type: Optional[str] = None
    branch_id: object = _UNSET  # None clears the branch


def _check_scope(holiday_type: str, branch_id: UUID | None) -> None:
    if holiday_type not in HolidayType.values:
        raise ValidationError("holiday_type", f"Invalid holiday type. Allowed: {list(HolidayType.values)}")
    if holiday_type == HolidayType.LOCAL and branch_id is None:
        raise ValidationError("branch_id", "Local holidays must name a branch.")
    if holiday_type == HolidayType.NATIONAL and branch_id is not None:
        raise ValidationError("branch_id", "National holidays apply to every branch.")


def _check_duplicate(*, tenant_id: UUID, on: date, branch_id: UUID | None, exclude_id: UUID | None = None) -> None:
    qs = Holiday.objects.filter(tenant_id=tenant_id, date=on, branch_id=branch_id, status=RecordStatus.ACTIVE)
    if exclude_id:
        qs = qs.exclude(id=exclude_id)
    if qs.exists():
        raise ValidationError("date", f"A holiday already exists on {on.isoformat()}.")


class HolidayService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        tenant_id: UUID,
        date: date,
        name: str,
        holiday_type: str = HolidayType.NATIONAL,
        branch_id: UUID | None = None,
    ) -> Holiday:
        name = (name or "").strip()
        if not name:
            raise ValidationError("name", "Holiday name is required.")

        _check_scope(holiday_type, branch_id)
        if branch_id is not None:
            active_branch(tenant_id=tenant_id, branch_id=branch_id)
        _check_duplicate(tenant_id=tenant_id, on=date, branch_id=branch_id)

        h = Holiday.objects.create(
            tenant_id=tenant_id,
            date=date,
            name=name,
            holiday_type=holiday_type,
            branch_id=branch_id,
        )
        logger.info("Holiday %s (%s) created in tenant %s", h.date, h.holiday_type, tenant_id)
        return h

    @staticmethod
    @transaction.atomic
    def update(*, tenant_id: UUID, holiday_id: UUID, patch: HolidayUpdate) -> Holiday:
        h = Holiday.objects.select_for_update().get(id=holiday_id, tenant_id=tenant_id)

        new_type = patch.holiday_type if patch.holiday_type is not None else h.holiday_type
        new_branch = h.branch_id if patch.branch_id is _UNSET else patch.branch_id
        new_date = patch.date if patch.date is not None else h.date

        _check_scope(new_type, new_branch)
        if new_branch is not None and new_branch != h.branch_id:
            active_branch(tenant_id=tenant_id, branch_id=new_branch)
        _check_duplicate(tenant_id=tenant_id, on=new_date, branch_id=new_branch, exclude_id=h.id)

        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("name", "Holiday name is required.")
            h.name = patch.name.strip()

        h.holiday_type = new_type
        h.branch_id = new_branch
        h.date = new_date
        h.save()
        return h

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, holiday_id: UUID) -> Holiday:
        h = Holiday.objects.select_for_update().get(id=holiday_id, tenant_id=tenant_id)
        if h.deactivate():
            h.save(update_fields=["status", "deactivated_at", "updated_at"])
        return h
