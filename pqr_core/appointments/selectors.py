# pqr_core/appointments/selectors.py
from __future__ import annotations

from datetime import date, time
from uuid import UUID

from django.db.models import QuerySet

from pqr_core.appointments.models import (
    RELEASED_STATUSES,
    Appointment,
    AppointmentStatus,
    AppointmentType,
)
from pqr_core.common.errors import NotFoundError
from pqr_core.common.models import RecordStatus
from pqr_core.values import TimeSlot


def appointment_types_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[AppointmentType]:
    qs = AppointmentType.objects.filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("display_order", "name")


def active_appointment_type(*, tenant_id: UUID, appointment_type_id: UUID) -> AppointmentType:
    t = AppointmentType.objects.filter(
        id=appointment_type_id, tenant_id=tenant_id, status=RecordStatus.ACTIVE
    ).first()
    if t is None:
        raise NotFoundError("AppointmentType", appointment_type_id)
    return t


def appointments_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[Appointment]:
    qs = Appointment.objects.select_related("client", "branch", "appointment_type").filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("appointment_date", "appointment_time")


def get_appointment(*, tenant_id: UUID, appointment_id: UUID) -> Appointment:
    """Including inactive rows."""
    return appointments_for_tenant(tenant_id=tenant_id, active_only=False).get(id=appointment_id)


def appointment_by_number(*, tenant_id: UUID, appointment_number: str) -> Appointment | None:
    return (
        appointments_for_tenant(tenant_id=tenant_id, active_only=False)
        .filter(appointment_number=(appointment_number or "").strip().upper())
        .first()
    )


def appointments_for_client(*, tenant_id: UUID, client_id: UUID, active_only: bool = True) -> QuerySet[Appointment]:
    return appointments_for_tenant(tenant_id=tenant_id, active_only=active_only).filter(client_id=client_id)


def appointments_for_branch(
    *,
    tenant_id: UUID,
    branch_id: UUID,
    on: date | None = None,
    active_only: bool = True,
) -> QuerySet[Appointment]:
    qs = appointments_for_tenant(tenant_id=tenant_id, active_only=active_only).filter(branch_id=branch_id)
    if on is not None:
        qs = qs.filter(appointment_date=on)
    return qs


def appointments_by_status(*, tenant_id: UUID, appointment_status: str) -> QuerySet[Appointment]:
    return appointments_for_tenant(tenant_id=tenant_id).filter(appointment_status=appointment_status)


def pending_appointments(*, tenant_id: UUID, from_date: date | None = None) -> QuerySet[Appointment]:
    """Upcoming appointments still waiting to be attended."""
    qs = appointments_for_tenant(tenant_id=tenant_id).filter(
        appointment_status__in=[AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED]
    )
    if from_date is not None:
        qs = qs.filter(appointment_date__gte=from_date)
    return qs


def _slot_holders(*, tenant_id: UUID, branch_id: UUID, on: date) -> QuerySet[Appointment]:
    return Appointment.objects.filter(
        tenant_id=tenant_id,
        branch_id=branch_id,
        appointment_date=on,
        status=RecordStatus.ACTIVE,
    ).exclude(appointment_status__in=RELEASED_STATUSES)


def slot_is_taken(*, tenant_id: UUID, branch_id: UUID, on: date, at: time) -> bool:
    return _slot_holders(tenant_id=tenant_id, branch_id=branch_id, on=on).filter(appointment_time=at).exists()


def available_times(*, tenant_id: UUID, branch_id: UUID, on: date) -> list[str]:
    """
    Bookable half-hour slots (08:00..17:30) not held by an open appointment.
    Does not apply the Sunday/holiday/daily-limit rules; see AppointmentService.check_schedulable.
    """
    booked = {
        t.strftime("%H:%M")
        for t in _slot_holders(tenant_id=tenant_id, branch_id=branch_id, on=on).values_list(
            "appointment_time", flat=True
        )
    }
    return [s.value for s in TimeSlot.bookable_slots() if s.value not in booked]


def validate_availability(*, tenant_id: UUID, branch_id: UUID, on: date, at: str | time) -> bool:
    slot = TimeSlot.create(at)
    return not slot_is_taken(tenant_id=tenant_id, branch_id=branch_id, on=on, at=slot.time_of_day)
