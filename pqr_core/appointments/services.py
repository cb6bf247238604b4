# pqr_core/appointments/services.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from pqr_core.appointments.models import (
    RELEASED_STATUSES,
    Appointment,
    AppointmentStatus,
    AppointmentType,
)
from pqr_core.appointments.selectors import active_appointment_type, slot_is_taken
from pqr_core.audit.services import AuditService
from pqr_core.branches.models import Branch
from pqr_core.branches.selectors import active_branch
from pqr_core.clients.selectors import active_client
from pqr_core.common.errors import BusinessRuleError, ValidationError
from pqr_core.common.events import publish
from pqr_core.common.models import RecordStatus
from pqr_core.holidays.selectors import is_holiday
from pqr_core.system_settings.keys import DEFAULT_MAX_APPOINTMENTS_PER_DAY, MAX_APPOINTMENTS_PER_DAY
from pqr_core.system_settings.selectors import get_int
from pqr_core.values import AppointmentNumber, TimeSlot

logger = logging.getLogger(__name__)

DEFAULT_CANCELLATION_REASON = "Not specified"


@dataclass(frozen=True)
class AppointmentTypeUpdate:
    name: Optional[str] = None
    description: Optional[str] = None
    estimated_minutes: Optional[int] = None
    requires_documentation: Optional[bool] = None
    display_order: Optional[int] = None


def _estimated_minutes(value: int) -> int:
    if value is None or int(value) <= 0:
        raise ValidationError("estimated_minutes", "Estimated minutes must be greater than zero.")
    return int(value)


class AppointmentTypeService:
    @staticmethod
    @transaction.atomic
    def create(
        *,
        tenant_id: UUID,
        code: str,
        name: str,
        description: str = "",
        estimated_minutes: int = 30,
        requires_documentation: bool = False,
        display_order: int = 0,
    ) -> AppointmentType:
        code = (code or "").strip().upper()
        name = (name or "").strip()
        if not code:
            raise ValidationError("code", "Code is required.")
        if not name:
            raise ValidationError("name", "Name is required.")
        if AppointmentType.objects.filter(tenant_id=tenant_id, code=code).exists():
            raise ValidationError("code", f"Appointment type {code} already exists.")

        return AppointmentType.objects.create(
            tenant_id=tenant_id,
            code=code,
            name=name,
            description=description or "",
            estimated_minutes=_estimated_minutes(estimated_minutes),
            requires_documentation=requires_documentation,
            display_order=display_order,
        )

    @staticmethod
    @transaction.atomic
    def update(*, tenant_id: UUID, appointment_type_id: UUID, patch: AppointmentTypeUpdate) -> AppointmentType:
        t = AppointmentType.objects.select_for_update().get(id=appointment_type_id, tenant_id=tenant_id)

        if patch.name is not None:
            if not patch.name.strip():
                raise ValidationError("name", "Name is required.")
            t.name = patch.name.strip()
        if patch.description is not None:
            t.description = patch.description
        if patch.estimated_minutes is not None:
            t.estimated_minutes = _estimated_minutes(patch.estimated_minutes)
        if patch.requires_documentation is not None:
            t.requires_documentation = patch.requires_documentation
        if patch.display_order is not None:
            t.display_order = patch.display_order

        t.save()
        return t

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, appointment_type_id: UUID) -> AppointmentType:
        t = AppointmentType.objects.select_for_update().get(id=appointment_type_id, tenant_id=tenant_id)
        if t.deactivate():
            t.save(update_fields=["status", "deactivated_at", "updated_at"])
        return t


def _event_payload(appt: Appointment, **extra) -> dict:
    return {
        "tenant_id": str(appt.tenant_id),
        "appointment_id": str(appt.id),
        "appointment_number": appt.appointment_number,
        "client_id": str(appt.client_id),
        "branch_id": str(appt.branch_id),
        "appointment_date": appt.appointment_date.isoformat(),
        "appointment_time": appt.appointment_time.strftime("%H:%M"),
        **extra,
    }


def _locked(*, tenant_id: UUID, appointment_id: UUID) -> Appointment:
    return Appointment.objects.select_for_update().get(
        id=appointment_id,
        tenant_id=tenant_id,
        status=RecordStatus.ACTIVE,
    )


class AppointmentService:
    """
    Appointment lifecycle:
      CONFIRMED/PENDING -> IN_PROGRESS -> COMPLETED
      any open state -> CANCELLED
    COMPLETED and CANCELLED are terminal and release the slot.
    """

    @staticmethod
    def check_schedulable(
        *,
        tenant_id: UUID,
        branch_id: UUID,
        appointment_date: date,
        slot: TimeSlot,
        now: datetime | None = None,
    ) -> None:
        """
        Raises BusinessRuleError when the branch cannot take an appointment at
        (date, slot). Does not lock; schedule() re-checks under the branch lock.
        """
        now = timezone.localtime(now or timezone.now())

        if appointment_date < now.date():
            raise BusinessRuleError("Appointments cannot be scheduled in the past.")
        if appointment_date == now.date() and slot.time_of_day <= now.time():
            raise BusinessRuleError("The requested time has already passed.")
        if appointment_date.weekday() == 6:
            raise BusinessRuleError("Branches do not attend on Sundays.")
        if is_holiday(tenant_id=tenant_id, on=appointment_date, branch_id=branch_id):
            raise BusinessRuleError(f"{appointment_date.isoformat()} is a holiday.")

        limit = get_int(
            tenant_id=tenant_id,
            key=MAX_APPOINTMENTS_PER_DAY,
            default=DEFAULT_MAX_APPOINTMENTS_PER_DAY,
        )
        booked = (
            Appointment.objects.filter(
                tenant_id=tenant_id,
                branch_id=branch_id,
                appointment_date=appointment_date,
                status=RecordStatus.ACTIVE,
            )
            .exclude(appointment_status=AppointmentStatus.CANCELLED)
            .count()
        )
        if booked >= limit:
            raise BusinessRuleError(f"The branch reached its limit of {limit} appointments for this day.")

        if slot_is_taken(tenant_id=tenant_id, branch_id=branch_id, on=appointment_date, at=slot.time_of_day):
            raise BusinessRuleError(f"The {slot.value} slot is already taken.", code="slot_taken")

    @staticmethod
    @transaction.atomic
    def schedule(
        *,
        tenant_id: UUID,
        client_id: UUID,
        branch_id: UUID,
        appointment_type_id: UUID,
        appointment_date: date,
        appointment_time: str | time,
        notes: str = "",
        actor_user_id: int | None = None,
        now: datetime | None = None,
    ) -> Appointment:
        slot = TimeSlot.create(appointment_time)

        client = active_client(tenant_id=tenant_id, client_id=client_id)
        branch = active_branch(tenant_id=tenant_id, branch_id=branch_id)
        appt_type = active_appointment_type(tenant_id=tenant_id, appointment_type_id=appointment_type_id)

        # one scheduler per branch at a time; the slot/limit checks below rely on it
        Branch.objects.select_for_update().filter(id=branch.id).first()

        AppointmentService.check_schedulable(
            tenant_id=tenant_id,
            branch_id=branch.id,
            appointment_date=appointment_date,
            slot=slot,
            now=now,
        )

        appt = Appointment.objects.create(
            tenant_id=tenant_id,
            appointment_number=AppointmentNumber.generate().value,
            client=client,
            branch=branch,
            appointment_type=appt_type,
            appointment_date=appointment_date,
            appointment_time=slot.time_of_day,
            appointment_status=AppointmentStatus.CONFIRMED,
            notes=notes or "",
            created_by_id=actor_user_id,
        )

        logger.info(
            "Appointment %s scheduled at branch %s on %s %s",
            appt.appointment_number,
            branch.code,
            appointment_date.isoformat(),
            slot.value,
        )
        AuditService.record(
            appt,
            "appointment.scheduled",
            actor_user_id=actor_user_id,
            appointment_number=appt.appointment_number,
            slot=slot.value,
        )
        publish("appointment.scheduled", _event_payload(appt, actor_user_id=actor_user_id))
        return appt

    @staticmethod
    @transaction.atomic
    def cancel(
        *,
        tenant_id: UUID,
        appointment_id: UUID,
        reason: str | None = None,
        actor_user_id: int | None = None,
    ) -> Appointment:
        appt = _locked(tenant_id=tenant_id, appointment_id=appointment_id)

        if appt.appointment_status == AppointmentStatus.CANCELLED:
            raise BusinessRuleError("Appointment is already cancelled.")
        if appt.appointment_status == AppointmentStatus.COMPLETED:
            raise BusinessRuleError("Cannot cancel a completed appointment.")

        appt.appointment_status = AppointmentStatus.CANCELLED
        appt.cancellation_reason = (reason or "").strip() or DEFAULT_CANCELLATION_REASON
        appt.cancelled_at = timezone.now()
        appt.save(update_fields=["appointment_status", "cancellation_reason", "cancelled_at", "updated_at"])

        logger.info("Appointment %s cancelled", appt.appointment_number)
        AuditService.record(appt, "appointment.cancelled", actor_user_id=actor_user_id, reason=appt.cancellation_reason)
        publish(
            "appointment.cancelled",
            _event_payload(appt, reason=appt.cancellation_reason, actor_user_id=actor_user_id),
        )
        return appt

    @staticmethod
    @transaction.atomic
    def start(*, tenant_id: UUID, appointment_id: UUID, actor_user_id: int | None = None) -> Appointment:
        appt = _locked(tenant_id=tenant_id, appointment_id=appointment_id)

        if appt.appointment_status not in (AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED):
            raise BusinessRuleError(f"Cannot start an appointment in status {appt.appointment_status}.")

        appt.appointment_status = AppointmentStatus.IN_PROGRESS
        appt.save(update_fields=["appointment_status", "updated_at"])

        AuditService.record(appt, "appointment.started", actor_user_id=actor_user_id)
        return appt

    @staticmethod
    @transaction.atomic
    def complete(
        *,
        tenant_id: UUID,
        appointment_id: UUID,
        notes: str | None = None,
        actor_user_id: int | None = None,
    ) -> Appointment:
        appt = _locked(tenant_id=tenant_id, appointment_id=appointment_id)

        if appt.appointment_status in RELEASED_STATUSES:
            raise BusinessRuleError(f"Cannot complete an appointment in status {appt.appointment_status}.")

        appt.appointment_status = AppointmentStatus.COMPLETED
        appt.completed_at = timezone.now()
        if notes:
            appt.notes = notes
        appt.save(update_fields=["appointment_status", "completed_at", "notes", "updated_at"])

        logger.info("Appointment %s completed", appt.appointment_number)
        AuditService.record(appt, "appointment.completed", actor_user_id=actor_user_id)
        return appt

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, appointment_id: UUID, actor_user_id: int | None = None) -> Appointment:
        appt = Appointment.objects.select_for_update().get(id=appointment_id, tenant_id=tenant_id)
        if appt.deactivate():
            appt.save(update_fields=["status", "deactivated_at", "updated_at"])
            AuditService.record(appt, "appointment.deactivated", actor_user_id=actor_user_id)
        return appt
