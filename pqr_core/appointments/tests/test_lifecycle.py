import pytest

from pqr_core.appointments.models import AppointmentStatus
from pqr_core.appointments.selectors import appointments_for_tenant, get_appointment
from pqr_core.appointments.services import DEFAULT_CANCELLATION_REASON, AppointmentService
from pqr_core.audit.models import AuditEvent
from pqr_core.common.errors import BusinessRuleError

pytestmark = pytest.mark.django_db


def test_start_then_complete(tenant, appointment):
    appt = AppointmentService.start(tenant_id=tenant.id, appointment_id=appointment.id)
    assert appt.appointment_status == AppointmentStatus.IN_PROGRESS

    appt = AppointmentService.complete(tenant_id=tenant.id, appointment_id=appointment.id, notes="Resuelto")
    appt.refresh_from_db()
    assert appt.appointment_status == AppointmentStatus.COMPLETED
    assert appt.completed_at is not None
    assert appt.notes == "Resuelto"


def test_complete_without_notes_keeps_existing_notes(tenant, appointment):
    appointment.notes = "Original"
    appointment.save(update_fields=["notes"])

    appt = AppointmentService.complete(tenant_id=tenant.id, appointment_id=appointment.id)
    assert appt.notes == "Original"


def test_cancel_stores_reason_and_timestamp(tenant, appointment, user):
    appt = AppointmentService.cancel(
        tenant_id=tenant.id, appointment_id=appointment.id, reason="  Viaje  ", actor_user_id=user.id
    )
    appt.refresh_from_db()

    assert appt.appointment_status == AppointmentStatus.CANCELLED
    assert appt.cancellation_reason == "Viaje"
    assert appt.cancelled_at is not None
    assert not appt.holds_slot
    assert AuditEvent.objects.get(event_code="appointment.cancelled", entity_id=appt.id).actor_user_id == user.id


def test_cancel_without_reason_uses_default(tenant, appointment):
    appt = AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)
    assert appt.cancellation_reason == DEFAULT_CANCELLATION_REASON


def test_cancel_twice_is_rejected(tenant, appointment):
    AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)
    with pytest.raises(BusinessRuleError, match="already cancelled"):
        AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)


def test_completed_appointment_cannot_be_cancelled(tenant, appointment):
    AppointmentService.complete(tenant_id=tenant.id, appointment_id=appointment.id)
    with pytest.raises(BusinessRuleError, match="completed"):
        AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)


def test_cancelled_appointment_cannot_be_completed_or_started(tenant, appointment):
    AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)
    with pytest.raises(BusinessRuleError):
        AppointmentService.complete(tenant_id=tenant.id, appointment_id=appointment.id)
    with pytest.raises(BusinessRuleError):
        AppointmentService.start(tenant_id=tenant.id, appointment_id=appointment.id)


def test_in_progress_appointment_can_be_cancelled(tenant, appointment):
    AppointmentService.start(tenant_id=tenant.id, appointment_id=appointment.id)
    appt = AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)
    assert appt.appointment_status == AppointmentStatus.CANCELLED


def test_deactivate_hides_from_active_listing_only(tenant, appointment):
    AppointmentService.deactivate(tenant_id=tenant.id, appointment_id=appointment.id)

    assert appointment not in appointments_for_tenant(tenant_id=tenant.id)
    assert appointment in appointments_for_tenant(tenant_id=tenant.id, active_only=False)
    assert get_appointment(tenant_id=tenant.id, appointment_id=appointment.id).is_active is False


def test_deactivated_appointment_frees_its_slot(tenant, appointment, client_record, branch, appointment_type):
    AppointmentService.deactivate(tenant_id=tenant.id, appointment_id=appointment.id)
    again = AppointmentService.schedule(
        tenant_id=tenant.id,
        client_id=client_record.id,
        branch_id=branch.id,
        appointment_type_id=appointment_type.id,
        appointment_date=appointment.appointment_date,
        appointment_time="09:00",
    )
    assert again.id != appointment.id
