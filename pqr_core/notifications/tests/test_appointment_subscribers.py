import pytest

from pqr_core.appointments.models import AppointmentStatus
from pqr_core.appointments.services import AppointmentService
from pqr_core.clients.services import ClientService
from pqr_core.notifications.models import NotificationType
from pqr_core.notifications.selectors import notifications_for_appointment, notifications_for_client
from pqr_core.notifications.services import NotificationService

pytestmark = pytest.mark.django_db


def test_scheduling_notifies_the_client_by_email(tenant, client_record, appointment):
    notes = list(notifications_for_appointment(tenant_id=tenant.id, appointment_id=appointment.id))

    assert len(notes) == 1
    n = notes[0]
    assert n.client_id == client_record.id
    assert n.user_id is None
    assert n.notification_type == NotificationType.EMAIL
    assert n.title == "Appointment confirmed"
    assert appointment.appointment_number in n.message
    assert n.metadata["event"] == "appointment.scheduled"


def test_cancelling_notifies_with_the_reason(tenant, appointment):
    AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id, reason="Cierre de sede")

    notes = list(notifications_for_appointment(tenant_id=tenant.id, appointment_id=appointment.id))
    assert [n.title for n in notes] == ["Appointment confirmed", "Appointment cancelled"]
    assert "Cierre de sede" in notes[1].message


def test_client_without_email_gets_an_sms(tenant, branch, appointment_type, workday):
    client = ClientService.create(
        tenant_id=tenant.id,
        document_type="CC",
        document_number="80123456",
        full_name="Luis Gómez",
        mobile="3157654321",
    )
    AppointmentService.schedule(
        tenant_id=tenant.id,
        client_id=client.id,
        branch_id=branch.id,
        appointment_type_id=appointment_type.id,
        appointment_date=workday,
        appointment_time="11:00",
    )

    (n,) = notifications_for_client(tenant_id=tenant.id, client_id=client.id)
    assert n.notification_type == NotificationType.SMS


def test_notification_failure_does_not_undo_the_cancellation(tenant, appointment, monkeypatch):
    def boom(**kwargs):
        raise RuntimeError("gateway unavailable")

    monkeypatch.setattr(NotificationService, "create", staticmethod(boom))

    appt = AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id)
    appt.refresh_from_db()

    assert appt.appointment_status == AppointmentStatus.CANCELLED
    titles = [n.title for n in notifications_for_appointment(tenant_id=tenant.id, appointment_id=appt.id)]
    assert titles == ["Appointment confirmed"]


def test_message_carries_the_company_support_line(tenant, client_record, branch, appointment_type, workday):
    from pqr_core.tenants.services import TenantProfileUpdate, TenantService

    TenantService.update_profile(tenant_id=tenant.id, patch=TenantProfileUpdate(support_phone="6088664600"))
    appt = AppointmentService.schedule(
        tenant_id=tenant.id,
        client_id=client_record.id,
        branch_id=branch.id,
        appointment_type_id=appointment_type.id,
        appointment_date=workday,
        appointment_time="15:30",
    )

    (n,) = notifications_for_appointment(tenant_id=tenant.id, appointment_id=appt.id)
    assert n.message.endswith("Support line: 6088664600.")
    assert n.metadata["sender"] == "Electro Test"
