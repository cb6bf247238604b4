from datetime import timedelta

import pytest
from django.utils import timezone

from pqr_core.appointments.services import AppointmentService
from pqr_core.audit.models import AuditEvent
from pqr_core.audit.selectors import entity_timeline, list_audit_events
from pqr_core.audit.services import AuditService
from pqr_core.common.errors import ValidationError

pytestmark = pytest.mark.django_db


def test_log_stores_an_event_scoped_to_the_tenant(tenant, other_tenant, user):
    event = AuditService.log(
        event_code="role.created",
        entity_type="Role",
        entity_id=tenant.id,
        tenant_id=tenant.id,
        actor_user_id=user.id,
        metadata={"code": "agent"},
    )

    assert list_audit_events(tenant_id=other_tenant.id).count() == 0
    assert list(list_audit_events(tenant_id=tenant.id, event_code="role.created")) == [event]
    assert event.metadata == {"code": "agent"}


@pytest.mark.parametrize("code", ["", "created", "Role.Created", "role.created.twice"])
def test_log_rejects_malformed_event_codes(tenant, code):
    with pytest.raises(ValidationError) as exc:
        AuditService.log(event_code=code, entity_type="Role", entity_id=tenant.id, tenant_id=tenant.id)
    assert exc.value.field == "event_code"


def test_record_derives_entity_from_the_instance(client_record, user):
    event = AuditService.record(client_record, "client.exported", actor_user_id=user.id, format="csv")

    assert event.entity_type == "Client"
    assert event.entity_id == client_record.id
    assert event.tenant_id == client_record.tenant_id
    assert event.metadata == {"format": "csv"}


def test_events_cannot_be_rewritten(client_record):
    event = AuditService.record(client_record, "client.exported")
    event.event_code = "client.deleted"
    with pytest.raises(RuntimeError):
        event.save()


def test_entity_timeline_is_oldest_first(tenant, user, appointment):
    AppointmentService.start(tenant_id=tenant.id, appointment_id=appointment.id, actor_user_id=user.id)
    AppointmentService.complete(tenant_id=tenant.id, appointment_id=appointment.id, actor_user_id=user.id)

    codes = [
        e.event_code
        for e in entity_timeline(tenant_id=tenant.id, entity_type="Appointment", entity_id=appointment.id)
    ]
    assert codes == ["appointment.scheduled", "appointment.started", "appointment.completed"]


def test_appointment_events_are_filterable(api_client, headers, tenant, user, appointment):
    AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id, actor_user_id=user.id)

    res = api_client.get(f"/api/v1/audit/events/?entity_type=Appointment&entity_id={appointment.id}", **headers)
    assert res.status_code == 200
    body = res.json()["results"]
    assert {e["event_code"] for e in body} == {"appointment.scheduled", "appointment.cancelled"}
    assert {e["actor_username"] for e in body} == {user.username}

    res = api_client.get(f"/api/v1/audit/events/?actor_user_id={user.id}&event_code=appointment.cancelled", **headers)
    assert res.json()["count"] == 1

    assert api_client.get("/api/v1/audit/events/?entity_id=nope", **headers).status_code == 400
    assert api_client.get("/api/v1/audit/events/?actor_user_id=x", **headers).status_code == 400


def test_date_window_filters(api_client, headers, tenant, appointment):
    today = timezone.localdate()

    res = api_client.get(f"/api/v1/audit/events/?since={today.isoformat()}", **headers)
    assert res.json()["count"] == AuditEvent.objects.filter(tenant_id=tenant.id).count()

    res = api_client.get(f"/api/v1/audit/events/?until={(today - timedelta(days=1)).isoformat()}", **headers)
    assert res.json()["count"] == 0

    assert api_client.get("/api/v1/audit/events/?since=yesterday", **headers).status_code == 400


def test_appointment_history_endpoint(api_client, headers, tenant, user, appointment):
    AppointmentService.cancel(tenant_id=tenant.id, appointment_id=appointment.id, actor_user_id=user.id)

    res = api_client.get(f"/api/v1/appointments/{appointment.id}/history/", **headers)
    assert res.status_code == 200
    assert [e["event_code"] for e in res.json()] == ["appointment.scheduled", "appointment.cancelled"]
    assert res.json()[1]["metadata"] == {"reason": "Not specified"}
