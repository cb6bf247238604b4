import pytest

from pqr_core.appointments.models import Appointment, AppointmentStatus

pytestmark = pytest.mark.django_db


def _schedule_payload(client_record, branch, appointment_type, on, at="10:00"):
    return {
        "client_id": str(client_record.id),
        "branch_id": str(branch.id),
        "appointment_type_id": str(appointment_type.id),
        "appointment_date": on.isoformat(),
        "appointment_time": at,
    }


def test_schedule_list_and_retrieve(api_client, headers, client_record, branch, appointment_type, workday):
    res = api_client.post(
        "/api/v1/appointments/",
        _schedule_payload(client_record, branch, appointment_type, workday),
        format="json",
        **headers,
    )
    assert res.status_code == 201
    body = res.json()
    assert body["appointment_status"] == "CONFIRMED"
    assert body["appointment_time"] == "10:00"
    assert body["client_name"] == client_record.full_name
    assert body["appointment_number"].startswith("APT-")

    res = api_client.get("/api/v1/appointments/", **headers)
    assert res.status_code == 200
    assert res.json()["count"] == 1

    res = api_client.get(f"/api/v1/appointments/{body['id']}/", **headers)
    assert res.json()["id"] == body["id"]


def test_schedule_same_slot_twice_is_409(api_client, headers, client_record, branch, appointment_type, workday):
    payload = _schedule_payload(client_record, branch, appointment_type, workday)
    assert api_client.post("/api/v1/appointments/", payload, format="json", **headers).status_code == 201

    res = api_client.post("/api/v1/appointments/", payload, format="json", **headers)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "slot_taken"


def test_off_grid_time_is_400(api_client, headers, client_record, branch, appointment_type, workday):
    res = api_client.post(
        "/api/v1/appointments/",
        _schedule_payload(client_record, branch, appointment_type, workday, at="10:15"),
        format="json",
        **headers,
    )
    assert res.status_code == 400
    assert "appointment_time" in res.json()["error"]["details"]


def test_available_times_endpoint(api_client, headers, branch, appointment):
    res = api_client.get(
        f"/api/v1/appointments/available-times/?branch_id={branch.id}&date={appointment.appointment_date.isoformat()}",
        **headers,
    )
    assert res.status_code == 200
    body = res.json()
    assert body["branch_id"] == str(branch.id)
    assert len(body["available_times"]) == 19
    assert "09:00" not in body["available_times"]


def test_available_times_requires_params(api_client, headers):
    res = api_client.get("/api/v1/appointments/available-times/", **headers)
    assert res.status_code == 400


def test_lifecycle_actions(api_client, headers, appointment):
    base = f"/api/v1/appointments/{appointment.id}"

    res = api_client.post(f"{base}/start/", **headers)
    assert res.status_code == 200
    assert res.json()["appointment_status"] == "IN_PROGRESS"

    res = api_client.post(f"{base}/complete/", {"notes": "Atendido"}, format="json", **headers)
    assert res.status_code == 200
    assert res.json()["appointment_status"] == "COMPLETED"

    res = api_client.post(f"{base}/cancel/", {"reason": "tarde"}, format="json", **headers)
    assert res.status_code == 409


def test_cancel_action(api_client, headers, appointment):
    res = api_client.post(
        f"/api/v1/appointments/{appointment.id}/cancel/", {"reason": "Viaje"}, format="json", **headers
    )
    assert res.status_code == 200
    assert res.json()["cancellation_reason"] == "Viaje"
    assert Appointment.objects.get(id=appointment.id).appointment_status == AppointmentStatus.CANCELLED


def test_list_filters(api_client, headers, appointment, client_record):
    res = api_client.get(f"/api/v1/appointments/?client_id={client_record.id}", **headers)
    assert res.json()["count"] == 1

    res = api_client.get("/api/v1/appointments/?appointment_status=cancelled", **headers)
    assert res.json()["count"] == 0

    res = api_client.get(f"/api/v1/appointments/?number={appointment.appointment_number}", **headers)
    assert res.json()["count"] == 1

    res = api_client.get("/api/v1/appointments/?appointment_status=LOST", **headers)
    assert res.status_code == 400


def test_destroy_is_soft(api_client, headers, appointment):
    res = api_client.delete(f"/api/v1/appointments/{appointment.id}/", **headers)
    assert res.status_code == 200
    assert res.json()["status"] == "INACTIVE"

    assert api_client.get("/api/v1/appointments/", **headers).json()["count"] == 0
    assert api_client.get("/api/v1/appointments/?include_inactive=1", **headers).json()["count"] == 1


def test_appointment_types_crud(api_client, headers):
    res = api_client.post(
        "/api/v1/appointment-types/",
        {"code": "medidor", "name": "Revisión de medidor", "estimated_minutes": 20},
        format="json",
        **headers,
    )
    assert res.status_code == 201
    type_id = res.json()["id"]
    assert res.json()["code"] == "MEDIDOR"

    res = api_client.patch(f"/api/v1/appointment-types/{type_id}/", {"name": "Medidor"}, format="json", **headers)
    assert res.json()["name"] == "Medidor"

    res = api_client.delete(f"/api/v1/appointment-types/{type_id}/", **headers)
    assert res.json()["status"] == "INACTIVE"


def test_requests_without_scope_header_are_rejected(api_client):
    res = api_client.get("/api/v1/appointments/")
    assert res.status_code == 400
    assert "X-Tenant-Id" in res.json()["error"]["message"]


def test_foreign_tenant_header_is_forbidden(api_client, other_tenant):
    res = api_client.get("/api/v1/appointments/", HTTP_X_TENANT_ID=str(other_tenant.id))
    assert res.status_code == 403
