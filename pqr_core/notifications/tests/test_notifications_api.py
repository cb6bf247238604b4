import pytest

from pqr_core.notifications.services import NotificationService
from pqr_core.tests.helpers import make_member, scope_headers

pytestmark = pytest.mark.django_db


@pytest.fixture
def inbox(tenant, user):
    return [
        NotificationService.create(
            tenant_id=tenant.id, user_id=user.id, notification_type="IN_APP", title=f"Aviso {i}", message="Revise su agenda"
        )
        for i in range(3)
    ]


def test_list_only_shows_own_notifications(api_client, headers, tenant, admin_role, inbox):
    colleague = make_member(tenant, "colleague", admin_role)
    NotificationService.create(
        tenant_id=tenant.id, user_id=colleague.id, notification_type="IN_APP", title="Privado", message="Solo para otro"
    )

    res = api_client.get("/api/v1/notifications/", **headers)
    assert res.status_code == 200
    assert res.json()["count"] == 3
    assert "Privado" not in {n["title"] for n in res.json()["results"]}


def test_mark_read_and_unread_count(api_client, headers, inbox):
    res = api_client.get("/api/v1/notifications/unread-count/", **headers)
    assert res.json() == {"unread": 3}

    res = api_client.post(f"/api/v1/notifications/{inbox[0].id}/mark-read/", **headers)
    assert res.status_code == 200
    assert res.json()["is_read"] is True
    assert res.json()["read_at"] is not None

    assert api_client.get("/api/v1/notifications/unread-count/", **headers).json() == {"unread": 2}
    assert api_client.get("/api/v1/notifications/?is_read=true", **headers).json()["count"] == 1


def test_someone_elses_notification_is_404(tenant, admin_role, headers, inbox):
    from rest_framework.test import APIClient

    colleague = make_member(tenant, "colleague", admin_role)
    c = APIClient()
    c.force_authenticate(user=colleague)

    res = c.post(f"/api/v1/notifications/{inbox[0].id}/mark-read/", **scope_headers(tenant))
    assert res.status_code == 404


def test_create_validates_recipient(api_client, headers, user, client_record):
    res = api_client.post(
        "/api/v1/notifications/",
        {"notification_type": "SMS", "title": "Recordatorio", "message": "Mañana 9:00", "client_id": str(client_record.id)},
        format="json",
        **headers,
    )
    assert res.status_code == 201
    assert res.json()["client_id"] == str(client_record.id)

    res = api_client.post(
        "/api/v1/notifications/",
        {"notification_type": "SMS", "title": "Recordatorio", "message": "Mañana 9:00"},
        format="json",
        **headers,
    )
    assert res.status_code == 400
    assert res.json()["error"]["details"] == {"recipient": "Either user_id or client_id is required."}
