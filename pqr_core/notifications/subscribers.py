# pqr_core/notifications/subscribers.py
"""
Client notifications for appointment lifecycle events.

Handlers run inside the publisher's transaction. Each one works in its own
savepoint and logs its failures, so a notification problem never undoes the
appointment change that triggered it.
"""
from __future__ import annotations

import logging
from uuid import UUID

from django.db import transaction

from pqr_core.clients.models import Client
from pqr_core.common.events import subscribe
from pqr_core.notifications.models import NotificationType
from pqr_core.notifications.services import NotificationService
from pqr_core.tenants.models import Tenant

logger = logging.getLogger(__name__)


def _channel_for(client: Client) -> str:
    if client.email:
        return NotificationType.EMAIL
    if client.mobile or client.phone:
        return NotificationType.SMS
    return NotificationType.IN_APP


def _notify_client(payload: dict, *, event: str, title: str, message: str) -> None:
    try:
        with transaction.atomic():
            tenant = Tenant.objects.get(id=UUID(payload["tenant_id"]))
            client = Client.objects.get(id=UUID(payload["client_id"]), tenant_id=tenant.id)
            if tenant.support_phone:
                message = f"{message} Support line: {tenant.support_phone}."
            NotificationService.create(
                tenant_id=client.tenant_id,
                notification_type=_channel_for(client),
                title=title,
                message=message,
                client_id=client.id,
                appointment_id=UUID(payload["appointment_id"]),
                metadata={
                    "event": event,
                    "appointment_number": payload["appointment_number"],
                    "sender": tenant.name,
                },
            )
    except Exception:
        logger.exception("Could not create %s notification for appointment %s", event, payload.get("appointment_id"))


@subscribe("appointment.scheduled")
def on_appointment_scheduled(payload: dict) -> None:
    _notify_client(
        payload,
        event="appointment.scheduled",
        title="Appointment confirmed",
        message=(
            f"Your appointment {payload['appointment_number']} is confirmed for "
            f"{payload['appointment_date']} at {payload['appointment_time']}."
        ),
    )


@subscribe("appointment.cancelled")
def on_appointment_cancelled(payload: dict) -> None:
    _notify_client(
        payload,
        event="appointment.cancelled",
        title="Appointment cancelled",
        message=(
            f"Your appointment {payload['appointment_number']} on {payload['appointment_date']} "
            f"at {payload['appointment_time']} was cancelled. Reason: {payload.get('reason') or 'Not specified'}."
        ),
    )
