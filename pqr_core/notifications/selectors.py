# pqr_core/notifications/selectors.py
from __future__ import annotations

from uuid import UUID

from django.db.models import QuerySet

from pqr_core.common.models import RecordStatus
from pqr_core.notifications.models import Notification


def notifications_for_user(
    *,
    tenant_id: UUID,
    user_id: int,
    is_read: bool | None = None,
    active_only: bool = True,
) -> QuerySet[Notification]:
    qs = Notification.objects.filter(tenant_id=tenant_id, user_id=user_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    if is_read is not None:
        qs = qs.filter(is_read=is_read)
    return qs.order_by("-created_at")


def notifications_for_client(*, tenant_id: UUID, client_id: UUID) -> QuerySet[Notification]:
    return Notification.objects.filter(
        tenant_id=tenant_id,
        client_id=client_id,
        status=RecordStatus.ACTIVE,
    ).order_by("-created_at")


def notifications_for_appointment(*, tenant_id: UUID, appointment_id: UUID) -> QuerySet[Notification]:
    return Notification.objects.filter(tenant_id=tenant_id, appointment_id=appointment_id).order_by("created_at")


def unread_count(*, tenant_id: UUID, user_id: int) -> int:
    return notifications_for_user(tenant_id=tenant_id, user_id=user_id, is_read=False).count()
