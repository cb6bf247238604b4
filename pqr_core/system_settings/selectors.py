# pqr_core/system_settings/selectors.py
from __future__ import annotations

import json
from typing import Any
from uuid import UUID

from django.db.models import QuerySet

from pqr_core.common.models import RecordStatus
from pqr_core.system_settings.models import SystemSetting


def settings_for_tenant(*, tenant_id: UUID, active_only: bool = True) -> QuerySet[SystemSetting]:
    qs = SystemSetting.objects.filter(tenant_id=tenant_id)
    if active_only:
        qs = qs.filter(status=RecordStatus.ACTIVE)
    return qs.order_by("key")


def get_value(*, tenant_id: UUID, key: str) -> str | None:
    """Raw text of an active setting, or None."""
    return (
        settings_for_tenant(tenant_id=tenant_id)
        .filter(key=(key or "").strip().upper())
        .values_list("value", flat=True)
        .first()
    )


def get_str(*, tenant_id: UUID, key: str, default: str = "") -> str:
    raw = get_value(tenant_id=tenant_id, key=key)
    return default if raw is None else raw


def get_int(*, tenant_id: UUID, key: str, default: int = 0) -> int:
    raw = get_value(tenant_id=tenant_id, key=key)
    try:
        return default if raw is None else int(float(raw))
    except ValueError:
        return default


def get_float(*, tenant_id: UUID, key: str, default: float = 0.0) -> float:
    raw = get_value(tenant_id=tenant_id, key=key)
    try:
        return default if raw is None else float(raw)
    except ValueError:
        return default


def get_bool(*, tenant_id: UUID, key: str, default: bool = False) -> bool:
    raw = get_value(tenant_id=tenant_id, key=key)
    if raw is None:
        return default
    return raw.strip().lower() in {"true", "1", "yes", "on"}


def get_json(*, tenant_id: UUID, key: str, default: Any = None) -> Any:
    raw = get_value(tenant_id=tenant_id, key=key)
    if raw is None:
        return default
    try:
        return json.loads(raw)
    except ValueError:
        return default
