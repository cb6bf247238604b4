# pqr_core/common/api/params.py
from __future__ import annotations

from datetime import date
from uuid import UUID

from rest_framework.exceptions import ValidationError

from pqr_core.common.errors import NotFoundError

TRUTHY = {"1", "true", "yes", "y", "on"}


def query_flag(request, name: str, default: bool = False) -> bool:
    raw = request.query_params.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in TRUTHY


def query_uuid(request, name: str, *, required: bool = False) -> UUID | None:
    raw = request.query_params.get(name)
    if not raw:
        if required:
            raise ValidationError({name: "This query parameter is required."})
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        raise ValidationError({name: "Invalid UUID."})


def query_date(request, name: str, *, required: bool = False) -> date | None:
    raw = request.query_params.get(name)
    if not raw:
        if required:
            raise ValidationError({name: "This query parameter is required."})
        return None
    try:
        return date.fromisoformat(raw)
    except ValueError:
        raise ValidationError({name: "Invalid date, expected YYYY-MM-DD."})


def path_uuid(pk, entity: str = "Record") -> UUID:
    """Detail-route id; a malformed one cannot name an existing row, so it is a 404."""
    try:
        return UUID(str(pk))
    except ValueError:
        raise NotFoundError(entity, pk)
