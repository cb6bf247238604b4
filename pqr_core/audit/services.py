# pqr_core/audit/services.py
from __future__ import annotations

import logging
import re
from typing import Any, Optional
from uuid import UUID

from pqr_core.audit.models import AuditEvent
from pqr_core.common.errors import ValidationError

logger = logging.getLogger(__name__)

EVENT_CODE_RE = re.compile(r"^[a-z][a-z_]*\.[a-z][a-z_]*$")


class AuditService:
    """
    Writes run inside the caller's transaction, so an aborted change leaves no trail.
    """

    @staticmethod
    def log(
        *,
        event_code: str,
        entity_type: str,
        entity_id: UUID,
        tenant_id: UUID,
        actor_user_id: int | None = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> AuditEvent:
        if not EVENT_CODE_RE.match(event_code or ""):
            raise ValidationError("event_code", f"Invalid audit event code: {event_code!r}.")

        event = AuditEvent.objects.create(
            tenant_id=tenant_id,
            event_code=event_code,
            entity_type=entity_type,
            entity_id=entity_id,
            actor_user_id=actor_user_id,
            metadata=metadata or {},
        )
        logger.debug("audit %s %s:%s by %s", event_code, entity_type, entity_id, actor_user_id)
        return event

    @staticmethod
    def record(obj, event_code: str, *, actor_user_id: int | None = None, **metadata) -> AuditEvent:
        """Shortcut for tenant-scoped model instances."""
        return AuditService.log(
            event_code=event_code,
            entity_type=obj.__class__.__name__,
            entity_id=obj.pk,
            tenant_id=obj.tenant_id,
            actor_user_id=actor_user_id,
            metadata=metadata,
        )
