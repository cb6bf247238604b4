# pqr_core/audit/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import viewsets
from rest_framework.exceptions import ValidationError

from pqr_core.audit.api.serializers import AuditEventSerializer
from pqr_core.audit.models import AuditEvent
from pqr_core.audit.selectors import list_audit_events
from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import query_date, query_uuid
from pqr_core.common.permissions import FormPermission
from pqr_core.iam.scope import require_tenant


class AuditEventViewSet(viewsets.GenericViewSet):
    """
    Read-only trail of the current tenant, newest first.
    """

    permission_classes = [FormPermission]
    form_code = "AUDIT"

    serializer_class = AuditEventSerializer
    queryset = AuditEvent.objects.none()

    @extend_schema(
        tags=["Audit"],
        responses={200: AuditEventSerializer(many=True)},
        parameters=[
            OpenApiParameter(
                "entity_type",
                OpenApiTypes.STR,
                OpenApiParameter.QUERY,
                required=False,
                description="Appointment, Client, Role...",
            ),
            OpenApiParameter("entity_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=False),
            OpenApiParameter(
                "event_code",
                OpenApiTypes.STR,
                OpenApiParameter.QUERY,
                required=False,
                description="e.g. appointment.cancelled",
            ),
            OpenApiParameter("actor_user_id", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("since", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("until", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=False),
        ],
    )
    def list(self, request):
        tenant_id = require_tenant(request)
        qp = request.query_params

        actor_user_id = None
        if qp.get("actor_user_id"):
            try:
                actor_user_id = int(qp["actor_user_id"])
            except ValueError:
                raise ValidationError({"actor_user_id": "Invalid integer."})

        qs = list_audit_events(
            tenant_id=tenant_id,
            entity_type=qp.get("entity_type") or None,
            entity_id=query_uuid(request, "entity_id"),
            event_code=qp.get("event_code") or None,
            actor_user_id=actor_user_id,
            since=query_date(request, "since"),
            until=query_date(request, "until"),
        )
        return paginate(request, qs, AuditEventSerializer, view=self)
