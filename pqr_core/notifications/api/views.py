# pqr_core/notifications/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid
from pqr_core.common.permissions import FormPermission
from pqr_core.iam.scope import require_tenant
from pqr_core.iam.services.authorization import PermissionAction
from pqr_core.notifications.api.serializers import (
    NotificationCreateSerializer,
    NotificationSerializer,
    UnreadCountSerializer,
)
from pqr_core.notifications.models import Notification
from pqr_core.notifications.selectors import notifications_for_user, unread_count
from pqr_core.notifications.services import NotificationService


@extend_schema_view(
    list=extend_schema(
        tags=["Notifications"],
        responses={200: NotificationSerializer(many=True)},
        parameters=[OpenApiParameter("is_read", OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=False)],
    ),
    retrieve=extend_schema(tags=["Notifications"], responses={200: NotificationSerializer}),
    create=extend_schema(
        tags=["Notifications"],
        request=NotificationCreateSerializer,
        responses={201: NotificationSerializer},
    ),
    mark_read=extend_schema(tags=["Notifications"], request=None, responses={200: NotificationSerializer}),
    unread_count=extend_schema(tags=["Notifications"], responses={200: UnreadCountSerializer}),
)
class NotificationViewSet(viewsets.ViewSet):
    """
    Reads are limited to the caller's own in-tenant notifications.
    """

    permission_classes = [FormPermission]
    form_code = "NOTIFICATIONS"
    form_actions = {"mark_read": PermissionAction.READ, "unread_count": PermissionAction.READ}

    serializer_class = NotificationSerializer
    queryset = Notification.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        raw = request.query_params.get("is_read")
        is_read = raw == "true" if raw in ("true", "false") else None

        qs = notifications_for_user(tenant_id=tenant_id, user_id=request.user.id, is_read=is_read)
        return paginate(request, qs, NotificationSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = notifications_for_user(tenant_id=tenant_id, user_id=request.user.id).get(id=path_uuid(pk))
        return Response(NotificationSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = NotificationCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = NotificationService.create(tenant_id=tenant_id, **s.validated_data)
        return Response(NotificationSerializer(obj).data, status=status.HTTP_201_CREATED)

    @action(detail=True, methods=["post"], url_path="mark-read")
    def mark_read(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = NotificationService.mark_read(
            tenant_id=tenant_id,
            notification_id=path_uuid(pk),
            user_id=request.user.id,
        )
        return Response(NotificationSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="unread-count")
    def unread_count(self, request):
        tenant_id = require_tenant(request)
        return Response({"unread": unread_count(tenant_id=tenant_id, user_id=request.user.id)}, status=status.HTTP_200_OK)
