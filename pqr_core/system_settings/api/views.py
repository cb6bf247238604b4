# pqr_core/system_settings/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.response import Response

from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import query_flag
from pqr_core.common.permissions import FormPermission
from pqr_core.iam.scope import require_tenant
from pqr_core.system_settings.api.serializers import SystemSettingSerializer, SystemSettingUpsertSerializer
from pqr_core.system_settings.models import SystemSetting
from pqr_core.system_settings.selectors import settings_for_tenant
from pqr_core.system_settings.services import SystemSettingService, normalize_key


@extend_schema_view(
    list=extend_schema(tags=["Settings"], responses={200: SystemSettingSerializer(many=True)}),
    retrieve=extend_schema(tags=["Settings"], responses={200: SystemSettingSerializer}),
    create=extend_schema(
        tags=["Settings"],
        request=SystemSettingUpsertSerializer,
        responses={200: SystemSettingSerializer},
        description="Create or replace the setting with this key.",
    ),
    destroy=extend_schema(tags=["Settings"], responses={200: SystemSettingSerializer}),
)
class SystemSettingViewSet(viewsets.ViewSet):
    """
    Settings are addressed by key: /settings/{KEY}/.
    """
    permission_classes = [FormPermission]
    form_code = "SETTINGS"
    lookup_field = "key"
    lookup_value_regex = "[A-Za-z0-9_.-]+"

    serializer_class = SystemSettingSerializer
    queryset = SystemSetting.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = settings_for_tenant(tenant_id=tenant_id, active_only=not query_flag(request, "include_inactive"))
        return paginate(request, qs, SystemSettingSerializer, view=self)

    def retrieve(self, request, key=None):
        tenant_id = require_tenant(request)
        obj = SystemSetting.objects.get(tenant_id=tenant_id, key=normalize_key(key))
        return Response(SystemSettingSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = SystemSettingUpsertSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = SystemSettingService.upsert(tenant_id=tenant_id, **s.validated_data)
        return Response(SystemSettingSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, key=None):
        tenant_id = require_tenant(request)
        obj = SystemSettingService.deactivate(tenant_id=tenant_id, key=key)
        return Response(SystemSettingSerializer(obj).data, status=status.HTTP_200_OK)
