# pqr_core/tenants/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid
from pqr_core.tenants.api.serializers import (
    TenantCreateSerializer,
    TenantProfileUpdateSerializer,
    TenantSerializer,
    TenantStatusUpdateSerializer,
)
from pqr_core.tenants.models import Tenant
from pqr_core.tenants.selectors import get_tenant, search_tenants
from pqr_core.tenants.services import TenantProfileUpdate, TenantService


@extend_schema_view(
    list=extend_schema(
        tags=["Tenants"],
        responses={200: TenantSerializer(many=True)},
        parameters=[
            OpenApiParameter("status", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Tenants"], responses={200: TenantSerializer}),
    create=extend_schema(tags=["Tenants"], request=TenantCreateSerializer, responses={201: TenantSerializer}),
    partial_update=extend_schema(
        tags=["Tenants"],
        request=TenantProfileUpdateSerializer,
        responses={200: TenantSerializer},
    ),
    set_status=extend_schema(tags=["Tenants"], request=TenantStatusUpdateSerializer, responses={200: TenantSerializer}),
)
class TenantViewSet(viewsets.ViewSet):
    """
    Platform staff manage tenants; no X-Tenant-Id is involved.
    """

    tenant_scoped = False
    permission_classes = [IsAdminUser]

    serializer_class = TenantSerializer
    queryset = Tenant.objects.none()

    def list(self, request):
        qs = search_tenants(status=request.query_params.get("status"), q=request.query_params.get("q"))
        return paginate(request, qs, TenantSerializer, view=self)

    def retrieve(self, request, pk=None):
        obj = get_tenant(tenant_id=path_uuid(pk))
        return Response(TenantSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = TenantCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = TenantService.create(**s.validated_data)
        return Response(TenantSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = TenantProfileUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = TenantService.update_profile(tenant_id=path_uuid(pk), patch=TenantProfileUpdate(**s.validated_data))
        return Response(TenantSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="set-status")
    def set_status(self, request, pk=None):
        s = TenantStatusUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = TenantService.set_status(tenant_id=path_uuid(pk), status=s.validated_data["status"])
        return Response(TenantSerializer(obj).data, status=status.HTTP_200_OK)
