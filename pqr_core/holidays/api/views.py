# pqr_core/holidays/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid, query_date, query_flag, query_uuid
from pqr_core.common.permissions import FormPermission
from pqr_core.holidays import selectors
from pqr_core.holidays.api.serializers import (
    HolidayCheckResponseSerializer,
    HolidayCreateSerializer,
    HolidaySerializer,
    HolidayUpdateSerializer,
)
from pqr_core.holidays.models import Holiday
from pqr_core.holidays.services import HolidayService, HolidayUpdate
from pqr_core.iam.scope import require_tenant
from pqr_core.iam.services.authorization import PermissionAction


@extend_schema_view(
    list=extend_schema(
        tags=["Holidays"],
        responses={200: HolidaySerializer(many=True)},
        parameters=[
            OpenApiParameter("year", OpenApiTypes.INT, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("start", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("end", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("branch_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Holidays"], responses={200: HolidaySerializer}),
    create=extend_schema(tags=["Holidays"], request=HolidayCreateSerializer, responses={201: HolidaySerializer}),
    partial_update=extend_schema(tags=["Holidays"], request=HolidayUpdateSerializer, responses={200: HolidaySerializer}),
    destroy=extend_schema(tags=["Holidays"], responses={200: HolidaySerializer}),
    check=extend_schema(
        tags=["Holidays"],
        responses={200: HolidayCheckResponseSerializer},
        parameters=[
            OpenApiParameter("date", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=True),
            OpenApiParameter("branch_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=False),
        ],
    ),
)
class HolidayViewSet(viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "HOLIDAYS"
    form_actions = {"check": PermissionAction.READ}

    serializer_class = HolidaySerializer
    queryset = Holiday.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        year = request.query_params.get("year")
        start, end = query_date(request, "start"), query_date(request, "end")

        if year:
            try:
                qs = selectors.holidays_in_year(tenant_id=tenant_id, year=int(year))
            except ValueError:
                raise ValidationError({"year": "Invalid integer."})
        elif start and end:
            qs = selectors.holidays_between(
                tenant_id=tenant_id, start=start, end=end, branch_id=query_uuid(request, "branch_id")
            )
        else:
            qs = selectors.holidays_for_tenant(
                tenant_id=tenant_id, active_only=not query_flag(request, "include_inactive")
            )
        return paginate(request, qs, HolidaySerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = Holiday.objects.get(id=path_uuid(pk), tenant_id=tenant_id)
        return Response(HolidaySerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = HolidayCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = HolidayService.create(tenant_id=tenant_id, **s.validated_data)
        return Response(HolidaySerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = HolidayUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = HolidayService.update(
            tenant_id=tenant_id,
            holiday_id=path_uuid(pk),
            patch=HolidayUpdate(**s.validated_data),
        )
        return Response(HolidaySerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = HolidayService.deactivate(tenant_id=tenant_id, holiday_id=path_uuid(pk))
        return Response(HolidaySerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="check")
    def check(self, request):
        tenant_id = require_tenant(request)
        on = query_date(request, "date", required=True)
        branch_id = query_uuid(request, "branch_id")

        return Response(
            {
                "date": on.isoformat(),
                "branch_id": str(branch_id) if branch_id else None,
                "is_holiday": selectors.is_holiday(tenant_id=tenant_id, on=on, branch_id=branch_id),
            },
            status=status.HTTP_200_OK,
        )
