# pqr_core/appointments/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response

from pqr_core.appointments import selectors
from pqr_core.appointments.api.serializers import (
    AppointmentCancelSerializer,
    AppointmentCompleteSerializer,
    AppointmentScheduleSerializer,
    AppointmentSerializer,
    AppointmentTypeCreateSerializer,
    AppointmentTypeSerializer,
    AppointmentTypeUpdateSerializer,
    AvailableTimesResponseSerializer,
)
from pqr_core.appointments.models import Appointment, AppointmentStatus, AppointmentType
from pqr_core.appointments.services import AppointmentService, AppointmentTypeService, AppointmentTypeUpdate
from pqr_core.audit.api.serializers import AuditEventSerializer
from pqr_core.audit.selectors import entity_timeline
from pqr_core.branches.selectors import active_branch
from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid, query_date, query_flag, query_uuid
from pqr_core.common.permissions import FormPermission
from pqr_core.iam.scope import require_tenant
from pqr_core.iam.services.authorization import PermissionAction


@extend_schema_view(
    list=extend_schema(
        tags=["Appointment types"],
        responses={200: AppointmentTypeSerializer(many=True)},
        parameters=[
            OpenApiParameter("include_inactive", OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Appointment types"], responses={200: AppointmentTypeSerializer}),
    create=extend_schema(
        tags=["Appointment types"],
        request=AppointmentTypeCreateSerializer,
        responses={201: AppointmentTypeSerializer},
    ),
    partial_update=extend_schema(
        tags=["Appointment types"],
        request=AppointmentTypeUpdateSerializer,
        responses={200: AppointmentTypeSerializer},
    ),
    destroy=extend_schema(tags=["Appointment types"], responses={200: AppointmentTypeSerializer}),
)
class AppointmentTypeViewSet(viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "APPOINTMENT_TYPES"

    serializer_class = AppointmentTypeSerializer
    queryset = AppointmentType.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = selectors.appointment_types_for_tenant(
            tenant_id=tenant_id,
            active_only=not query_flag(request, "include_inactive"),
        )
        return paginate(request, qs, AppointmentTypeSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = AppointmentType.objects.get(id=path_uuid(pk), tenant_id=tenant_id)
        return Response(AppointmentTypeSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = AppointmentTypeCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = AppointmentTypeService.create(tenant_id=tenant_id, **s.validated_data)
        return Response(AppointmentTypeSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = AppointmentTypeUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = AppointmentTypeService.update(
            tenant_id=tenant_id,
            appointment_type_id=path_uuid(pk),
            patch=AppointmentTypeUpdate(**s.validated_data),
        )
        return Response(AppointmentTypeSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = AppointmentTypeService.deactivate(tenant_id=tenant_id, appointment_type_id=path_uuid(pk))
        return Response(AppointmentTypeSerializer(obj).data, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(
        tags=["Appointments"],
        responses={200: AppointmentSerializer(many=True)},
        parameters=[
            OpenApiParameter("client_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("branch_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("date", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("appointment_status", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("number", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("include_inactive", OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Appointments"], responses={200: AppointmentSerializer}),
    create=extend_schema(
        tags=["Appointments"],
        request=AppointmentScheduleSerializer,
        responses={201: AppointmentSerializer},
    ),
    destroy=extend_schema(tags=["Appointments"], responses={200: AppointmentSerializer}),
    available_times=extend_schema(
        tags=["Appointments"],
        responses={200: AvailableTimesResponseSerializer},
        parameters=[
            OpenApiParameter("branch_id", OpenApiTypes.UUID, OpenApiParameter.QUERY, required=True),
            OpenApiParameter("date", OpenApiTypes.DATE, OpenApiParameter.QUERY, required=True),
        ],
    ),
    cancel=extend_schema(tags=["Appointments"], request=AppointmentCancelSerializer, responses={200: AppointmentSerializer}),
    complete=extend_schema(
        tags=["Appointments"],
        request=AppointmentCompleteSerializer,
        responses={200: AppointmentSerializer},
    ),
    start=extend_schema(tags=["Appointments"], request=None, responses={200: AppointmentSerializer}),
    history=extend_schema(tags=["Appointments"], responses={200: AuditEventSerializer(many=True)}),
)
class AppointmentViewSet(viewsets.ViewSet):
    """
    Scheduling goes through create; the lifecycle moves through the
    start / complete / cancel actions. There is no free-form update.
    """

    permission_classes = [FormPermission]
    form_code = "APPOINTMENTS"
    form_actions = {
        "available_times": PermissionAction.READ,
        "cancel": PermissionAction.UPDATE,
        "complete": PermissionAction.UPDATE,
        "start": PermissionAction.UPDATE,
        "history": PermissionAction.READ,
    }

    serializer_class = AppointmentSerializer
    queryset = Appointment.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qp = request.query_params
        active_only = not query_flag(request, "include_inactive")

        qs = selectors.appointments_for_tenant(tenant_id=tenant_id, active_only=active_only)

        client_id = query_uuid(request, "client_id")
        if client_id:
            qs = qs.filter(client_id=client_id)
        branch_id = query_uuid(request, "branch_id")
        if branch_id:
            qs = qs.filter(branch_id=branch_id)
        on = query_date(request, "date")
        if on:
            qs = qs.filter(appointment_date=on)
        if qp.get("appointment_status"):
            wanted = qp["appointment_status"].strip().upper()
            if wanted not in AppointmentStatus.values:
                raise ValidationError({"appointment_status": f"Must be one of {', '.join(AppointmentStatus.values)}."})
            qs = qs.filter(appointment_status=wanted)
        if qp.get("number"):
            qs = qs.filter(appointment_number=qp["number"].strip().upper())

        return paginate(request, qs, AppointmentSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = selectors.get_appointment(tenant_id=tenant_id, appointment_id=path_uuid(pk))
        return Response(AppointmentSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = AppointmentScheduleSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = AppointmentService.schedule(tenant_id=tenant_id, actor_user_id=request.user.id, **s.validated_data)
        return Response(AppointmentSerializer(obj).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = AppointmentService.deactivate(
            tenant_id=tenant_id,
            appointment_id=path_uuid(pk),
            actor_user_id=request.user.id,
        )
        return Response(AppointmentSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="available-times")
    def available_times(self, request):
        tenant_id = require_tenant(request)
        branch_id = query_uuid(request, "branch_id", required=True)
        on = query_date(request, "date", required=True)

        branch = active_branch(tenant_id=tenant_id, branch_id=branch_id)
        times = selectors.available_times(tenant_id=tenant_id, branch_id=branch.id, on=on)
        return Response(
            {"branch_id": str(branch.id), "date": on.isoformat(), "available_times": times},
            status=status.HTTP_200_OK,
        )

    @action(detail=True, methods=["post"], url_path="cancel")
    def cancel(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = AppointmentCancelSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = AppointmentService.cancel(
            tenant_id=tenant_id,
            appointment_id=path_uuid(pk),
            reason=s.validated_data["reason"],
            actor_user_id=request.user.id,
        )
        return Response(AppointmentSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="complete")
    def complete(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = AppointmentCompleteSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = AppointmentService.complete(
            tenant_id=tenant_id,
            appointment_id=path_uuid(pk),
            notes=s.validated_data["notes"],
            actor_user_id=request.user.id,
        )
        return Response(AppointmentSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="start")
    def start(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = AppointmentService.start(tenant_id=tenant_id, appointment_id=path_uuid(pk), actor_user_id=request.user.id)
        return Response(AppointmentSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["get"], url_path="history")
    def history(self, request, pk=None):
        tenant_id = require_tenant(request)
        appt = selectors.get_appointment(tenant_id=tenant_id, appointment_id=path_uuid(pk))
        events = entity_timeline(tenant_id=tenant_id, entity_type="Appointment", entity_id=appt.id)
        return Response(AuditEventSerializer(events, many=True).data, status=status.HTTP_200_OK)
