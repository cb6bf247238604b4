# pqr_core/appointments/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.appointments.models import Appointment, AppointmentType


class AppointmentTypeSerializer(serializers.ModelSerializer):
    class Meta:
        model = AppointmentType
        fields = [
            "id",
            "tenant_id",
            "code",
            "name",
            "description",
            "estimated_minutes",
            "requires_documentation",
            "display_order",
            "status",
            "deactivated_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AppointmentTypeCreateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=32)
    name = serializers.CharField(max_length=255)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")
    estimated_minutes = serializers.IntegerField(required=False, default=30)
    requires_documentation = serializers.BooleanField(required=False, default=False)
    display_order = serializers.IntegerField(required=False, min_value=0, default=0)


class AppointmentTypeUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True)
    estimated_minutes = serializers.IntegerField(required=False)
    requires_documentation = serializers.BooleanField(required=False)
    display_order = serializers.IntegerField(required=False, min_value=0)


class AppointmentSerializer(serializers.ModelSerializer):
    appointment_time = serializers.TimeField(format="%H:%M")
    client_id = serializers.UUIDField(read_only=True)
    branch_id = serializers.UUIDField(read_only=True)
    appointment_type_id = serializers.UUIDField(read_only=True)
    created_by_id = serializers.IntegerField(read_only=True, allow_null=True)
    client_name = serializers.CharField(source="client.full_name", read_only=True)
    branch_name = serializers.CharField(source="branch.name", read_only=True)
    appointment_type_name = serializers.CharField(source="appointment_type.name", read_only=True)

    class Meta:
        model = Appointment
        fields = [
            "id",
            "tenant_id",
            "appointment_number",
            "client_id",
            "client_name",
            "branch_id",
            "branch_name",
            "appointment_type_id",
            "appointment_type_name",
            "appointment_date",
            "appointment_time",
            "appointment_status",
            "notes",
            "cancellation_reason",
            "cancelled_at",
            "completed_at",
            "created_by_id",
            "status",
            "deactivated_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AppointmentScheduleSerializer(serializers.Serializer):
    client_id = serializers.UUIDField()
    branch_id = serializers.UUIDField()
    appointment_type_id = serializers.UUIDField()
    appointment_date = serializers.DateField()
    # "HH:MM"; grid and business hours are checked by TimeSlot
    appointment_time = serializers.CharField(max_length=5)
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class AppointmentCancelSerializer(serializers.Serializer):
    reason = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class AppointmentCompleteSerializer(serializers.Serializer):
    notes = serializers.CharField(required=False, allow_blank=True, default="")


class AvailableTimesResponseSerializer(serializers.Serializer):
    branch_id = serializers.UUIDField()
    date = serializers.DateField()
    available_times = serializers.ListField(child=serializers.CharField())
