# pqr_core/holidays/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.holidays.models import Holiday, HolidayType


class HolidaySerializer(serializers.ModelSerializer):
    branch_id = serializers.UUIDField(read_only=True, allow_null=True)

    class Meta:
        model = Holiday
        fields = ["id", "tenant_id", "date", "name", "holiday_type", "branch_id", "status", "created_at", "updated_at"]
        read_only_fields = fields


class HolidayCreateSerializer(serializers.Serializer):
    date = serializers.DateField()
    name = serializers.CharField(max_length=255)
    holiday_type = serializers.ChoiceField(choices=HolidayType.choices, required=False, default=HolidayType.NATIONAL)
    branch_id = serializers.UUIDField(required=False, allow_null=True, default=None)


class HolidayUpdateSerializer(serializers.Serializer):
    date = serializers.DateField(required=False)
    name = serializers.CharField(max_length=255, required=False)
    holiday_type = serializers.ChoiceField(choices=HolidayType.choices, required=False)
    branch_id = serializers.UUIDField(required=False, allow_null=True)


class HolidayCheckResponseSerializer(serializers.Serializer):
    date = serializers.DateField()
    branch_id = serializers.UUIDField(allow_null=True)
    is_holiday = serializers.BooleanField()
