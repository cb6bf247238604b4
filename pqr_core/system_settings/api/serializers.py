# pqr_core/system_settings/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.system_settings.models import SettingValueType, SystemSetting


class SystemSettingSerializer(serializers.ModelSerializer):
    value = serializers.SerializerMethodField()

    class Meta:
        model = SystemSetting
        fields = ["id", "key", "value", "value_type", "description", "is_encrypted", "status", "updated_at"]
        read_only_fields = fields

    def get_value(self, obj) -> str:
        return "***" if obj.is_encrypted else obj.value


class SystemSettingUpsertSerializer(serializers.Serializer):
    key = serializers.CharField(max_length=100)
    value = serializers.CharField(allow_blank=True)
    value_type = serializers.ChoiceField(choices=SettingValueType.choices, required=False, default=SettingValueType.STRING)
    description = serializers.CharField(max_length=500, required=False, allow_blank=True, allow_null=True, default=None)
    is_encrypted = serializers.BooleanField(required=False, default=False)
