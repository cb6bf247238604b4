# pqr_core/tenants/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.tenants.models import Tenant, TenantStatus


class TenantSerializer(serializers.ModelSerializer):
    class Meta:
        model = Tenant
        fields = [
            "id",
            "name",
            "code",
            "nit",
            "contact_email",
            "support_phone",
            "status",
            "metadata",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class TenantCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    code = serializers.SlugField(max_length=64)
    # NIT, email and phone formats are checked by the value objects in the service
    nit = serializers.CharField(max_length=20, required=False, allow_blank=True, default="")
    contact_email = serializers.CharField(max_length=254, required=False, allow_blank=True, default="")
    support_phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    status = serializers.ChoiceField(choices=TenantStatus.choices, required=False, default=TenantStatus.ACTIVE)
    metadata = serializers.DictField(required=False, default=dict)


class TenantProfileUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    nit = serializers.CharField(max_length=20, required=False, allow_blank=True)
    contact_email = serializers.CharField(max_length=254, required=False, allow_blank=True)
    support_phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    metadata = serializers.DictField(required=False)


class TenantStatusUpdateSerializer(serializers.Serializer):
    status = serializers.ChoiceField(choices=TenantStatus.choices)
