# pqr_core/branches/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.branches.models import Branch


class BranchSerializer(serializers.ModelSerializer):
    full_address = serializers.CharField(read_only=True)

    class Meta:
        model = Branch
        fields = [
            "id",
            "tenant_id",
            "name",
            "code",
            "street",
            "city",
            "state",
            "postal_code",
            "full_address",
            "phone",
            "email",
            "is_main",
            "color_primary",
            "status",
            "deactivated_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class BranchCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255)
    code = serializers.SlugField(max_length=64)

    street = serializers.CharField(max_length=255)
    city = serializers.CharField(max_length=128)
    state = serializers.CharField(max_length=128)
    postal_code = serializers.CharField(max_length=16, required=False, allow_blank=True, allow_null=True)

    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    email = serializers.CharField(max_length=254, required=False, allow_blank=True, default="")

    is_main = serializers.BooleanField(required=False, default=False)
    color_primary = serializers.CharField(max_length=16, required=False, allow_blank=True, default="")


class BranchUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, required=False)
    code = serializers.SlugField(max_length=64, required=False)

    street = serializers.CharField(max_length=255, required=False)
    city = serializers.CharField(max_length=128, required=False)
    state = serializers.CharField(max_length=128, required=False)
    postal_code = serializers.CharField(max_length=16, required=False, allow_blank=True)

    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    email = serializers.CharField(max_length=254, required=False, allow_blank=True)

    is_main = serializers.BooleanField(required=False)
    color_primary = serializers.CharField(max_length=16, required=False, allow_blank=True)
