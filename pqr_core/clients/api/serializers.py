# pqr_core/clients/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.clients.models import Client
from pqr_core.values import DocumentType


class ClientSerializer(serializers.ModelSerializer):
    class Meta:
        model = Client
        fields = [
            "id",
            "tenant_id",
            "client_number",
            "document_type",
            "document_number",
            "full_name",
            "email",
            "phone",
            "mobile",
            "address",
            "status",
            "deactivated_at",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class ClientCreateSerializer(serializers.Serializer):
    # value rules (document pattern, phone, email) are enforced by the service
    document_type = serializers.ChoiceField(choices=DocumentType.choices())
    document_number = serializers.CharField(max_length=20)
    full_name = serializers.CharField(max_length=255)
    email = serializers.CharField(max_length=254, required=False, allow_blank=True, default="")
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    mobile = serializers.CharField(max_length=32, required=False, allow_blank=True, default="")
    address = serializers.CharField(max_length=500, required=False, allow_blank=True, default="")


class ClientUpdateSerializer(serializers.Serializer):
    full_name = serializers.CharField(max_length=255, required=False)
    email = serializers.CharField(max_length=254, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)
    mobile = serializers.CharField(max_length=32, required=False, allow_blank=True)
    address = serializers.CharField(max_length=500, required=False, allow_blank=True)
