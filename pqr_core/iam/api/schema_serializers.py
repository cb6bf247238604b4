# pqr_core/iam/api/schema_serializers.py
from __future__ import annotations

from rest_framework import serializers


class LoginRequestSerializer(serializers.Serializer):
    username = serializers.CharField()
    password = serializers.CharField()


class DetailResponseSerializer(serializers.Serializer):
    detail = serializers.CharField()


class MeUserSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    username = serializers.CharField(allow_null=True, required=False)
    email = serializers.EmailField(allow_null=True, required=False)
    is_superuser = serializers.BooleanField()


class ActiveScopeSerializer(serializers.Serializer):
    tenant_id = serializers.UUIDField()
    # absent for superusers acting on a tenant they are not a member of
    tenant_code = serializers.CharField(required=False)
    tenant_name = serializers.CharField(required=False)
    roles = serializers.ListField(child=serializers.CharField(), required=False)


class MembershipSerializer(serializers.Serializer):
    tenant_id = serializers.UUIDField()
    tenant_code = serializers.CharField()
    tenant_name = serializers.CharField()
    roles = serializers.ListField(child=serializers.CharField())


class MeResponseSerializer(serializers.Serializer):
    user = MeUserSerializer()
    memberships = MembershipSerializer(many=True)
    active_scope = ActiveScopeSerializer(allow_null=True, required=False)


class FlagsSerializer(serializers.Serializer):
    can_read = serializers.BooleanField()
    can_create = serializers.BooleanField()
    can_update = serializers.BooleanField()
    can_delete = serializers.BooleanField()


class MePermissionsResponseSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    tenant_id = serializers.UUIDField(allow_null=True)
    roles = serializers.ListField(child=serializers.CharField())
    forms = serializers.DictField(child=FlagsSerializer())
    # flattened "<FORM>.<action>" strings for UI gating
    permissions = serializers.ListField(child=serializers.CharField())
