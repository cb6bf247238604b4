# pqr_core/iam/api/serializers.py
from __future__ import annotations

from rest_framework import serializers

from pqr_core.iam.models import Form, Permission, Role, RoleFormPermission, UserProfile
from pqr_core.values import DocumentType


class RoleSerializer(serializers.ModelSerializer):
    class Meta:
        model = Role
        fields = ["id", "tenant_id", "code", "name", "description", "status", "deactivated_at", "created_at", "updated_at"]
        read_only_fields = fields


class RoleCreateSerializer(serializers.Serializer):
    code = serializers.SlugField(max_length=64)
    name = serializers.CharField(max_length=128)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")


class RoleUpdateSerializer(serializers.Serializer):
    code = serializers.SlugField(max_length=64, required=False)
    name = serializers.CharField(max_length=128, required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)


class FormSerializer(serializers.ModelSerializer):
    class Meta:
        model = Form
        fields = ["id", "code", "name", "description", "module", "status", "deactivated_at", "created_at", "updated_at"]
        read_only_fields = fields


class FormCreateSerializer(serializers.Serializer):
    code = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=128)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True, default="")
    module = serializers.CharField(max_length=64, required=False, allow_blank=True, default="")


class FormUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=128, required=False)
    description = serializers.CharField(max_length=255, required=False, allow_blank=True)
    module = serializers.CharField(max_length=64, required=False, allow_blank=True)


class PermissionSerializer(serializers.ModelSerializer):
    class Meta:
        model = Permission
        fields = ["id", "name", "can_read", "can_create", "can_update", "can_delete", "status", "created_at", "updated_at"]
        read_only_fields = fields


class PermissionFlagsSerializer(serializers.Serializer):
    can_read = serializers.BooleanField(required=False, default=False)
    can_create = serializers.BooleanField(required=False, default=False)
    can_update = serializers.BooleanField(required=False, default=False)
    can_delete = serializers.BooleanField(required=False, default=False)


class PermissionCreateSerializer(PermissionFlagsSerializer):
    name = serializers.CharField(max_length=64, required=False, allow_blank=True)


class PermissionRenameSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=64)


class RoleFormPermissionSerializer(serializers.ModelSerializer):
    role_code = serializers.CharField(source="role.code", read_only=True)
    form_code = serializers.CharField(source="form.code", read_only=True)
    permission_name = serializers.CharField(source="permission.name", read_only=True)

    class Meta:
        model = RoleFormPermission
        fields = [
            "id",
            "role_id",
            "role_code",
            "form_id",
            "form_code",
            "permission_id",
            "permission_name",
            "status",
            "created_at",
            "updated_at",
        ]
        read_only_fields = fields


class AssignPermissionSerializer(serializers.Serializer):
    role_id = serializers.UUIDField()
    form_id = serializers.UUIDField()
    permission_id = serializers.UUIDField()


class UserProfileSerializer(serializers.ModelSerializer):
    username = serializers.CharField(source="user.username", read_only=True)
    roles = serializers.SerializerMethodField()

    class Meta:
        model = UserProfile
        fields = [
            "id",
            "user_id",
            "username",
            "tenant_id",
            "document_type",
            "document_number",
            "phone",
            "roles",
            "status",
            "created_at",
        ]
        read_only_fields = fields

    def get_roles(self, obj) -> list[str]:
        return sorted(r.code for r in obj.roles.all())


class UserProfileCreateSerializer(serializers.Serializer):
    user_id = serializers.IntegerField()
    document_type = serializers.ChoiceField(choices=DocumentType.choices(), required=False, allow_blank=True)
    document_number = serializers.CharField(max_length=20, required=False, allow_blank=True)
    phone = serializers.CharField(max_length=32, required=False, allow_blank=True)


class AssignRolesSerializer(serializers.Serializer):
    role_ids = serializers.ListField(child=serializers.UUIDField(), allow_empty=True)
