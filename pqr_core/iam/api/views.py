# pqr_core/iam/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.permissions import IsAdminUser
from rest_framework.response import Response

from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid, query_flag, query_uuid
from pqr_core.common.permissions import FormPermission
from pqr_core.iam import selectors
from pqr_core.iam.api.serializers import (
    AssignPermissionSerializer,
    AssignRolesSerializer,
    FormCreateSerializer,
    FormSerializer,
    FormUpdateSerializer,
    PermissionCreateSerializer,
    PermissionFlagsSerializer,
    PermissionRenameSerializer,
    PermissionSerializer,
    RoleCreateSerializer,
    RoleFormPermissionSerializer,
    RoleSerializer,
    RoleUpdateSerializer,
    UserProfileCreateSerializer,
    UserProfileSerializer,
)
from pqr_core.iam.models import Form, Permission, Role, RoleFormPermission, UserProfile
from pqr_core.iam.scope import require_tenant
from pqr_core.iam.services.authorization import PermissionAction, PermissionFlags
from pqr_core.iam.services.catalog import FormService, FormUpdate, PermissionService, RoleService, RoleUpdate
from pqr_core.iam.services.profiles import UserProfileService
from pqr_core.iam.services.rbac import RbacService

SOFT_DELETE_ACTIONS = {"reactivate": PermissionAction.UPDATE}


class GlobalCatalogAccess:
    """
    Forms and permission bundles are shared by every tenant. Tenant grants
    only cover reading them; writes are for platform staff.
    """

    def get_permissions(self):
        if self.action in ("list", "retrieve"):
            return [FormPermission()]
        return [IsAdminUser()]


@extend_schema_view(
    list=extend_schema(tags=["IAM"], responses={200: RoleSerializer(many=True)}),
    retrieve=extend_schema(tags=["IAM"], responses={200: RoleSerializer}),
    create=extend_schema(tags=["IAM"], request=RoleCreateSerializer, responses={201: RoleSerializer}),
    partial_update=extend_schema(tags=["IAM"], request=RoleUpdateSerializer, responses={200: RoleSerializer}),
    destroy=extend_schema(tags=["IAM"], responses={200: RoleSerializer}),
    reactivate=extend_schema(tags=["IAM"], request=None, responses={200: RoleSerializer}),
    summary=extend_schema(tags=["IAM"], responses={200: OpenApiTypes.OBJECT}),
)
class RoleViewSet(viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "ROLES"
    form_actions = {**SOFT_DELETE_ACTIONS, "summary": PermissionAction.READ}

    serializer_class = RoleSerializer
    queryset = Role.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = selectors.roles_for_tenant(tenant_id=tenant_id, active_only=not query_flag(request, "include_inactive"))
        return paginate(request, qs, RoleSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = selectors.role_by_id(tenant_id=tenant_id, role_id=path_uuid(pk))
        return Response(RoleSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = RoleCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = RoleService.create(tenant_id=tenant_id, actor_user_id=request.user.id, **s.validated_data)
        return Response(RoleSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = RoleUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = RoleService.update(tenant_id=tenant_id, role_id=path_uuid(pk), patch=RoleUpdate(**s.validated_data))
        return Response(RoleSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        # soft delete
        tenant_id = require_tenant(request)
        obj = RoleService.deactivate(tenant_id=tenant_id, role_id=path_uuid(pk), actor_user_id=request.user.id)
        return Response(RoleSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="reactivate")
    def reactivate(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = RoleService.reactivate(tenant_id=tenant_id, role_id=path_uuid(pk))
        return Response(RoleSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="summary")
    def summary(self, request):
        tenant_id = require_tenant(request)
        return Response(selectors.role_permission_summary(tenant_id=tenant_id), status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(tags=["IAM"], responses={200: FormSerializer(many=True)}),
    retrieve=extend_schema(tags=["IAM"], responses={200: FormSerializer}),
    create=extend_schema(tags=["IAM"], request=FormCreateSerializer, responses={201: FormSerializer}),
    partial_update=extend_schema(tags=["IAM"], request=FormUpdateSerializer, responses={200: FormSerializer}),
    destroy=extend_schema(tags=["IAM"], responses={200: FormSerializer}),
    reactivate=extend_schema(tags=["IAM"], request=None, responses={200: FormSerializer}),
)
class FormViewSet(GlobalCatalogAccess, viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "FORMS"
    form_actions = SOFT_DELETE_ACTIONS

    serializer_class = FormSerializer
    queryset = Form.objects.none()

    def list(self, request):
        qs = selectors.forms(
            active_only=not query_flag(request, "include_inactive"),
            module=request.query_params.get("module") or None,
        )
        return paginate(request, qs, FormSerializer, view=self)

    def retrieve(self, request, pk=None):
        obj = Form.objects.get(id=path_uuid(pk))
        return Response(FormSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = FormCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = FormService.create(**s.validated_data)
        return Response(FormSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        s = FormUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = FormService.update(form_id=path_uuid(pk), patch=FormUpdate(**s.validated_data))
        return Response(FormSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        obj = FormService.deactivate(form_id=path_uuid(pk))
        return Response(FormSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="reactivate")
    def reactivate(self, request, pk=None):
        obj = FormService.reactivate(form_id=path_uuid(pk))
        return Response(FormSerializer(obj).data, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(tags=["IAM"], responses={200: PermissionSerializer(many=True)}),
    retrieve=extend_schema(tags=["IAM"], responses={200: PermissionSerializer}),
    create=extend_schema(tags=["IAM"], request=PermissionCreateSerializer, responses={201: PermissionSerializer}),
    partial_update=extend_schema(tags=["IAM"], request=PermissionRenameSerializer, responses={200: PermissionSerializer}),
    destroy=extend_schema(tags=["IAM"], responses={200: PermissionSerializer}),
    reactivate=extend_schema(tags=["IAM"], request=None, responses={200: PermissionSerializer}),
)
class PermissionViewSet(GlobalCatalogAccess, viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "PERMISSIONS"
    form_actions = SOFT_DELETE_ACTIONS

    serializer_class = PermissionSerializer
    queryset = Permission.objects.none()

    def list(self, request):
        qs = selectors.permissions(active_only=not query_flag(request, "include_inactive"))
        return paginate(request, qs, PermissionSerializer, view=self)

    def retrieve(self, request, pk=None):
        obj = Permission.objects.get(id=path_uuid(pk))
        return Response(PermissionSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        s = PermissionCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = dict(s.validated_data)
        name = d.pop("name", None)

        obj = PermissionService.create(flags=PermissionFlags(**d), name=name)
        return Response(PermissionSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        # flags are the identity of a bundle; only the name can change
        s = PermissionRenameSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        obj = PermissionService.rename(permission_id=path_uuid(pk), name=s.validated_data["name"])
        return Response(PermissionSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        obj = PermissionService.deactivate(permission_id=path_uuid(pk))
        return Response(PermissionSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="reactivate")
    def reactivate(self, request, pk=None):
        obj = PermissionService.reactivate(permission_id=path_uuid(pk))
        return Response(PermissionSerializer(obj).data, status=status.HTTP_200_OK)


@extend_schema_view(
    list=extend_schema(tags=["IAM"], responses={200: RoleFormPermissionSerializer(many=True)}),
    create=extend_schema(tags=["IAM"], request=AssignPermissionSerializer, responses={201: RoleFormPermissionSerializer}),
    partial_update=extend_schema(
        tags=["IAM"], request=PermissionFlagsSerializer, responses={200: RoleFormPermissionSerializer}
    ),
    destroy=extend_schema(tags=["IAM"], responses={204: None}),
)
class RoleFormPermissionViewSet(viewsets.ViewSet):
    """
    Grants of a permission bundle on a form to a role (one row per role+form).
    """
    permission_classes = [FormPermission]
    form_code = "ROLES"

    serializer_class = RoleFormPermissionSerializer
    queryset = RoleFormPermission.objects.none()

    def _grant(self, request, pk) -> RoleFormPermission:
        tenant_id = require_tenant(request)
        return RoleFormPermission.objects.select_related("role").get(id=path_uuid(pk), role__tenant_id=tenant_id)

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = selectors.role_form_assignments(
            tenant_id=tenant_id,
            role_id=query_uuid(request, "role_id"),
            form_id=query_uuid(request, "form_id"),
            active_only=not query_flag(request, "include_inactive", default=True),
        )
        return paginate(request, qs, RoleFormPermissionSerializer, view=self)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = AssignPermissionSerializer(data=request.data)
        s.is_valid(raise_exception=True)
        d = s.validated_data

        # role must belong to the caller's tenant
        selectors.role_by_id(tenant_id=tenant_id, role_id=d["role_id"])

        obj = RbacService.assign_permission(
            role_id=d["role_id"],
            form_id=d["form_id"],
            permission_id=d["permission_id"],
            actor_user_id=request.user.id,
        )
        return Response(RoleFormPermissionSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        grant = self._grant(request, pk)
        s = PermissionFlagsSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = RbacService.update_role_form_permission(
            role_id=grant.role_id,
            form_id=grant.form_id,
            flags=PermissionFlags(**s.validated_data),
            actor_user_id=request.user.id,
        )
        return Response(RoleFormPermissionSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        grant = self._grant(request, pk)
        RbacService.revoke_permission(role_id=grant.role_id, form_id=grant.form_id, actor_user_id=request.user.id)
        return Response(status=status.HTTP_204_NO_CONTENT)


@extend_schema_view(
    list=extend_schema(tags=["IAM"], responses={200: UserProfileSerializer(many=True)}),
    retrieve=extend_schema(tags=["IAM"], responses={200: UserProfileSerializer}),
    create=extend_schema(tags=["IAM"], request=UserProfileCreateSerializer, responses={201: UserProfileSerializer}),
    destroy=extend_schema(tags=["IAM"], responses={200: UserProfileSerializer}),
    assign_roles=extend_schema(tags=["IAM"], request=AssignRolesSerializer, responses={200: UserProfileSerializer}),
)
class UserProfileViewSet(viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "USERS"
    form_actions = {"assign_roles": PermissionAction.UPDATE}

    serializer_class = UserProfileSerializer
    queryset = UserProfile.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = selectors.profiles_for_tenant(
            tenant_id=tenant_id, active_only=not query_flag(request, "include_inactive")
        ).prefetch_related("roles")
        return paginate(request, qs, UserProfileSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = UserProfile.objects.get(id=path_uuid(pk), tenant_id=tenant_id)
        return Response(UserProfileSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = UserProfileCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = UserProfileService.create(tenant_id=tenant_id, **s.validated_data)
        return Response(UserProfileSerializer(obj).data, status=status.HTTP_201_CREATED)

    def destroy(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = UserProfileService.deactivate(tenant_id=tenant_id, user_profile_id=path_uuid(pk))
        return Response(UserProfileSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="roles")
    def assign_roles(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = AssignRolesSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        RbacService.assign_roles_to_user(
            tenant_id=tenant_id,
            user_profile_id=path_uuid(pk),
            role_ids=s.validated_data["role_ids"],
            actor_user_id=request.user.id,
        )
        obj = UserProfile.objects.get(id=path_uuid(pk), tenant_id=tenant_id)
        return Response(UserProfileSerializer(obj).data, status=status.HTTP_200_OK)
