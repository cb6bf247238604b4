# pqr_core/branches/api/views.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from pqr_core.branches.api.serializers import BranchCreateSerializer, BranchSerializer, BranchUpdateSerializer
from pqr_core.branches.models import Branch
from pqr_core.branches.selectors import branch_by_id, branches_for_tenant
from pqr_core.branches.services import BranchService, BranchUpdate
from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid, query_flag
from pqr_core.common.permissions import FormPermission
from pqr_core.iam.scope import require_tenant
from pqr_core.iam.services.authorization import PermissionAction


@extend_schema_view(
    list=extend_schema(tags=["Branches"], responses={200: BranchSerializer(many=True)}),
    retrieve=extend_schema(tags=["Branches"], responses={200: BranchSerializer}),
    create=extend_schema(tags=["Branches"], request=BranchCreateSerializer, responses={201: BranchSerializer}),
    partial_update=extend_schema(tags=["Branches"], request=BranchUpdateSerializer, responses={200: BranchSerializer}),
    destroy=extend_schema(tags=["Branches"], responses={200: BranchSerializer}),
    reactivate=extend_schema(tags=["Branches"], request=None, responses={200: BranchSerializer}),
)
class BranchViewSet(viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "BRANCHES"
    form_actions = {"reactivate": PermissionAction.UPDATE}

    serializer_class = BranchSerializer
    queryset = Branch.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = branches_for_tenant(tenant_id=tenant_id, active_only=not query_flag(request, "include_inactive"))
        return paginate(request, qs, BranchSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = branch_by_id(tenant_id=tenant_id, branch_id=path_uuid(pk))
        return Response(BranchSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = BranchCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = BranchService.create(tenant_id=tenant_id, **s.validated_data)
        return Response(BranchSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = BranchUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = BranchService.update(
            tenant_id=tenant_id,
            branch_id=path_uuid(pk),
            patch=BranchUpdate(**s.validated_data),
        )
        return Response(BranchSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        # soft delete
        tenant_id = require_tenant(request)
        obj = BranchService.deactivate(tenant_id=tenant_id, branch_id=path_uuid(pk))
        return Response(BranchSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="reactivate")
    def reactivate(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = BranchService.reactivate(tenant_id=tenant_id, branch_id=path_uuid(pk))
        return Response(BranchSerializer(obj).data, status=status.HTTP_200_OK)
