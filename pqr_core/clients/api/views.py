# pqr_core/clients/api/views.py
from __future__ import annotations

from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.response import Response

from pqr_core.clients.api.serializers import ClientCreateSerializer, ClientSerializer, ClientUpdateSerializer
from pqr_core.clients.models import Client
from pqr_core.clients.selectors import client_by_document, client_by_number, get_client, search_clients
from pqr_core.clients.services import ClientService, ClientUpdate
from pqr_core.common.api.pagination import paginate
from pqr_core.common.api.params import path_uuid, query_flag
from pqr_core.common.permissions import FormPermission
from pqr_core.iam.scope import require_tenant
from pqr_core.iam.services.authorization import PermissionAction


@extend_schema_view(
    list=extend_schema(
        tags=["Clients"],
        responses={200: ClientSerializer(many=True)},
        parameters=[
            OpenApiParameter("q", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("include_inactive", OpenApiTypes.BOOL, OpenApiParameter.QUERY, required=False),
        ],
    ),
    retrieve=extend_schema(tags=["Clients"], responses={200: ClientSerializer}),
    create=extend_schema(tags=["Clients"], request=ClientCreateSerializer, responses={201: ClientSerializer}),
    partial_update=extend_schema(tags=["Clients"], request=ClientUpdateSerializer, responses={200: ClientSerializer}),
    destroy=extend_schema(tags=["Clients"], responses={200: ClientSerializer}),
    reactivate=extend_schema(tags=["Clients"], request=None, responses={200: ClientSerializer}),
    lookup=extend_schema(
        tags=["Clients"],
        responses={200: ClientSerializer},
        parameters=[
            OpenApiParameter("document_type", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("document_number", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
            OpenApiParameter("client_number", OpenApiTypes.STR, OpenApiParameter.QUERY, required=False),
        ],
    ),
)
class ClientViewSet(viewsets.ViewSet):
    permission_classes = [FormPermission]
    form_code = "CLIENTS"
    form_actions = {"reactivate": PermissionAction.UPDATE, "lookup": PermissionAction.READ}

    serializer_class = ClientSerializer
    queryset = Client.objects.none()

    def list(self, request):
        tenant_id = require_tenant(request)
        qs = search_clients(
            tenant_id=tenant_id,
            q=request.query_params.get("q"),
            active_only=not query_flag(request, "include_inactive"),
        )
        return paginate(request, qs, ClientSerializer, view=self)

    def retrieve(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = get_client(tenant_id=tenant_id, client_id=path_uuid(pk))
        return Response(ClientSerializer(obj).data, status=status.HTTP_200_OK)

    def create(self, request):
        tenant_id = require_tenant(request)
        s = ClientCreateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = ClientService.create(tenant_id=tenant_id, actor_user_id=request.user.id, **s.validated_data)
        return Response(ClientSerializer(obj).data, status=status.HTTP_201_CREATED)

    def partial_update(self, request, pk=None):
        tenant_id = require_tenant(request)
        s = ClientUpdateSerializer(data=request.data)
        s.is_valid(raise_exception=True)

        obj = ClientService.update(
            tenant_id=tenant_id,
            client_id=path_uuid(pk),
            patch=ClientUpdate(**s.validated_data),
            actor_user_id=request.user.id,
        )
        return Response(ClientSerializer(obj).data, status=status.HTTP_200_OK)

    def destroy(self, request, pk=None):
        # soft delete
        tenant_id = require_tenant(request)
        obj = ClientService.deactivate(tenant_id=tenant_id, client_id=path_uuid(pk), actor_user_id=request.user.id)
        return Response(ClientSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=True, methods=["post"], url_path="reactivate")
    def reactivate(self, request, pk=None):
        tenant_id = require_tenant(request)
        obj = ClientService.reactivate(tenant_id=tenant_id, client_id=path_uuid(pk))
        return Response(ClientSerializer(obj).data, status=status.HTTP_200_OK)

    @action(detail=False, methods=["get"], url_path="lookup")
    def lookup(self, request):
        """
        Find one client by document (type + number) or by client number.
        """
        tenant_id = require_tenant(request)
        qp = request.query_params

        if qp.get("client_number"):
            obj = client_by_number(tenant_id=tenant_id, client_number=qp["client_number"])
        elif qp.get("document_number"):
            obj = client_by_document(
                tenant_id=tenant_id,
                document_type=qp.get("document_type") or "",
                document_number=qp["document_number"],
            )
        else:
            raise ValidationError({"detail": "Provide client_number or document_type + document_number."})

        if obj is None:
            raise NotFound("Client not found.")
        return Response(ClientSerializer(obj).data, status=status.HTTP_200_OK)
