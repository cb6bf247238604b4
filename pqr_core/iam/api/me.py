# pqr_core/iam/api/me.py
from __future__ import annotations

from drf_spectacular.utils import extend_schema
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from pqr_core.iam.api.schema_serializers import MePermissionsResponseSerializer, MeResponseSerializer
from pqr_core.iam.scope import assert_user_membership, resolve_scope_from_headers
from pqr_core.iam.services.authorization import get_user_permissions
from pqr_core.iam.services.membership import list_user_tenants


def _user_payload(user) -> dict:
    return {
        "id": user.id,
        "username": user.get_username(),
        "email": user.email or None,
        "is_superuser": user.is_superuser,
    }


class MeView(APIView):
    """
    Lives outside the tenant scope so the front end can pick a company
    after login. X-Tenant-Id is optional; when sent it is validated like
    anywhere else and echoed back as the active scope.
    """

    tenant_scoped = False
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: MeResponseSerializer}, tags=["IAM"])
    def get(self, request):
        memberships = list_user_tenants(request.user.id)

        active_scope = None
        scope = resolve_scope_from_headers(request)
        if scope is not None:
            assert_user_membership(request.user, scope)
            active_scope = next(
                (m for m in memberships if m["tenant_id"] == str(scope.tenant_id)),
                {"tenant_id": str(scope.tenant_id)},
            )

        return Response(
            {
                "user": _user_payload(request.user),
                "memberships": memberships,
                "active_scope": active_scope,
            }
        )


class MePermissionsView(APIView):
    tenant_scoped = False
    permission_classes = [IsAuthenticated]

    @extend_schema(responses={200: MePermissionsResponseSerializer}, tags=["IAM"])
    def get(self, request):
        return Response(get_user_permissions(request.user.id).as_dict())
