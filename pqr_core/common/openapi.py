# pqr_core/common/openapi.py
from __future__ import annotations

from drf_spectacular.openapi import AutoSchema
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter

TENANT_HEADER = OpenApiParameter(
    name="X-Tenant-Id",
    type=OpenApiTypes.UUID,
    location=OpenApiParameter.HEADER,
    required=True,
    description="Company (tenant) the request acts on. The caller must be a member.",
)


class PQRAutoSchema(AutoSchema):
    """
    Documents X-Tenant-Id on every view unless the view sets
    `tenant_scoped = False` (auth, /me, tenant administration).
    """

    def get_override_parameters(self):
        params = list(super().get_override_parameters() or [])
        if getattr(self.view, "tenant_scoped", True) and all(
            getattr(p, "name", "").lower() != "x-tenant-id" for p in params
        ):
            params.append(TENANT_HEADER)
        return params
