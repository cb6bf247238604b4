# pqr_core/common/middleware.py
from __future__ import annotations

import logging
from typing import Optional
from uuid import UUID

from django.http import JsonResponse
from django.utils.deprecation import MiddlewareMixin

from pqr_core.common.api.exceptions import build_error_envelope
from pqr_core.iam.scope import INVALID_SCOPE_MSG, MISSING_SCOPE_MSG, NOT_MEMBER_MSG, Scope

logger = logging.getLogger(__name__)


def _parse_uuid(value: str) -> Optional[UUID]:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


class TenantScopeMiddleware(MiddlewareMixin):
    """
    Enforces tenant scope for API requests.

    Behavior:
      - Enforced under /api/v1/.
      - For most endpoints the X-Tenant-Id header is required (400 if missing).
      - For /me/ endpoints the header is OPTIONAL, but if provided it must be valid
        and the user must be a member.
      - Auth endpoints (login/refresh/logout) never require scope.
      - Docs/schema/admin endpoints are public.
      - Invalid UUID -> 400; not a member of the tenant -> 403.
      - On success attaches request.scope and request.tenant_id.

    Requests authenticated by JWT are scoped again by the DRF authentication class,
    because Django's AuthenticationMiddleware only knows session users.
    """

    TENANT_META_KEYS = ("HTTP_X_TENANT_ID",)

    ENFORCED_PREFIXES = ("/api/v1/",)

    PUBLIC_PATH_PREFIXES = (
        "/admin/",
        "/api/docs/",
        "/api/schema/",
    )

    AUTH_PATH_SUFFIXES = (
        "/auth/login/",
        "/auth/refresh/",
        "/auth/logout/",
    )

    ALLOW_NO_SCOPE_EXACT_PATHS = ("/api/v1/",)

    ALLOW_NO_SCOPE_SUFFIXES = (
        "/me/",
        "/me/permissions/",
    )

    # tenant administration is above any single tenant
    ALLOW_NO_SCOPE_PREFIXES = ("/api/v1/tenants/",)

    def _starts_with_any(self, path: str, prefixes: tuple[str, ...]) -> bool:
        return any(path.startswith(p) for p in prefixes)

    def _endswith_any(self, path: str, suffixes: tuple[str, ...]) -> bool:
        return any(path.endswith(s) for s in suffixes)

    def _get_meta_first(self, request, keys: tuple[str, ...]) -> Optional[str]:
        for k in keys:
            v = request.META.get(k)
            if v:
                return v
        return None

    def _json_error(self, request, *, status_code: int, code: str, message: str) -> JsonResponse:
        return JsonResponse(
            build_error_envelope(request=request, code=code, message=message, details=None),
            status=status_code,
        )

    def process_request(self, request):
        request.scope = None
        request.tenant_id = None

        path = getattr(request, "path", "") or ""

        if self._starts_with_any(path, self.PUBLIC_PATH_PREFIXES):
            return None

        if not self._starts_with_any(path, self.ENFORCED_PREFIXES):
            return None

        if path in self.ALLOW_NO_SCOPE_EXACT_PATHS:
            return None

        if self._endswith_any(path, self.AUTH_PATH_SUFFIXES):
            return None

        # JWT users are not known yet at this point; the auth class scopes them.
        user = getattr(request, "user", None)
        if not user or not user.is_authenticated:
            return None

        tenant_raw = self._get_meta_first(request, self.TENANT_META_KEYS)

        if not tenant_raw:
            if self._endswith_any(path, self.ALLOW_NO_SCOPE_SUFFIXES):
                return None
            if self._starts_with_any(path, self.ALLOW_NO_SCOPE_PREFIXES):
                return None
            return self._json_error(request, status_code=400, code="validation_error", message=MISSING_SCOPE_MSG)

        tenant_id = _parse_uuid(tenant_raw)
        if not tenant_id:
            return self._json_error(request, status_code=400, code="validation_error", message=INVALID_SCOPE_MSG)

        from pqr_core.iam.services.membership import is_user_member_of_tenant

        if not is_user_member_of_tenant(user_id=user.id, tenant_id=tenant_id):
            logger.warning("User %s denied scope for tenant %s", user.id, tenant_id)
            return self._json_error(request, status_code=403, code="permission_denied", message=NOT_MEMBER_MSG)

        request.scope = Scope(tenant_id=tenant_id)
        request.tenant_id = tenant_id
        return None
