# pqr_core/iam/scope.py
from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from rest_framework.exceptions import PermissionDenied, ValidationError

from pqr_core.iam.services.membership import is_user_member_of_tenant


@dataclass(frozen=True)
class Scope:
    tenant_id: UUID


HDR_TENANT = "X-Tenant-Id"

MISSING_SCOPE_MSG = "Missing scope header. Provide X-Tenant-Id."
INVALID_SCOPE_MSG = "Invalid scope header. Provide a valid UUID for X-Tenant-Id."
NOT_MEMBER_MSG = "You do not have access to the selected tenant."


def _get_header(request, name: str) -> str | None:
    headers = getattr(request, "headers", None)
    if headers is not None:
        v = headers.get(name)
        if v:
            return v
    return request.META.get("HTTP_" + name.upper().replace("-", "_"))


def resolve_scope_from_headers(request) -> Scope | None:
    """
    Reads the tenant header. Returns None when it is absent.
    Raises 400 ValidationError when it is not a UUID.
    """
    raw = _get_header(request, HDR_TENANT)
    if not raw:
        return None
    try:
        return Scope(tenant_id=UUID(str(raw)))
    except ValueError:
        raise ValidationError({"detail": INVALID_SCOPE_MSG})


def assert_user_membership(user, scope: Scope) -> None:
    """
    Raises 403 unless the user has an active profile in scope.tenant_id.
    """
    if not user or not getattr(user, "is_authenticated", False):
        raise PermissionDenied("Authentication required to set scope.")

    if not is_user_member_of_tenant(user_id=user.id, tenant_id=scope.tenant_id):
        raise PermissionDenied(NOT_MEMBER_MSG)


def apply_scope_from_headers(request, user=None) -> Scope | None:
    """
    Used by the auth layer (CookieOrHeaderJWTAuthentication).

    If the tenant header is present: validates it, verifies membership and sets
    request.tenant_id / request.scope. Without the header it does nothing.
    """
    scope = resolve_scope_from_headers(request)
    if scope is None:
        return None

    u = user or getattr(request, "user", None)
    assert_user_membership(u, scope)

    request.tenant_id = scope.tenant_id
    request.scope = scope
    # DRF wraps the Django request; keep both in sync for the middleware/tests
    inner = getattr(request, "_request", None)
    if inner is not None:
        inner.tenant_id = scope.tenant_id
        inner.scope = scope
    return scope


def require_tenant(request) -> UUID:
    """
    Tenant of the current request, from middleware/auth or the header itself.
    Raises 400 with MISSING_SCOPE_MSG when there is none, 403 for non-members.
    """
    tenant_id = getattr(request, "tenant_id", None)
    if tenant_id:
        return UUID(str(tenant_id))

    scope = resolve_scope_from_headers(request)
    if scope is None:
        raise ValidationError({"detail": MISSING_SCOPE_MSG})

    # forced/session auth skipped the JWT scope check
    assert_user_membership(getattr(request, "user", None), scope)
    request.tenant_id = scope.tenant_id
    request.scope = scope
    return scope.tenant_id
