# pqr_core/tests/helpers.py
from __future__ import annotations

from datetime import date, timedelta

from django.contrib.auth import get_user_model

from pqr_core.iam.models import Form, UserProfile, UserRole
from pqr_core.iam.services.authorization import PermissionFlags
from pqr_core.iam.services.catalog import PermissionService
from pqr_core.iam.services.rbac import RbacService


def scope_headers(tenant):
    """
    Tenant scope header as the DRF test client expects it (HTTP_ prefix).
    """
    return {"HTTP_X_TENANT_ID": str(tenant.id)}


def next_workday(start: date | None = None, *, days_ahead: int = 7) -> date:
    """First non-Sunday on or after start + days_ahead."""
    d = (start or date.today()) + timedelta(days=days_ahead)
    while d.weekday() == 6:
        d += timedelta(days=1)
    return d


def grant(role, form_code: str, flags: PermissionFlags):
    """Point role at the bundle for exactly these flags on form_code."""
    form, _ = Form.objects.get_or_create(code=form_code, defaults={"name": form_code.title()})
    bundle = PermissionService.get_or_create_bundle(flags=flags)
    return RbacService.assign_permission(role_id=role.id, form_id=form.id, permission_id=bundle.id)


def make_member(tenant, username: str, *roles):
    User = get_user_model()
    u = User.objects.create_user(username=username, password="pass123", is_active=True)
    profile = UserProfile.objects.create(user=u, tenant=tenant)
    for r in roles:
        UserRole.objects.create(user_profile=profile, role=r)
    return u
