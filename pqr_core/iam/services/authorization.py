# pqr_core/iam/services/authorization.py
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional
from uuid import UUID

from pqr_core.common.models import RecordStatus
from pqr_core.iam.models import RoleFormPermission, UserProfile
from pqr_core.tenants.models import TenantStatus


class PermissionAction(enum.Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"

    @classmethod
    def parse(cls, raw: "str | PermissionAction") -> Optional["PermissionAction"]:
        """Unknown actions resolve to None (and therefore to "no access")."""
        if isinstance(raw, PermissionAction):
            return raw
        try:
            return cls((raw or "").strip().lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class PermissionFlags:
    can_read: bool = False
    can_create: bool = False
    can_update: bool = False
    can_delete: bool = False

    @classmethod
    def of(cls, permission) -> PermissionFlags:
        return cls(
            can_read=permission.can_read,
            can_create=permission.can_create,
            can_update=permission.can_update,
            can_delete=permission.can_delete,
        )

    def union(self, other: PermissionFlags) -> PermissionFlags:
        return PermissionFlags(
            can_read=self.can_read or other.can_read,
            can_create=self.can_create or other.can_create,
            can_update=self.can_update or other.can_update,
            can_delete=self.can_delete or other.can_delete,
        )

    def allows(self, action: PermissionAction) -> bool:
        return getattr(self, f"can_{action.value}")

    def actions(self) -> list[str]:
        return [a.value for a in PermissionAction if self.allows(a)]

    @property
    def name(self) -> str:
        """Canonical bundle name, e.g. "read+update"; "none" when every flag is off."""
        return "+".join(self.actions()) or "none"

    def as_dict(self) -> dict[str, bool]:
        return {
            "can_read": self.can_read,
            "can_create": self.can_create,
            "can_update": self.can_update,
            "can_delete": self.can_delete,
        }


NO_ACCESS = PermissionFlags()


@dataclass(frozen=True)
class UserPermissions:
    user_id: int
    tenant_id: UUID | None
    roles: list[str] = field(default_factory=list)
    forms: dict[str, PermissionFlags] = field(default_factory=dict)

    @property
    def permissions(self) -> list[str]:
        return sorted(f"{code}.{a}" for code, flags in self.forms.items() for a in flags.actions())

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "tenant_id": str(self.tenant_id) if self.tenant_id else None,
            "roles": self.roles,
            "forms": {code: flags.as_dict() for code, flags in sorted(self.forms.items())},
            "permissions": self.permissions,
        }


def _active_profile(user_id: int) -> UserProfile | None:
    return (
        UserProfile.objects.select_related("tenant")
        .filter(
            user_id=user_id,
            user__is_active=True,
            status=RecordStatus.ACTIVE,
            tenant__status=TenantStatus.ACTIVE,
        )
        .first()
    )


def _grants_for(profile: UserProfile):
    """
    Every grant that counts: the RoleFormPermission row, its role, form and
    bundle all ACTIVE, and the role assigned to this profile within its tenant.
    """
    return (
        RoleFormPermission.objects.select_related("form", "permission")
        .filter(
            status=RecordStatus.ACTIVE,
            role__status=RecordStatus.ACTIVE,
            role__tenant_id=profile.tenant_id,
            role__user_roles__user_profile=profile,
            form__status=RecordStatus.ACTIVE,
            permission__status=RecordStatus.ACTIVE,
        )
    )


def resolve_permissions(user_id: int) -> dict[str, PermissionFlags]:
    """
    Effective flags per form code: the OR of every active grant reachable
    through the user's active roles. Missing or inactive users resolve to {}.
    """
    profile = _active_profile(user_id)
    if profile is None:
        return {}

    result: dict[str, PermissionFlags] = {}
    for grant in _grants_for(profile):
        code = grant.form.code
        result[code] = result.get(code, NO_ACCESS).union(PermissionFlags.of(grant.permission))
    return result


def has_permission(user_id: int, form_code: str, action: "str | PermissionAction") -> bool:
    """
    Never raises for missing data: unknown user, form, action or grant -> False.
    """
    parsed = PermissionAction.parse(action)
    if parsed is None:
        return False

    flags = resolve_permissions(user_id).get((form_code or "").strip().upper())
    if flags is None:
        return False
    return flags.allows(parsed)


def get_user_permissions(user_id: int) -> UserPermissions:
    profile = _active_profile(user_id)
    if profile is None:
        return UserPermissions(user_id=user_id, tenant_id=None)

    roles = sorted(
        profile.roles.filter(status=RecordStatus.ACTIVE).values_list("code", flat=True)
    )
    return UserPermissions(
        user_id=user_id,
        tenant_id=profile.tenant_id,
        roles=list(roles),
        forms=resolve_permissions(user_id),
    )
