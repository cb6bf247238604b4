# pqr_core/common/permissions.py

from __future__ import annotations

from rest_framework.permissions import BasePermission

from pqr_core.iam.services.authorization import PermissionAction, has_permission

ACTIONS_BY_VIEWSET_ACTION = {
    "list": PermissionAction.READ,
    "retrieve": PermissionAction.READ,
    "metadata": PermissionAction.READ,
    "create": PermissionAction.CREATE,
    "update": PermissionAction.UPDATE,
    "partial_update": PermissionAction.UPDATE,
    "destroy": PermissionAction.DELETE,
}

ACTIONS_BY_METHOD = {
    "GET": PermissionAction.READ,
    "HEAD": PermissionAction.READ,
    "OPTIONS": PermissionAction.READ,
    "POST": PermissionAction.CREATE,
    "PUT": PermissionAction.UPDATE,
    "PATCH": PermissionAction.UPDATE,
    "DELETE": PermissionAction.DELETE,
}


class FormPermission(BasePermission):
    """
    Form-based RBAC for API views.

    A view declares:
      form_code = "APPOINTMENTS"
      form_actions = {"cancel": PermissionAction.UPDATE}   # optional, for @action routes

    The ViewSet action (or, failing that, the HTTP method) is mapped to a CRUD
    action and checked against the user's resolved grants. Superusers bypass.
    A view without form_code is denied.
    """
    message = "You do not have permission to perform this action."

    def _infer_action(self, request, view) -> PermissionAction | None:
        action = getattr(view, "action", None)
        overrides = getattr(view, "form_actions", None) or {}

        if action in overrides:
            return overrides[action]
        if action in ACTIONS_BY_VIEWSET_ACTION:
            return ACTIONS_BY_VIEWSET_ACTION[action]
        return ACTIONS_BY_METHOD.get(request.method.upper())

    def has_permission(self, request, view) -> bool:
        user = request.user
        if not user or not getattr(user, "is_authenticated", False):
            return False

        if getattr(user, "is_superuser", False):
            return True

        form_code = getattr(view, "form_code", None)
        action = self._infer_action(request, view)
        if not form_code or action is None:
            return False

        return has_permission(user.id, form_code, action)

    def has_object_permission(self, request, view, obj) -> bool:
        return self.has_permission(request, view)
