# pqr_core/api/urls.py
from __future__ import annotations

from django.urls import path
from rest_framework.routers import DefaultRouter

from pqr_core.appointments.api.views import AppointmentTypeViewSet, AppointmentViewSet
from pqr_core.audit.api.views import AuditEventViewSet
from pqr_core.branches.api.views import BranchViewSet
from pqr_core.clients.api.views import ClientViewSet
from pqr_core.holidays.api.views import HolidayViewSet
from pqr_core.iam.api.auth import LoginView, LogoutView, RefreshView
from pqr_core.iam.api.me import MePermissionsView, MeView
from pqr_core.iam.api.views import (
    FormViewSet,
    PermissionViewSet,
    RoleFormPermissionViewSet,
    RoleViewSet,
    UserProfileViewSet,
)
from pqr_core.notifications.api.views import NotificationViewSet
from pqr_core.system_settings.api.views import SystemSettingViewSet
from pqr_core.tenants.api.views import TenantViewSet

router = DefaultRouter()

# Platform
router.register(r"tenants", TenantViewSet, basename="tenants")

# RBAC
router.register(r"roles", RoleViewSet, basename="roles")
router.register(r"forms", FormViewSet, basename="forms")
router.register(r"permissions", PermissionViewSet, basename="permissions")
router.register(r"role-form-permissions", RoleFormPermissionViewSet, basename="role-form-permissions")
router.register(r"users", UserProfileViewSet, basename="users")

# Scheduling
router.register(r"branches", BranchViewSet, basename="branches")
router.register(r"clients", ClientViewSet, basename="clients")
router.register(r"appointment-types", AppointmentTypeViewSet, basename="appointment-types")
router.register(r"appointments", AppointmentViewSet, basename="appointments")
router.register(r"holidays", HolidayViewSet, basename="holidays")
router.register(r"settings", SystemSettingViewSet, basename="settings")

router.register(r"notifications", NotificationViewSet, basename="notifications")
router.register(r"audit/events", AuditEventViewSet, basename="audit-events")

urlpatterns = [
    path("auth/login/", LoginView.as_view(), name="login"),
    path("auth/refresh/", RefreshView.as_view(), name="refresh"),
    path("auth/logout/", LogoutView.as_view(), name="logout"),
    path("me/", MeView.as_view(), name="me"),
    path("me/permissions/", MePermissionsView.as_view(), name="me-permissions"),

    # Router URLs last (so explicit paths win if ever overlapping)
    *router.urls,
]
