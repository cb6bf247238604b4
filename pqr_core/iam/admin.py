# pqr_core/iam/admin.py
from __future__ import annotations

from django.contrib import admin

from pqr_core.iam.models import Form, Permission, Role, RoleFormPermission, UserProfile, UserRole


@admin.register(Permission)
class PermissionAdmin(admin.ModelAdmin):
    list_display = ("name", "can_read", "can_create", "can_update", "can_delete", "status")
    list_filter = ("status",)
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Form)
class FormAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "module", "status")
    list_filter = ("module", "status")
    search_fields = ("code", "name")
    ordering = ("module", "code")


class RoleFormPermissionInline(admin.TabularInline):
    model = RoleFormPermission
    extra = 0
    autocomplete_fields = ("form", "permission")


@admin.register(Role)
class RoleAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "tenant", "status")
    list_filter = ("tenant", "status")
    search_fields = ("code", "name")
    inlines = [RoleFormPermissionInline]
    ordering = ("tenant", "code")


class UserRoleInline(admin.TabularInline):
    model = UserRole
    extra = 0


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "tenant", "document_number", "status", "created_at")
    list_filter = ("tenant", "status")
    search_fields = ("user__username", "user__email", "document_number")
    inlines = [UserRoleInline]
    ordering = ("-created_at",)
