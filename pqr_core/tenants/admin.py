from django.contrib import admin

from pqr_core.tenants.models import Tenant


@admin.register(Tenant)
class TenantAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "nit", "status", "contact_email")
    list_filter = ("status",)
    search_fields = ("name", "code", "nit")
    readonly_fields = ("id", "created_at", "updated_at")
