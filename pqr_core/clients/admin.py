from django.contrib import admin

from pqr_core.clients.models import Client


@admin.register(Client)
class ClientAdmin(admin.ModelAdmin):
    list_display = ("client_number", "full_name", "document_type", "document_number", "tenant_id", "status")
    list_filter = ("document_type", "status")
    search_fields = ("client_number", "full_name", "document_number", "email")
    readonly_fields = ("client_number", "created_at", "updated_at")
