from django.contrib import admin

from pqr_core.branches.models import Branch


@admin.register(Branch)
class BranchAdmin(admin.ModelAdmin):
    list_display = ("name", "code", "tenant", "city", "is_main", "status")
    list_filter = ("tenant", "is_main", "status")
    search_fields = ("name", "code", "city")
    ordering = ("tenant", "name")
