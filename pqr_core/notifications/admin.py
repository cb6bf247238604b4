from django.contrib import admin

from pqr_core.notifications.models import Notification


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("title", "notification_type", "delivery_status", "user", "client", "is_read", "created_at")
    list_filter = ("notification_type", "delivery_status", "is_read", "status")
    search_fields = ("title", "message")
    raw_id_fields = ("user", "client", "appointment")
    readonly_fields = ("sent_at", "read_at", "created_at", "updated_at")
