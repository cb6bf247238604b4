# pqr_core/appointments/models.py
from django.conf import settings
from django.db import models

from pqr_core.branches.models import Branch
from pqr_core.clients.models import Client
from pqr_core.common.models import TenantScopedModel


class AppointmentType(TenantScopedModel):
    """
    What the appointment is for (billing claim, new connection, meter review...).
    """
    code = models.CharField(max_length=32)
    name = models.CharField(max_length=255)
    description = models.CharField(max_length=500, blank=True, default="")
    estimated_minutes = models.PositiveIntegerField(default=30)
    requires_documentation = models.BooleanField(default=False)
    display_order = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = "appointments_appointment_type"
        constraints = [
            models.UniqueConstraint(fields=["tenant_id", "code"], name="uq_appointment_type_tenant_code"),
        ]

    def __str__(self) -> str:
        return f"{self.code} - {self.name}"


class AppointmentStatus(models.TextChoices):
    PENDING = "PENDING", "Pending"
    CONFIRMED = "CONFIRMED", "Confirmed"
    IN_PROGRESS = "IN_PROGRESS", "In progress"
    COMPLETED = "COMPLETED", "Completed"
    CANCELLED = "CANCELLED", "Cancelled"


# statuses that no longer hold a slot
RELEASED_STATUSES = (AppointmentStatus.CANCELLED, AppointmentStatus.COMPLETED)


class Appointment(TenantScopedModel):
    appointment_number = models.CharField(max_length=48, unique=True)

    client = models.ForeignKey(Client, on_delete=models.PROTECT, related_name="appointments")
    branch = models.ForeignKey(Branch, on_delete=models.PROTECT, related_name="appointments")
    appointment_type = models.ForeignKey(AppointmentType, on_delete=models.PROTECT, related_name="appointments")

    appointment_date = models.DateField(db_index=True)
    appointment_time = models.TimeField()

    appointment_status = models.CharField(
        max_length=16,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.PENDING,
        db_index=True,
    )

    notes = models.TextField(blank=True, default="")
    cancellation_reason = models.CharField(max_length=500, blank=True, default="")
    cancelled_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.PROTECT,
        related_name="appointments_created",
        null=True,
        blank=True,
    )

    class Meta:
        db_table = "appointments_appointment"
        indexes = [
            models.Index(fields=["tenant_id", "branch", "appointment_date"]),
            models.Index(fields=["tenant_id", "client"]),
            models.Index(fields=["tenant_id", "appointment_status"]),
        ]
        ordering = ["appointment_date", "appointment_time"]

    def __str__(self) -> str:
        return self.appointment_number

    @property
    def holds_slot(self) -> bool:
        return self.appointment_status not in RELEASED_STATUSES
