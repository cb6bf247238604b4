# pqr_core/holidays/models.py
from django.db import models

from pqr_core.branches.models import Branch
from pqr_core.common.models import TenantScopedModel


class HolidayType(models.TextChoices):
    NATIONAL = "NATIONAL", "National"
    LOCAL = "LOCAL", "Local"
    COMPANY = "COMPANY", "Company"


class Holiday(TenantScopedModel):
    """
    A non-working day. Without a branch it closes every branch of the tenant.
    """
    date = models.DateField(db_index=True)
    name = models.CharField(max_length=255)
    holiday_type = models.CharField(max_length=16, choices=HolidayType.choices, default=HolidayType.NATIONAL)

    branch = models.ForeignKey(Branch, on_delete=models.PROTECT, related_name="holidays", null=True, blank=True)

    class Meta:
        db_table = "holidays_holiday"
        indexes = [
            models.Index(fields=["tenant_id", "date"]),
        ]

    def __str__(self) -> str:
        return f"{self.date} {self.name}"

    @property
    def applies_to_all_branches(self) -> bool:
        return self.branch_id is None
