# pqr_core/system_settings/models.py
from django.db import models

from pqr_core.common.models import TenantScopedModel


class SettingValueType(models.TextChoices):
    STRING = "STRING", "String"
    NUMBER = "NUMBER", "Number"
    BOOLEAN = "BOOLEAN", "Boolean"
    JSON = "JSON", "JSON"


class SystemSetting(TenantScopedModel):
    """
    Runtime business configuration (e.g. MAX_APPOINTMENTS_PER_DAY), one row per key per tenant.
    Values are stored as text and read back through the typed getters.
    """
    key = models.CharField(max_length=100)
    value = models.TextField()
    value_type = models.CharField(max_length=16, choices=SettingValueType.choices, default=SettingValueType.STRING)
    description = models.CharField(max_length=500, blank=True, default="")
    is_encrypted = models.BooleanField(default=False)

    class Meta:
        db_table = "system_settings_setting"
        constraints = [
            models.UniqueConstraint(fields=["tenant_id", "key"], name="uq_setting_tenant_key"),
        ]

    def __str__(self) -> str:
        return f"{self.key}={'***' if self.is_encrypted else self.value}"
