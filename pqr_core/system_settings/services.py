# pqr_core/system_settings/services.py
from __future__ import annotations

import json
import logging
from typing import Any
from uuid import UUID

from django.db import transaction

from pqr_core.common.errors import ValidationError
from pqr_core.system_settings.models import SettingValueType, SystemSetting

logger = logging.getLogger(__name__)

_TRUE = {"true", "1", "yes", "on"}
_FALSE = {"false", "0", "no", "off"}


def normalize_key(key: str) -> str:
    k = (key or "").strip().upper()
    if not k:
        raise ValidationError("key", "Setting key is required.")
    return k


def validate_value(value: str, value_type: str) -> str:
    """
    Returns the stored text form of `value`, or raises if it does not parse as `value_type`.
    """
    if value_type not in SettingValueType.values:
        raise ValidationError("value_type", f"Invalid value type. Allowed: {list(SettingValueType.values)}")

    text = "" if value is None else str(value).strip()

    if value_type == SettingValueType.NUMBER:
        try:
            float(text)
        except ValueError:
            raise ValidationError("value", f"'{text}' is not a number.")
    elif value_type == SettingValueType.BOOLEAN:
        if text.lower() not in _TRUE | _FALSE:
            raise ValidationError("value", f"'{text}' is not a boolean.")
        text = "true" if text.lower() in _TRUE else "false"
    elif value_type == SettingValueType.JSON:
        try:
            json.loads(text)
        except ValueError:
            raise ValidationError("value", "Value is not valid JSON.")
    return text


class SystemSettingService:
    @staticmethod
    @transaction.atomic
    def upsert(
        *,
        tenant_id: UUID,
        key: str,
        value: Any,
        value_type: str = SettingValueType.STRING,
        description: str | None = None,
        is_encrypted: bool = False,
    ) -> SystemSetting:
        key = normalize_key(key)
        text = validate_value(value, value_type)

        setting = SystemSetting.objects.select_for_update().filter(tenant_id=tenant_id, key=key).first()
        if setting is None:
            setting = SystemSetting.objects.create(
                tenant_id=tenant_id,
                key=key,
                value=text,
                value_type=value_type,
                description=description or "",
                is_encrypted=is_encrypted,
            )
            logger.info("Setting %s created in tenant %s", key, tenant_id)
            return setting

        setting.value = text
        setting.value_type = value_type
        setting.is_encrypted = is_encrypted
        if description is not None:
            setting.description = description
        setting.reactivate()
        setting.save()
        logger.info("Setting %s updated in tenant %s", key, tenant_id)
        return setting

    @staticmethod
    @transaction.atomic
    def deactivate(*, tenant_id: UUID, key: str) -> SystemSetting:
        setting = SystemSetting.objects.select_for_update().get(tenant_id=tenant_id, key=normalize_key(key))
        if setting.deactivate():
            setting.save(update_fields=["status", "deactivated_at", "updated_at"])
        return setting
