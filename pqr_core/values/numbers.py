# pqr_core/values/numbers.py
from __future__ import annotations

import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar

from pqr_core.common.errors import ValidationError


@dataclass(frozen=True)
class _PrefixedNumber:
    """
    PREFIX-YYYYMMDD-<32 hex>: UTC date of issue plus 128 random bits.
    Uniqueness comes from the random part, so no central counter is needed.
    """

    value: str

    prefix: ClassVar[str] = ""
    field_name: ClassVar[str] = ""
    pattern: ClassVar[re.Pattern]

    @classmethod
    def generate(cls, *, now: datetime | None = None):
        issued = now or datetime.now(timezone.utc)
        return cls(value=f"{cls.prefix}-{issued:%Y%m%d}-{uuid.uuid4().hex.upper()}")

    @classmethod
    def create(cls, raw: str):
        value = (raw or "").strip().upper()
        if not value:
            raise ValidationError(cls.field_name, "This field is required.")
        if not cls.pattern.match(value):
            raise ValidationError(
                cls.field_name,
                f"Invalid format: expected {cls.prefix}-YYYYMMDD-<32 hex characters>.",
            )
        return cls(value=value)

    @property
    def issued_on(self) -> str:
        """The YYYYMMDD segment."""
        return self.value.split("-")[1]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class AppointmentNumber(_PrefixedNumber):
    prefix: ClassVar[str] = "APT"
    field_name: ClassVar[str] = "appointment_number"
    pattern: ClassVar[re.Pattern] = re.compile(r"^APT-\d{8}-[A-F0-9]{32}$")


@dataclass(frozen=True)
class ClientNumber(_PrefixedNumber):
    prefix: ClassVar[str] = "CLI"
    field_name: ClassVar[str] = "client_number"
    pattern: ClassVar[re.Pattern] = re.compile(r"^CLI-\d{8}-[A-F0-9]{32}$")
