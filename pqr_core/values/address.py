# pqr_core/values/address.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from pqr_core.common.errors import ValidationError


def _required(field: str, raw: str, min_length: int) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValidationError(field, "This field is required.")
    if len(value) < min_length:
        raise ValidationError(field, f"Must be at least {min_length} characters.")
    return value


@dataclass(frozen=True)
class Address:
    street: str
    city: str
    state: str
    postal_code: Optional[str] = None

    @classmethod
    def create(cls, street: str, city: str, state: str, postal_code: Optional[str] = None) -> Address:
        postal = (postal_code or "").strip() or None
        return cls(
            street=_required("street", street, 5),
            city=_required("city", city, 2),
            state=_required("state", state, 2),
            postal_code=postal,
        )

    @classmethod
    def parse(cls, full_address: str) -> Address:
        """
        Inverse of full_address: "street, city, state[ postal]".
        """
        parts = [p.strip() for p in (full_address or "").split(",")]
        if len(parts) < 3:
            raise ValidationError("address", "Expected 'street, city, state[ postal code]'.")

        street = ", ".join(parts[:-2])
        city = parts[-2]
        state_parts = parts[-1].split(" ")
        postal = None
        if len(state_parts) > 1 and any(ch.isdigit() for ch in state_parts[-1]):
            postal = state_parts[-1]
            state_parts = state_parts[:-1]
        return cls.create(street, city, " ".join(state_parts), postal)

    @property
    def full_address(self) -> str:
        base = f"{self.street}, {self.city}, {self.state}"
        return f"{base} {self.postal_code}" if self.postal_code else base

    @property
    def value(self) -> str:
        return self.full_address

    def __str__(self) -> str:
        return self.full_address
