# pqr_core/values/emails.py
from __future__ import annotations

import re
from dataclasses import dataclass

from pqr_core.common.errors import ValidationError

_EMAIL_RE = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


@dataclass(frozen=True)
class Email:
    value: str

    @classmethod
    def create(cls, raw: str) -> Email:
        value = (raw or "").strip().lower()
        if not value:
            raise ValidationError("email", "Email is required.")
        if not _EMAIL_RE.match(value):
            raise ValidationError("email", "Invalid email address.")
        return cls(value=value)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        return self.value
