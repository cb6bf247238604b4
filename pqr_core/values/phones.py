# pqr_core/values/phones.py
from __future__ import annotations

import re
from dataclasses import dataclass

from pqr_core.common.errors import ValidationError

COUNTRY_CODE = "57"

# Colombian landline/mobile, with an optional +57 prefix
PHONE_RE = re.compile(r"^(\+57\s?)?([1-9]\d{6,9})$")
MOBILE_RE = re.compile(r"^(\+57\s?)?(3\d{9})$")

_NON_DIAL_CHARS = re.compile(r"[^\d+]")


def clean_phone(raw: str) -> str:
    """
    Keep digits and '+', then drop the country code.
    A bare '57' is only treated as a prefix when what is left is longer
    than a local number.
    """
    cleaned = _NON_DIAL_CHARS.sub("", raw or "")
    if cleaned.startswith("+" + COUNTRY_CODE):
        return cleaned[len(COUNTRY_CODE) + 1:]
    if cleaned.startswith(COUNTRY_CODE) and len(cleaned) > 10:
        return cleaned[len(COUNTRY_CODE):]
    return cleaned


@dataclass(frozen=True)
class PhoneNumber:
    number: str
    is_mobile: bool

    @classmethod
    def create(cls, raw: str, validate_as_mobile: bool = False) -> PhoneNumber:
        if not (raw or "").strip():
            raise ValidationError("phone", "Phone number is required.")

        number = clean_phone(raw)

        if validate_as_mobile:
            if not MOBILE_RE.match(number):
                raise ValidationError("phone", "Invalid mobile number: expected 10 digits starting with 3.")
            return cls(number=number, is_mobile=True)

        if not PHONE_RE.match(number):
            raise ValidationError("phone", "Invalid phone number.")
        return cls(number=number, is_mobile=bool(MOBILE_RE.match(number)))

    @property
    def value(self) -> str:
        return self.number

    @property
    def formatted(self) -> str:
        n = self.number
        if self.is_mobile and len(n) == 10:
            return f"{n[:3]} {n[3:6]} {n[6:]}"
        if len(n) == 7:
            return f"{n[:3]} {n[3:]}"
        return f"{n[:-4]} {n[-4:]}"

    @property
    def international(self) -> str:
        return f"+{COUNTRY_CODE}{self.number}"

    def __str__(self) -> str:
        return self.number
