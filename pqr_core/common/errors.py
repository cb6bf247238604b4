# pqr_core/common/errors.py
from __future__ import annotations

from typing import Any


class DomainError(Exception):
    """Base for errors raised by value objects and services."""


class ValidationError(DomainError):
    """
    Rejected input. Always carries the offending field and a human-readable reason,
    so the caller can correct the input and retry.
    """

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")

    def as_dict(self) -> dict[str, str]:
        return {self.field: self.reason}


class NotFoundError(DomainError):
    """Requested entity is absent (or soft-deleted where an active one is required)."""

    def __init__(self, entity: str, key: Any = None):
        self.entity = entity
        self.key = key
        message = f"{entity} not found." if key is None else f"{entity} '{key}' not found."
        super().__init__(message)


class BusinessRuleError(DomainError):
    """Well-formed input blocked by a business rule (slot taken, holiday, wrong state...)."""

    def __init__(self, reason: str, *, code: str = "conflict"):
        self.reason = reason
        self.code = code
        super().__init__(reason)
