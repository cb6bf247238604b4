# pqr_core/values/__init__.py
"""
Validated value types. Each factory normalizes raw input and either returns an
immutable instance or raises pqr_core.common.errors.ValidationError.
"""
from pqr_core.values.address import Address
from pqr_core.values.documents import DocumentNumber, DocumentType
from pqr_core.values.emails import Email
from pqr_core.values.numbers import AppointmentNumber, ClientNumber
from pqr_core.values.phones import PhoneNumber
from pqr_core.values.time_slots import TimeSlot

__all__ = [
    "Address",
    "AppointmentNumber",
    "ClientNumber",
    "DocumentNumber",
    "DocumentType",
    "Email",
    "PhoneNumber",
    "TimeSlot",
]
