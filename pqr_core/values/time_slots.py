# pqr_core/values/time_slots.py
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import time

from pqr_core.common.errors import ValidationError

BUSINESS_OPEN = time(8, 0)
BUSINESS_CLOSE = time(18, 0)
SLOT_MINUTES = 30

_TIME_RE = re.compile(r"^([01]?[0-9]|2[0-3]):[0-5][0-9]$")


@dataclass(frozen=True)
class TimeSlot:
    """
    A half-hour aligned time of day inside business hours (08:00-18:00, both inclusive).
    """

    value: str
    time_of_day: time

    @classmethod
    def create(cls, raw: str | time) -> TimeSlot:
        if isinstance(raw, time):
            parsed = raw.replace(second=0, microsecond=0, tzinfo=None)
        else:
            text = (raw or "").strip()
            if not text:
                raise ValidationError("appointment_time", "Time is required.")
            if not _TIME_RE.match(text):
                raise ValidationError("appointment_time", "Invalid time format: expected HH:MM.")
            hours, minutes = text.split(":")
            parsed = time(int(hours), int(minutes))

        if parsed < BUSINESS_OPEN or parsed > BUSINESS_CLOSE:
            raise ValidationError(
                "appointment_time",
                f"Time must be between {BUSINESS_OPEN:%H:%M} and {BUSINESS_CLOSE:%H:%M}.",
            )
        if parsed.minute % SLOT_MINUTES != 0:
            raise ValidationError("appointment_time", "Time must be on the hour or half hour.")

        return cls(value=f"{parsed:%H:%M}", time_of_day=parsed)

    @classmethod
    def bookable_slots(cls) -> list[TimeSlot]:
        """Every slot an appointment can start at: 08:00 .. 17:30."""
        slots = []
        minutes = BUSINESS_OPEN.hour * 60
        last_start = BUSINESS_CLOSE.hour * 60 - SLOT_MINUTES
        while minutes <= last_start:
            slots.append(cls.create(time(minutes // 60, minutes % 60)))
            minutes += SLOT_MINUTES
        return slots

    def __str__(self) -> str:
        return self.value
