from datetime import time

import pytest

from pqr_core.common.errors import ValidationError
from pqr_core.values import TimeSlot


@pytest.mark.parametrize("raw", ["08:00", "17:30", "18:00", "8:30", " 12:00 "])
def test_time_slot_accepts_half_hours_inside_business_hours(raw):
    slot = TimeSlot.create(raw)
    assert slot.value == f"{slot.time_of_day:%H:%M}"
    assert slot.time_of_day.minute in (0, 30)


@pytest.mark.parametrize("raw", ["07:30", "18:30", "09:15", "24:00", "9am", ""])
def test_time_slot_rejects_outside_window_off_grid_or_malformed(raw):
    with pytest.raises(ValidationError) as exc:
        TimeSlot.create(raw)
    assert exc.value.field == "appointment_time"


def test_time_slot_from_time_normalizes_to_hh_mm():
    slot = TimeSlot.create(time(9, 30))
    assert slot.value == "09:30"
    assert str(slot) == "09:30"
    assert slot == TimeSlot.create("9:30")


def test_bookable_slots_cover_the_day_on_a_half_hour_grid():
    slots = [s.value for s in TimeSlot.bookable_slots()]
    assert len(slots) == 20
    assert slots[0] == "08:00"
    assert slots[-1] == "17:30"
    assert "18:00" not in slots
