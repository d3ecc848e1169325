"""Quantize event times into fixed 15 minute slots."""

import math
from dataclasses import dataclass
from datetime import date, datetime, timedelta

SLOT_MINUTES = 15
SLOTS_PER_HOUR = 60 // SLOT_MINUTES
SLOTS_PER_DAY = 24 * SLOTS_PER_HOUR


@dataclass(frozen=True)
class Event:
    day: date
    start_slot: int
    slot_span: int
    actual_start: datetime
    actual_end: datetime
    label: str

    @property
    def end_slot(self):
        return self.start_slot + self.slot_span


def start_slot(dt):
    return dt.hour * SLOTS_PER_HOUR + dt.minute // SLOT_MINUTES


def slot_span(duration):
    minutes = duration.total_seconds() / 60
    if minutes <= 0:
        return 0
    return int(minutes // SLOT_MINUTES)


def event_duration(raw):
    start = raw["start"]
    end = raw.get("end")
    if end is not None:
        return end - start
    duration = raw.get("duration")
    if duration is not None:
        return duration
    return timedelta(0)


def quantize(raw):
    start = raw["start"]
    duration = event_duration(raw)
    return Event(
        day=start.date(),
        start_slot=start_slot(start),
        slot_span=slot_span(duration),
        actual_start=start,
        actual_end=start + duration,
        label=str(raw.get("title") or ""),
    )


def hour_floor(slot):
    return (slot // SLOTS_PER_HOUR) * SLOTS_PER_HOUR


def hour_ceil(slot):
    return math.ceil(slot / SLOTS_PER_HOUR) * SLOTS_PER_HOUR


def slot_bounds(columns):
    """Return the hour-aligned (low, high) slot range covering every event.

    Without events the low bound stays at the end-of-day sentinel, so
    ``low > high`` and the grid has no rows.
    """
    min_slot = SLOTS_PER_DAY
    max_slot = 0
    for column in columns:
        for event in column.events:
            min_slot = min(min_slot, event.start_slot)
            max_slot = max(max_slot, event.end_slot)
    return hour_floor(min_slot), hour_ceil(max_slot)
