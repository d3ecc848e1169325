import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import List

from .slots import Event, quantize

logger = logging.getLogger(__name__)


@dataclass
class DayColumn:
    date: date
    events: List[Event] = field(default_factory=list)
    occupied_until: int = 0


def as_date(value):
    if isinstance(value, datetime):
        return value.date()
    return value


def day_range(first, last):
    first = as_date(first)
    last = as_date(last)
    start, end = min(first, last), max(first, last)
    days = []
    cur = start
    while cur <= end:
        days.append(cur)
        cur += timedelta(days=1)
    return days


def unique_days(days):
    return list(dict.fromkeys(as_date(day) for day in days))


def bucketize(days, events):
    columns = {day: DayColumn(day) for day in unique_days(days)}
    dropped = 0
    for raw in events:
        event = quantize(raw)
        column = columns.get(event.day)
        if column is None:
            dropped += 1
            continue
        column.events.append(event)
    if dropped:
        logger.debug("dropped %d events outside the requested days", dropped)
    for column in columns.values():
        # sorted() is stable, so simultaneous starts keep their input order
        column.events = sorted(column.events, key=lambda e: e.start_slot)
    return list(columns.values())
