import logging
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional, Tuple

from .buckets import bucketize
from .slots import SLOTS_PER_HOUR, Event, slot_bounds

logger = logging.getLogger(__name__)


class EmptyDayRangeError(ValueError):
    pass


class CellKind(Enum):
    EVENT_START = "event_start"
    SUPPRESSED = "suppressed"
    EMPTY = "empty"


@dataclass(frozen=True)
class Cell:
    kind: CellKind
    row_span: int = 1
    event: Optional[Event] = None

    @property
    def content(self):
        return self.event.label if self.event else ""


@dataclass(frozen=True)
class TimeLabel:
    slot: int
    row_span: int = SLOTS_PER_HOUR


@dataclass(frozen=True)
class Row:
    slot: int
    time_label: Optional[TimeLabel]
    cells: Tuple[Cell, ...]


@dataclass(frozen=True)
class Grid:
    days: Tuple[date, ...]
    low_bound: int
    high_bound: int
    rows: Tuple[Row, ...]

    @property
    def is_empty(self):
        return not self.rows


SUPPRESSED = Cell(CellKind.SUPPRESSED, row_span=0)
EMPTY = Cell(CellKind.EMPTY)


def event_starting_at(column, slot):
    return next((e for e in column.events if e.start_slot == slot), None)


def column_cell(column, slot):
    event = event_starting_at(column, slot)
    if event is not None:
        column.occupied_until = slot + event.slot_span
        return Cell(CellKind.EVENT_START, row_span=max(event.slot_span, 1), event=event)
    if column.occupied_until > slot:
        return SUPPRESSED
    return EMPTY


def walk(columns, low, high):
    for column in columns:
        column.occupied_until = low
    rows = []
    for slot in range(low, high + 1):
        label = TimeLabel(slot) if slot % SLOTS_PER_HOUR == 0 else None
        cells = tuple(column_cell(column, slot) for column in columns)
        rows.append(Row(slot, label, cells))
    return tuple(rows)


def count_hidden(columns):
    hidden = 0
    for column in columns:
        starts = [e.start_slot for e in column.events]
        hidden += len(starts) - len(set(starts))
    return hidden


def build_grid(days, events):
    days = list(days or ())
    if not days:
        raise EmptyDayRangeError("at least one day is required")
    columns = bucketize(days, events)
    low, high = slot_bounds(columns)
    hidden = count_hidden(columns)
    if hidden:
        # only the first event per start slot is rendered
        logger.debug("%d events share a start slot and will not be shown", hidden)
    rows = walk(columns, low, high)
    return Grid(tuple(c.date for c in columns), low, high, rows)
