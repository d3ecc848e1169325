from .buckets import DayColumn, bucketize, day_range
from .builder import (
    Cell,
    CellKind,
    EmptyDayRangeError,
    Grid,
    Row,
    TimeLabel,
    build_grid,
    walk,
)
from .slots import (
    SLOT_MINUTES,
    SLOTS_PER_DAY,
    SLOTS_PER_HOUR,
    Event,
    quantize,
    slot_bounds,
    slot_span,
    start_slot,
)

__all__ = [
    "Cell",
    "CellKind",
    "DayColumn",
    "EmptyDayRangeError",
    "Event",
    "Grid",
    "Row",
    "SLOT_MINUTES",
    "SLOTS_PER_DAY",
    "SLOTS_PER_HOUR",
    "TimeLabel",
    "bucketize",
    "build_grid",
    "day_range",
    "quantize",
    "slot_bounds",
    "slot_span",
    "start_slot",
    "walk",
]
