"""
Base circadian template (stage 3).

Five canonical windows at fixed hour offsets from internal wake, before any
modulation:

    Groggy         0.0 - 1.5 h
    Morning Peak   1.5 - 5.0 h
    Afternoon Dip  5.0 - 8.0 h
    Evening Peak   8.0 - 11.0 h
    Wind-Down     11.0 - 13.0 h

The shape (alert soon after waking, midday trough, evening second wind,
decline before sleep) is a fixed prior; it does not depend on the input.
"""

from dataclasses import dataclass
from datetime import datetime

from .energy_math import add_hours, hours_between
from .types import SegmentCategory


@dataclass(frozen=True)
class TemplateWindow:
    """A window of the unmodulated template, in hours after internal wake."""

    label: str
    category: SegmentCategory
    start_offset_hours: float
    end_offset_hours: float

    @property
    def base_duration_hours(self) -> float:
        return self.end_offset_hours - self.start_offset_hours


@dataclass(frozen=True)
class PlacedWindow:
    """A window pinned to absolute UTC instants."""

    label: str
    category: SegmentCategory
    start: datetime
    end: datetime

    @property
    def duration_hours(self) -> float:
        return hours_between(self.start, self.end)


GROGGY = TemplateWindow("Groggy", "groggy", 0.0, 1.5)
MORNING_PEAK = TemplateWindow("Morning Peak", "peak", 1.5, 5.0)
AFTERNOON_DIP = TemplateWindow("Afternoon Dip", "dip", 5.0, 8.0)
EVENING_PEAK = TemplateWindow("Evening Peak", "peak", 8.0, 11.0)
WIND_DOWN = TemplateWindow("Wind-Down", "wind_down", 11.0, 13.0)

BASE_TEMPLATE: tuple[TemplateWindow, ...] = (
    GROGGY,
    MORNING_PEAK,
    AFTERNOON_DIP,
    EVENING_PEAK,
    WIND_DOWN,
)


def place_windows(
    anchor: datetime, windows: list[tuple[TemplateWindow, float]]
) -> list[PlacedWindow]:
    """
    Lay windows end-to-end starting at anchor.

    Each window starts at the previous window's end, so the result is
    contiguous by construction.

    Args:
        anchor: Start of the first window
        windows: (template window, duration in hours) pairs in schedule order
    """
    placed = []
    cursor = anchor
    for window, duration_hours in windows:
        end = add_hours(cursor, duration_hours)
        placed.append(PlacedWindow(window.label, window.category, cursor, end))
        cursor = end
    return placed


def build_base_template(internal_wake: datetime) -> list[PlacedWindow]:
    """Place the unmodulated template at internal wake."""
    return place_windows(
        internal_wake, [(window, window.base_duration_hours) for window in BASE_TEMPLATE]
    )
