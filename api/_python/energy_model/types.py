"""
Data structures for energy schedule generation.

Inputs mirror the WHOOP sleep/recovery records after JSON parsing; outputs are
plain value objects that the wire layer turns into dicts.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from .energy_math import get_number

# =============================================================================
# Enumerations
# =============================================================================

SegmentCategory = Literal[
    "groggy",  # Sleep inertia after waking
    "peak",  # Morning and evening alertness peaks
    "dip",  # Post-lunch circadian trough
    "wind_down",  # Evening decline before sleep
    "melatonin",  # Melatonin onset window
]

DayMode = Literal["push", "balanced", "conserve"]

SEGMENT_CATEGORIES: tuple[SegmentCategory, ...] = (
    "groggy",
    "peak",
    "dip",
    "wind_down",
    "melatonin",
)


# =============================================================================
# Input Types
# =============================================================================


@dataclass(frozen=True)
class SleepScore:
    """Score block of a sleep record. Missing metrics are 0."""

    sleep_performance_percentage: float = 0.0  # 0-100
    sleep_consistency_percentage: float = 0.0  # 0-100
    need_from_sleep_debt_milli: float = 0.0


@dataclass(frozen=True)
class SleepRecord:
    """Single night of sleep."""

    start: Any  # ISO string or aware datetime
    end: Any  # Wake instant
    timezone_offset: Any = "+00:00"  # "+HH:MM" / "-HH:MM"
    score: SleepScore = field(default_factory=SleepScore)


@dataclass(frozen=True)
class RecoveryRecord:
    """Morning recovery record. Only the recovery score is consumed."""

    recovery_score: float = 0.0  # 0-100


@dataclass(frozen=True)
class EnergyConfig:
    """Per-call options."""

    chronotype_offset_hours: float = 0.0  # Positive = later internal wake
    day_date: str | None = None  # "YYYY-MM-DD", traceability only

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "EnergyConfig":
        """Build from a camelCase (or snake_case) options dict."""
        data = data or {}
        offset = data.get("chronotypeOffsetHours", data.get("chronotype_offset_hours"))
        day_date = data.get("dayDate", data.get("day_date"))
        return cls(
            chronotype_offset_hours=get_number(offset, 0.0),
            day_date=day_date if isinstance(day_date, str) else None,
        )


# =============================================================================
# Output Types
# =============================================================================


@dataclass(frozen=True)
class EnergySegment:
    """
    One energy window of the day.

    Each boundary is carried twice: an ISO-8601 string at the sleep record's
    UTC offset (storage) and a 12-hour display string (UI). Both describe the
    same instant.
    """

    label: str  # "Morning Peak"
    category: SegmentCategory
    start_iso: str
    end_iso: str
    start_display: str
    end_display: str
    energy: float  # 0-1

    @property
    def start_at(self) -> datetime:
        """Aware start instant."""
        return datetime.fromisoformat(self.start_iso)

    @property
    def end_at(self) -> datetime:
        """Aware end instant."""
        return datetime.fromisoformat(self.end_iso)

    @property
    def duration_hours(self) -> float:
        """Length of this window in hours."""
        return (self.end_at - self.start_at).total_seconds() / 3600


@dataclass(frozen=True)
class EnergyModelOutput:
    """Complete energy schedule for one day."""

    wake_time_iso: str
    wake_time_display: str
    sleep_duration_hours: float
    sleep_debt_hours: float
    sleep_performance_percentage: float
    recovery_score: float
    day_mode: DayMode
    overall_capacity: float  # 0-100
    segments: list[EnergySegment]
    day_date: str | None = None

    def segments_of(self, category: SegmentCategory) -> list[EnergySegment]:
        """All segments of one category, in schedule order."""
        return [s for s in self.segments if s.category == category]
