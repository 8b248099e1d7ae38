"""
Assembly and validation (stage 5).

Appends the melatonin window, renders both timestamp forms, computes overall
capacity and day mode, and checks the schedule's structural invariants.

Melatonin policy: the window starts exactly when Wind-Down ends and lasts 80%
of Wind-Down. It never overlaps Wind-Down, so all six segments must be
contiguous.
"""

import logging

from .energy_math import (
    DISPLAY_TIMEZONE,
    add_hours,
    clamp,
    format_display_time,
    format_iso_with_offset,
)
from .errors import ScheduleIntegrityError
from .factors import Factors
from .modulation import score_energy
from .normalizer import NormalizedInputs
from .template import PlacedWindow
from .types import DayMode, EnergyConfig, EnergyModelOutput, EnergySegment

logger = logging.getLogger(__name__)

MELATONIN_LABEL = "Melatonin Window"
MELATONIN_WIND_DOWN_RATIO = 0.8

# Overall capacity weights (sum to 1)
CAPACITY_QUALITY_WEIGHT = 0.5
CAPACITY_DEBT_WEIGHT = 0.3
CAPACITY_CONSISTENCY_WEIGHT = 0.2

# Day mode thresholds (lower bound inclusive)
PUSH_MIN_CAPACITY = 75
BALANCED_MIN_CAPACITY = 55

CONTIGUITY_TOLERANCE_SECONDS = 1.0


def melatonin_window(wind_down: PlacedWindow) -> PlacedWindow:
    """Melatonin window immediately after Wind-Down."""
    return PlacedWindow(
        label=MELATONIN_LABEL,
        category="melatonin",
        start=wind_down.end,
        end=add_hours(wind_down.end, MELATONIN_WIND_DOWN_RATIO * wind_down.duration_hours),
    )


def calculate_overall_capacity(factors: Factors, sleep_consistency_percentage: float) -> float:
    """
    Overall capacity score (0-100).

    Weighted blend of quality, absence of debt, and sleep consistency.
    """
    return clamp(
        100
        * (
            CAPACITY_QUALITY_WEIGHT * factors.quality
            + CAPACITY_DEBT_WEIGHT * (1 - factors.debt)
            + CAPACITY_CONSISTENCY_WEIGHT * (sleep_consistency_percentage / 100)
        ),
        0.0,
        100.0,
    )


def classify_day_mode(capacity: float) -> DayMode:
    """
    Classify the day from overall capacity.

    - push: capacity >= 75
    - balanced: 55 <= capacity < 75
    - conserve: capacity < 55
    """
    if capacity >= PUSH_MIN_CAPACITY:
        return "push"
    elif capacity >= BALANCED_MIN_CAPACITY:
        return "balanced"
    else:
        return "conserve"


def render_segment(
    window: PlacedWindow,
    factors: Factors,
    offset_minutes: int,
    display_tz: str = DISPLAY_TIMEZONE,
) -> EnergySegment:
    """Render a placed window into an output segment with its energy score."""
    return EnergySegment(
        label=window.label,
        category=window.category,
        start_iso=format_iso_with_offset(window.start, offset_minutes),
        end_iso=format_iso_with_offset(window.end, offset_minutes),
        start_display=format_display_time(window.start, display_tz),
        end_display=format_display_time(window.end, display_tz),
        energy=score_energy(window.category, factors),
    )


def validate_contiguity(segments: list[EnergySegment]) -> None:
    """
    Every segment must end where the next one starts (within 1 second).

    Raises:
        ScheduleIntegrityError: on any gap or overlap
    """
    for current, following in zip(segments, segments[1:]):
        gap_seconds = (following.start_at - current.end_at).total_seconds()
        if abs(gap_seconds) > CONTIGUITY_TOLERANCE_SECONDS:
            message = (
                f"Segments not contiguous: {current.label}.end ({current.end_iso}) != "
                f"{following.label}.start ({following.start_iso}), gap: {gap_seconds:.3f}s"
            )
            logger.error(message)
            raise ScheduleIntegrityError(message)


def validate_energy_range(segments: list[EnergySegment]) -> None:
    """
    Every energy score must lie in [0, 1].

    Raises:
        ScheduleIntegrityError: on any out-of-range score
    """
    for segment in segments:
        if not 0.0 <= segment.energy <= 1.0:
            message = f"Invalid energy score for {segment.label}: {segment.energy} (must be 0-1)"
            logger.error(message)
            raise ScheduleIntegrityError(message)


def assemble_schedule(
    inputs: NormalizedInputs,
    factors: Factors,
    windows: list[PlacedWindow],
    config: EnergyConfig,
) -> EnergyModelOutput:
    """
    Build the final output from modulated windows.

    Args:
        inputs: Normalized sleep/recovery values
        factors: Quality/debt/fatigue factors
        windows: Modulated windows ending with Wind-Down
        config: Caller options (day_date is passed through)
    """
    all_windows = windows + [melatonin_window(windows[-1])]
    offset = inputs.timezone_offset_minutes
    segments = [render_segment(window, factors, offset) for window in all_windows]

    validate_contiguity(segments)
    validate_energy_range(segments)

    capacity = calculate_overall_capacity(factors, inputs.sleep_consistency_percentage)

    return EnergyModelOutput(
        wake_time_iso=format_iso_with_offset(inputs.wake, offset),
        wake_time_display=format_display_time(inputs.wake),
        sleep_duration_hours=inputs.sleep_duration_hours,
        sleep_debt_hours=inputs.sleep_debt_hours,
        sleep_performance_percentage=inputs.sleep_performance_percentage,
        recovery_score=inputs.recovery_score,
        day_mode=classify_day_mode(capacity),
        overall_capacity=capacity,
        segments=segments,
        day_date=config.day_date,
    )
