"""
Test helper functions for energy schedule validation.

These functions can be imported by test modules for schedule analysis.
"""

import sys
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from energy_model.types import EnergyModelOutput, EnergySegment


def make_sleep(
    start: str = "2026-01-15T04:00:00.000Z",
    end: str = "2026-01-15T12:00:00.000Z",
    timezone_offset: str = "-05:00",
    performance: float | None = 90,
    consistency: float | None = 80,
    debt_milli: float | None = 0,
) -> dict:
    """
    Build a WHOOP v2 sleep payload.

    Passing None for a metric leaves it out of the score block.
    """
    score = {}
    if performance is not None:
        score["sleep_performance_percentage"] = performance
    if consistency is not None:
        score["sleep_consistency_percentage"] = consistency
    if debt_milli is not None:
        score["sleep_needed"] = {"need_from_sleep_debt_milli": debt_milli}
    return {
        "start": start,
        "end": end,
        "timezone_offset": timezone_offset,
        "score": score,
    }


def make_recovery(recovery_score: float | None) -> dict:
    """Build a WHOOP v2 recovery payload."""
    if recovery_score is None:
        return {"score": {}}
    return {"score": {"recovery_score": recovery_score}}


def gap_seconds(current: EnergySegment, following: EnergySegment) -> float:
    """Seconds between one segment's end and the next one's start."""
    return (following.start_at - current.end_at).total_seconds()


def durations_by_label(output: EnergyModelOutput) -> dict[str, float]:
    """Segment durations in hours keyed by label."""
    return {s.label: s.duration_hours for s in output.segments}


def peak_durations(output: EnergyModelOutput) -> list[float]:
    """Durations of Morning Peak and Evening Peak, in order."""
    return [s.duration_hours for s in output.segments if s.category == "peak"]
