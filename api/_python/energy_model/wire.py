"""
Wire formats for energy schedules.

The camelCase output dict and the five category names are consumed by storage
and display code; keep field names stable.
"""

from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from .energy_math import parse_instant
from .types import SEGMENT_CATEGORIES, EnergyModelOutput, EnergySegment


def segment_to_dict(segment: EnergySegment) -> dict[str, Any]:
    """Segment in API response shape (display times in start/end)."""
    return {
        "label": segment.label,
        "type": segment.category,
        "start": segment.start_display,
        "end": segment.end_display,
        "start_iso": segment.start_iso,
        "end_iso": segment.end_iso,
        "energy": segment.energy,
    }


def to_wire_dict(output: EnergyModelOutput) -> dict[str, Any]:
    """Full schedule in API response shape."""
    result = {
        "wakeTime": output.wake_time_display,
        "wakeTime_iso": output.wake_time_iso,
        "sleepDurationHours": output.sleep_duration_hours,
        "sleepDebtHours": output.sleep_debt_hours,
        "sleepPerf": output.sleep_performance_percentage,
        "recoveryScore": output.recovery_score,
        "dayMode": output.day_mode,
        "overallCapacity": output.overall_capacity,
        "segments": [segment_to_dict(s) for s in output.segments],
    }
    if output.day_date is not None:
        result["dayDate"] = output.day_date
    return result


def to_utc_iso(value: str) -> str:
    """Normalize an ISO timestamp to UTC with a "Z" suffix and milliseconds."""
    instant = parse_instant(value)
    if instant is None:
        raise ValueError(f"Invalid ISO datetime: {value}")
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_event_rows(
    output: EnergyModelOutput, user_id: str, source: str = "whoop"
) -> list[dict[str, Any]]:
    """
    Map a schedule to one energy-event row per segment.

    Rows are unique on (user_id, start_at, category).

    Raises:
        ValueError: missing user_id or an unknown segment category
    """
    if not user_id:
        raise ValueError("user_id is required to store energy events")

    rows = []
    for segment in output.segments:
        if segment.category not in SEGMENT_CATEGORIES:
            raise ValueError(f"Unsupported energy segment type: {segment.category}")
        rows.append(
            {
                "user_id": user_id,
                "category": segment.category,
                "start_at": to_utc_iso(segment.start_iso),
                "end_at": to_utc_iso(segment.end_iso),
                "start_at_formatted": segment.start_display,
                "end_at_formatted": segment.end_display,
                "label": segment.label or segment.category,
                "source": source,
            }
        )
    return rows


def day_window(day_date: str) -> tuple[str, str]:
    """
    UTC [start, end) bounds for a "YYYY-MM-DD" day label.

    Raises:
        ValueError: day_date is not a calendar date
    """
    try:
        day = date.fromisoformat(day_date)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid dayDate: {day_date}") from e

    start = datetime.combine(day, time(0, 0), tzinfo=timezone.utc)
    end = start + timedelta(days=1)
    return (
        start.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        end.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
    )
