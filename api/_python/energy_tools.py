"""
Agent tool implementations for energy-aware planning.

Provides three tools:
1. get_energy_schedule - Energy windows for a night of WHOOP data, with current/next segment
2. recommend_task_timing - Which energy windows suit a task of a given priority/type
3. recommend_windows - Priority/type -> window categories (no schedule needed)
"""

from datetime import UTC, datetime
from typing import Any

from energy_model.energy_math import parse_instant
from energy_model.errors import InvalidSleepRecordError
from energy_model.model import build_energy_schedule_from_whoop
from energy_model.types import EnergyModelOutput, EnergySegment, SegmentCategory

HIGH_PRIORITIES = ("high", "very high")
LOW_PRIORITIES = ("low", "very low")
DEMANDING_TASK_TYPES = ("development", "design", "discovery")
COMMUNICATION_TASK_TYPES = ("communication", "meeting", "email")

TOOL_NAMES = ("get_energy_schedule", "recommend_task_timing", "recommend_windows")


def recommend_windows(priority: str, task_type: str | None = None) -> dict[str, Any]:
    """
    Map task priority and type to recommended and avoided window categories.

    Rules, first match wins:
    - High priority or demanding type -> peak
    - Medium -> peak or dip
    - Low -> dip, groggy, wind-down
    - Communication type -> dip
    - Otherwise -> peak or dip
    """
    priority_lower = (priority or "").lower()
    type_lower = (task_type or "").lower()

    if priority_lower in HIGH_PRIORITIES or any(t in type_lower for t in DEMANDING_TASK_TYPES):
        return {
            "recommended": ["peak"],
            "avoid": ["groggy", "melatonin", "wind_down"],
            "reason": (
                "High-priority or cognitively demanding tasks perform best during peak "
                "energy windows when focus is at its highest."
            ),
        }

    if priority_lower == "medium":
        return {
            "recommended": ["peak", "dip"],
            "avoid": ["melatonin", "wind_down"],
            "reason": (
                "Medium-priority tasks fit peak or dip windows. Save peak windows for "
                "high-priority items if needed."
            ),
        }

    if priority_lower in LOW_PRIORITIES:
        return {
            "recommended": ["dip", "groggy", "wind_down"],
            "avoid": ["melatonin"],
            "reason": (
                "Low-priority or routine tasks suit lower energy windows, preserving "
                "peak energy for demanding work."
            ),
        }

    if any(t in type_lower for t in COMMUNICATION_TASK_TYPES):
        return {
            "recommended": ["dip"],
            "avoid": ["melatonin", "groggy"],
            "reason": (
                "Emails and meetings work well during the afternoon dip when deep focus "
                "is naturally lower."
            ),
        }

    return {
        "recommended": ["peak", "dip"],
        "avoid": ["melatonin"],
        "reason": (
            "Save peak windows for demanding work and use dip windows for lighter tasks."
        ),
    }


def find_current_and_next(
    output: EnergyModelOutput, now: datetime
) -> tuple[EnergySegment | None, EnergySegment | None]:
    """
    Locate the segment containing now (start inclusive) and the next one to start.
    """
    current = None
    upcoming = None
    for segment in output.segments:
        if current is None and segment.start_at <= now < segment.end_at:
            current = segment
        elif upcoming is None and segment.start_at > now:
            upcoming = segment
    return current, upcoming


def _segment_summary(segment: EnergySegment | None) -> dict[str, Any] | None:
    if segment is None:
        return None
    return {
        "category": segment.category,
        "label": segment.label,
        "startTime": segment.start_display,
        "endTime": segment.end_display,
        "startTimeIso": segment.start_iso,
        "endTimeIso": segment.end_iso,
        "energy": segment.energy,
    }


def _resolve_now(params: dict[str, Any]) -> datetime:
    now = parse_instant(params.get("now"))
    return now if now is not None else datetime.now(UTC)


def _build_schedule(params: dict[str, Any]) -> EnergyModelOutput:
    return build_energy_schedule_from_whoop(
        params["sleep"],
        params.get("recovery") or {},
        {
            "chronotypeOffsetHours": params.get("chronotypeOffsetHours", 0.5),
            "dayDate": params.get("dayDate"),
        },
    )


def get_energy_schedule(params: dict[str, Any]) -> dict[str, Any]:
    """
    Build today's energy schedule and report the current and next segment.

    Takes {"sleep", "recovery", "chronotypeOffsetHours"?, "dayDate"?, "now"?}.
    """
    if not params.get("sleep"):
        return {
            "status": "not_found",
            "message": "No sleep data supplied. WHOOP data may not have been synced yet.",
            "date": params.get("dayDate"),
        }

    try:
        output = _build_schedule(params)
    except InvalidSleepRecordError as e:
        return {"status": "error", "error": str(e)}

    current, upcoming = find_current_and_next(output, _resolve_now(params))
    return {
        "status": "success",
        "date": output.day_date or output.wake_time_iso[:10],
        "dayMode": output.day_mode,
        "overallCapacity": output.overall_capacity,
        "segments": [_segment_summary(s) for s in output.segments],
        "currentSegment": _segment_summary(current),
        "nextSegment": _segment_summary(upcoming),
    }


def recommend_task_timing(params: dict[str, Any]) -> dict[str, Any]:
    """
    Recommend energy windows for a task, with specific times when sleep data is given.

    Takes {"taskPriority", "taskType"?, "estimatedDuration"?, "sleep"?, "recovery"?, ...}.
    """
    task_priority = params["taskPriority"]
    task_type = params.get("taskType")
    recommendations = recommend_windows(task_priority, task_type)

    result: dict[str, Any] = {
        "taskPriority": task_priority,
        "taskType": task_type or None,
        "estimatedDuration": params.get("estimatedDuration") or None,
        **recommendations,
    }

    if not params.get("sleep"):
        return {
            "status": "partial",
            "message": "No energy schedule available, but here are general recommendations.",
            **result,
            "specificWindows": None,
        }

    try:
        output = _build_schedule(params)
    except InvalidSleepRecordError as e:
        return {"status": "error", "error": str(e)}

    recommended: list[SegmentCategory] = recommendations["recommended"]
    current, _ = find_current_and_next(output, _resolve_now(params))

    return {
        "status": "success",
        **result,
        "specificWindows": [
            _segment_summary(s) for s in output.segments if s.category in recommended
        ],
        "currentSegment": (
            {
                "category": current.category,
                "label": current.label,
                "isRecommended": current.category in recommended,
            }
            if current is not None
            else None
        ),
    }


def invoke_tool(tool_name: str, arguments: dict[str, Any]) -> dict[str, Any]:
    """Router function for CLI/subprocess invocation."""
    if tool_name == "get_energy_schedule":
        return get_energy_schedule(arguments)
    elif tool_name == "recommend_task_timing":
        return recommend_task_timing(arguments)
    elif tool_name == "recommend_windows":
        return recommend_windows(arguments["taskPriority"], arguments.get("taskType"))
    else:
        raise ValueError(f"Unknown tool: {tool_name}")
