"""
Input normalization (stage 1).

Turns raw sleep/recovery records into absolute instants and hour-denominated
values. Unparseable or reversed sleep timestamps are the only hard failure; every other
missing metric degrades to 0.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .energy_math import (
    MILLIS_PER_HOUR,
    add_hours,
    clamp,
    get_number,
    hours_between,
    parse_instant,
    parse_timezone_offset_minutes,
)
from .errors import InvalidSleepRecordError
from .types import EnergyConfig, RecoveryRecord, SleepRecord, SleepScore

# Chronotype shifts beyond half a day are clamped
MAX_CHRONOTYPE_OFFSET_HOURS = 12.0


@dataclass(frozen=True)
class NormalizedInputs:
    """Canonical values every later stage reads from."""

    wake: datetime  # Actual wake instant (UTC)
    internal_wake: datetime  # Wake shifted by chronotype offset; template anchor
    timezone_offset_minutes: int
    sleep_duration_hours: float
    sleep_debt_hours: float
    sleep_performance_percentage: float
    sleep_consistency_percentage: float
    recovery_score: float


def sleep_record_from_dict(data: Any) -> SleepRecord:
    """
    Build a SleepRecord from a WHOOP v2 sleep payload.

    Debt is read from score.sleep_needed.need_from_sleep_debt_milli, falling
    back to a flat score.need_from_sleep_debt_milli.
    """
    if not isinstance(data, dict):
        raise InvalidSleepRecordError("Invalid sleep record (expected an object)")

    score = data.get("score")
    if not isinstance(score, dict):
        score = {}
    sleep_needed = score.get("sleep_needed")
    if not isinstance(sleep_needed, dict):
        sleep_needed = {}
    debt_milli = sleep_needed.get(
        "need_from_sleep_debt_milli", score.get("need_from_sleep_debt_milli")
    )

    return SleepRecord(
        start=data.get("start"),
        end=data.get("end"),
        timezone_offset=data.get("timezone_offset", "+00:00"),
        score=SleepScore(
            sleep_performance_percentage=get_number(score.get("sleep_performance_percentage")),
            sleep_consistency_percentage=get_number(score.get("sleep_consistency_percentage")),
            need_from_sleep_debt_milli=get_number(debt_milli),
        ),
    )


def recovery_record_from_dict(data: Any) -> RecoveryRecord:
    """Build a RecoveryRecord from a WHOOP v2 recovery payload."""
    score = data.get("score") if isinstance(data, dict) else None
    if not isinstance(score, dict):
        return RecoveryRecord()
    return RecoveryRecord(recovery_score=get_number(score.get("recovery_score")))


def normalize_inputs(
    sleep: SleepRecord, recovery: RecoveryRecord, config: EnergyConfig
) -> NormalizedInputs:
    """
    Resolve wake instants and durations.

    Raises:
        InvalidSleepRecordError: sleep.start or sleep.end is not a valid instant,
            or sleep.end is before sleep.start
    """
    sleep_start = parse_instant(sleep.start)
    sleep_end = parse_instant(sleep.end)
    if sleep_start is None or sleep_end is None:
        raise InvalidSleepRecordError(
            "Invalid sleep.start or sleep.end (expected ISO datetime)"
        )
    if sleep_end < sleep_start:
        raise InvalidSleepRecordError("Invalid sleep.end (before sleep.start)")

    wake = sleep_end
    chronotype_offset = clamp(
        get_number(config.chronotype_offset_hours),
        -MAX_CHRONOTYPE_OFFSET_HOURS,
        MAX_CHRONOTYPE_OFFSET_HOURS,
    )
    internal_wake = add_hours(wake, chronotype_offset)

    return NormalizedInputs(
        wake=wake,
        internal_wake=internal_wake,
        timezone_offset_minutes=parse_timezone_offset_minutes(sleep.timezone_offset),
        sleep_duration_hours=hours_between(sleep_start, sleep_end),
        sleep_debt_hours=get_number(sleep.score.need_from_sleep_debt_milli) / MILLIS_PER_HOUR,
        sleep_performance_percentage=get_number(sleep.score.sleep_performance_percentage),
        sleep_consistency_percentage=get_number(sleep.score.sleep_consistency_percentage),
        recovery_score=get_number(recovery.recovery_score),
    )
