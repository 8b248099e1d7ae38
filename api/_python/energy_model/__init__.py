"""
Energy Window Schedule Generation

Derives a same-day schedule of energy windows (groggy, peak, dip, wind-down,
melatonin) from one night of WHOOP sleep and recovery data.

Main entry point: EnergyModel / build_energy_schedule_from_whoop
"""

from .errors import EnergyModelError, InvalidSleepRecordError, ScheduleIntegrityError
from .model import EnergyModel, build_energy_schedule_from_whoop
from .normalizer import recovery_record_from_dict, sleep_record_from_dict
from .types import (
    DayMode,
    EnergyConfig,
    EnergyModelOutput,
    EnergySegment,
    RecoveryRecord,
    SegmentCategory,
    SleepRecord,
    SleepScore,
)
from .wire import day_window, to_event_rows, to_wire_dict

__all__ = [
    # Types
    "SleepScore",
    "SleepRecord",
    "RecoveryRecord",
    "EnergyConfig",
    "EnergySegment",
    "EnergyModelOutput",
    "SegmentCategory",
    "DayMode",
    # Errors
    "EnergyModelError",
    "InvalidSleepRecordError",
    "ScheduleIntegrityError",
    # Model
    "EnergyModel",
    "build_energy_schedule_from_whoop",
    "sleep_record_from_dict",
    "recovery_record_from_dict",
    # Wire
    "to_wire_dict",
    "to_event_rows",
    "day_window",
]
