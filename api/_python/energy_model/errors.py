"""
Exceptions raised by energy schedule generation.

Two failure classes exist:
- InvalidSleepRecordError: caller supplied unusable sleep timestamps (400).
- ScheduleIntegrityError: the generated schedule broke an internal invariant (500).
"""


class EnergyModelError(Exception):
    """Base class for energy model failures."""


class InvalidSleepRecordError(EnergyModelError, ValueError):
    """Sleep start/end could not be parsed. Messages start with "Invalid "."""


class ScheduleIntegrityError(EnergyModelError, RuntimeError):
    """Generated segments are not contiguous or an energy score is out of range."""
