"""
Energy schedule generation from one night of WHOOP data.

Pipeline:
1. Normalize sleep/recovery records into instants and hours (normalizer)
2. Reduce metrics to quality/debt/fatigue factors (factors)
3. Lay out the base circadian template at internal wake (template)
4. Modulate window durations and energy scores (modulation)
5. Append melatonin, format, classify, and validate (assembler)

Each call is independent and pure: the output depends only on the arguments.
"""

import logging
from typing import Any

from .assembler import assemble_schedule
from .factors import calculate_factors
from .modulation import modulate_windows
from .normalizer import normalize_inputs, recovery_record_from_dict, sleep_record_from_dict
from .types import EnergyConfig, EnergyModelOutput, RecoveryRecord, SleepRecord

logger = logging.getLogger(__name__)


class EnergyModel:
    """
    Builds a same-day schedule of energy windows.

    Output segments, in order:
    - Groggy, Morning Peak, Afternoon Dip, Evening Peak, Wind-Down, Melatonin Window

    Guarantees on every returned schedule:
    - Consecutive segments share a boundary (within 1 second)
    - Every energy score is in [0, 1] and overall capacity is in [0, 100]
    """

    def generate_schedule(
        self,
        sleep: SleepRecord,
        recovery: RecoveryRecord,
        config: EnergyConfig | None = None,
    ) -> EnergyModelOutput:
        """
        Generate the energy schedule for the day following a sleep.

        Args:
            sleep: Sleep record; start and end must be valid instants
            recovery: Recovery record
            config: Chronotype offset and day label (defaults to no offset)

        Returns:
            EnergyModelOutput with six contiguous segments

        Raises:
            InvalidSleepRecordError: sleep.start / sleep.end unparseable
            ScheduleIntegrityError: generated schedule broke an invariant
        """
        if config is None:
            config = EnergyConfig()

        # 1. Canonical inputs
        inputs = normalize_inputs(sleep, recovery, config)

        # 2. Bounded scalars
        factors = calculate_factors(inputs)

        # 3-4. Template placed at internal wake and modulated
        windows = modulate_windows(inputs.internal_wake, factors)

        # 5. Melatonin, formatting, capacity, validation
        output = assemble_schedule(inputs, factors, windows, config)

        logger.info(
            "Built energy schedule for %s: mode=%s capacity=%.1f",
            config.day_date or output.wake_time_iso[:10],
            output.day_mode,
            output.overall_capacity,
        )
        return output


def build_energy_schedule_from_whoop(
    sleep: dict[str, Any],
    recovery: dict[str, Any],
    config: dict[str, Any] | None = None,
) -> EnergyModelOutput:
    """
    Convenience wrapper taking parsed WHOOP JSON payloads.

    Args:
        sleep: WHOOP v2 sleep record dict
        recovery: WHOOP v2 recovery record dict
        config: Optional {"chronotypeOffsetHours": float, "dayDate": str}
    """
    return EnergyModel().generate_schedule(
        sleep_record_from_dict(sleep),
        recovery_record_from_dict(recovery),
        EnergyConfig.from_dict(config),
    )
