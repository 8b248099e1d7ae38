"""
Factor calculation (stage 2).

Reduces the normalized metrics to three dimensionless scalars in [0, 1].
All modulation downstream is a function of these alone.
"""

import logging
from dataclasses import dataclass

from .energy_math import clamp
from .normalizer import NormalizedInputs

logger = logging.getLogger(__name__)

# Debt at which the debt factor saturates
DEBT_CEILING_HOURS = 3.0


@dataclass(frozen=True)
class Factors:
    quality: float  # Blend of sleep performance and recovery
    debt: float  # Sleep debt normalized to the ceiling
    fatigue: float  # 1 - quality


def calculate_factors(inputs: NormalizedInputs) -> Factors:
    """
    Derive quality, debt and fatigue factors.

    quality = 0.5 * perf + 0.5 * recovery (both as fractions), clamped
    debt    = debt_hours / 3, clamped
    fatigue = 1 - quality
    """
    quality = clamp(
        0.5 * (inputs.sleep_performance_percentage / 100)
        + 0.5 * (inputs.recovery_score / 100),
        0.0,
        1.0,
    )
    debt = clamp(inputs.sleep_debt_hours / DEBT_CEILING_HOURS, 0.0, 1.0)
    factors = Factors(quality=quality, debt=debt, fatigue=1.0 - quality)

    logger.debug(
        "Energy factors: quality=%.3f debt=%.3f fatigue=%.3f",
        factors.quality,
        factors.debt,
        factors.fatigue,
    )
    return factors
