"""
Modulation engine (stage 4).

Stretches, shrinks and delays the template windows and scores each window's
energy from the quality/debt/fatigue factors.

Peak delay is never inserted as a gap. It is folded into the low-energy window
immediately before each peak (Groggy before Morning Peak, Afternoon Dip before
Evening Peak), which keeps the schedule contiguous.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from .energy_math import clamp
from .factors import Factors
from .template import BASE_TEMPLATE, PlacedWindow, TemplateWindow, place_windows
from .types import SegmentCategory

logger = logging.getLogger(__name__)

# Modulation coefficients
PEAK_SHRINK_PER_FATIGUE = 0.3  # Peaks shrink to 70% at full fatigue
PEAK_DELAY_HOURS_PER_FATIGUE = 0.5  # Peaks start up to 30 min later
LOW_ENERGY_EXTEND_PER_DEBT = 0.5  # Groggy/dip stretch up to 150%
LOW_ENERGY_DEBT_PENALTY = 0.3  # Non-peak energy drops up to 30% with debt

BASE_ENERGY: dict[SegmentCategory, float] = {
    "groggy": 0.3,
    "peak": 0.9,
    "dip": 0.4,
    "wind_down": 0.3,
    "melatonin": 0.2,
}


@dataclass(frozen=True)
class ModulationKnobs:
    peak_shrink_ratio: float  # 0.7 - 1.0
    peak_delay_hours: float  # 0.0 - 0.5
    low_energy_extend_ratio: float  # 1.0 - 1.5


def compute_knobs(factors: Factors) -> ModulationKnobs:
    """Translate factors into duration multipliers and delay."""
    knobs = ModulationKnobs(
        peak_shrink_ratio=1 - PEAK_SHRINK_PER_FATIGUE * factors.fatigue,
        peak_delay_hours=PEAK_DELAY_HOURS_PER_FATIGUE * factors.fatigue,
        low_energy_extend_ratio=1 + LOW_ENERGY_EXTEND_PER_DEBT * factors.debt,
    )
    logger.debug(
        "Modulation knobs: shrink=%.3f delay=%.3fh extend=%.3f",
        knobs.peak_shrink_ratio,
        knobs.peak_delay_hours,
        knobs.low_energy_extend_ratio,
    )
    return knobs


def modulated_duration_hours(window: TemplateWindow, knobs: ModulationKnobs) -> float:
    """
    Duration of a template window after modulation.

    - groggy, dip: base * extend + peak delay (the window before each peak)
    - peak: base * shrink
    - wind_down: unchanged
    """
    base = window.base_duration_hours
    if window.category in ("groggy", "dip"):
        return base * knobs.low_energy_extend_ratio + knobs.peak_delay_hours
    elif window.category == "peak":
        return base * knobs.peak_shrink_ratio
    elif window.category == "wind_down":
        return base
    else:
        raise ValueError(f"Template has no modulation rule for {window.category!r}")


def modulate_windows(internal_wake: datetime, factors: Factors) -> list[PlacedWindow]:
    """Place the modulated template end-to-end from internal wake."""
    knobs = compute_knobs(factors)
    return place_windows(
        internal_wake,
        [(window, modulated_duration_hours(window, knobs)) for window in BASE_TEMPLATE],
    )


def score_energy(category: SegmentCategory, factors: Factors) -> float:
    """
    Energy score (0-1) for a window category.

    Every category scales with quality. Non-peak categories also take the debt
    penalty; peaks are exempt because debt already shortened them.
    """
    energy = BASE_ENERGY[category] * factors.quality
    if category != "peak":
        energy *= 1 - LOW_ENERGY_DEBT_PENALTY * factors.debt
    return clamp(energy, 0.0, 1.0)
