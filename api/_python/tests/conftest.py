"""
Pytest fixtures for energy schedule tests.
"""

import sys
from pathlib import Path

import pytest

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))
sys.path.insert(0, str(Path(__file__).parent))

from energy_model.model import EnergyModel
from helpers import make_recovery, make_sleep


@pytest.fixture
def model():
    """EnergyModel instance."""
    return EnergyModel()


@pytest.fixture
def example_sleep():
    """8h night ending 10:25:44Z (05:25 local at -05:00), green sleep."""
    return make_sleep(
        start="2022-04-24T02:25:44.774Z",
        end="2022-04-24T10:25:44.774Z",
        timezone_offset="-05:00",
        performance=98,
        consistency=90,
        debt_milli=352230,
    )


@pytest.fixture
def example_recovery():
    """Yellow recovery (44%)."""
    return make_recovery(44)


@pytest.fixture
def example_config():
    return {"chronotypeOffsetHours": 0.5, "dayDate": "2022-04-24"}


@pytest.fixture
def bare_sleep():
    """Sleep with valid timestamps and no score block at all."""
    return {
        "start": "2026-01-15T04:00:00.000Z",
        "end": "2026-01-15T12:00:00.000Z",
    }

