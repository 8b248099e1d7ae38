"""Tests for melatonin placement, capacity, day mode and invariant checks."""

from datetime import UTC, datetime, timedelta

import pytest

from energy_model.assembler import (
    assemble_schedule,
    calculate_overall_capacity,
    classify_day_mode,
    melatonin_window,
    validate_contiguity,
    validate_energy_range,
)
from energy_model.errors import ScheduleIntegrityError
from energy_model.factors import Factors
from energy_model.modulation import modulate_windows
from energy_model.normalizer import NormalizedInputs
from energy_model.template import PlacedWindow
from energy_model.types import EnergyConfig, EnergySegment

WAKE = datetime(2026, 1, 15, 12, 0, tzinfo=UTC)
FACTORS = Factors(quality=0.6, debt=0.2, fatigue=0.4)


def make_inputs() -> NormalizedInputs:
    return NormalizedInputs(
        wake=WAKE,
        internal_wake=WAKE,
        timezone_offset_minutes=-300,
        sleep_duration_hours=7.5,
        sleep_debt_hours=0.6,
        sleep_performance_percentage=70,
        sleep_consistency_percentage=80,
        recovery_score=50,
    )


def make_segment(label: str, start_iso: str, end_iso: str, energy: float = 0.5) -> EnergySegment:
    return EnergySegment(
        label=label,
        category="dip",
        start_iso=start_iso,
        end_iso=end_iso,
        start_display="",
        end_display="",
        energy=energy,
    )


class TestMelatoninWindow:
    def test_starts_at_wind_down_end(self):
        wind_down = PlacedWindow("Wind-Down", "wind_down", WAKE, WAKE + timedelta(hours=2))
        melatonin = melatonin_window(wind_down)
        assert melatonin.start == wind_down.end
        assert melatonin.category == "melatonin"
        assert melatonin.label == "Melatonin Window"

    def test_spans_eighty_percent_of_wind_down(self):
        wind_down = PlacedWindow("Wind-Down", "wind_down", WAKE, WAKE + timedelta(hours=2))
        assert melatonin_window(wind_down).duration_hours == pytest.approx(1.6)


class TestOverallCapacity:
    def test_weights(self):
        factors = Factors(quality=0.71, debt=0.0, fatigue=0.29)
        # 100 * (0.355 + 0.3 + 0.18)
        assert calculate_overall_capacity(factors, 90) == pytest.approx(83.5)

    def test_best_and_worst(self):
        assert calculate_overall_capacity(Factors(1.0, 0.0, 0.0), 100) == pytest.approx(100)
        assert calculate_overall_capacity(Factors(0.0, 1.0, 1.0), 0) == 0

    def test_clamped(self):
        assert calculate_overall_capacity(Factors(1.0, 0.0, 0.0), 400) == 100
        assert calculate_overall_capacity(Factors(0.0, 1.0, 1.0), -300) == 0


class TestClassifyDayMode:
    @pytest.mark.parametrize(
        "capacity,mode",
        [
            (100, "push"),
            (75, "push"),
            (74.999, "balanced"),
            (55, "balanced"),
            (54.999, "conserve"),
            (0, "conserve"),
        ],
    )
    def test_band_boundaries(self, capacity, mode):
        assert classify_day_mode(capacity) == mode


class TestValidateContiguity:
    def test_contiguous_passes(self):
        validate_contiguity(
            [
                make_segment("A", "2026-01-15T07:00:00.000-05:00", "2026-01-15T08:30:00.000-05:00"),
                make_segment("B", "2026-01-15T08:30:00.000-05:00", "2026-01-15T12:00:00.000-05:00"),
            ]
        )

    def test_sub_second_drift_tolerated(self):
        validate_contiguity(
            [
                make_segment("A", "2026-01-15T07:00:00.000-05:00", "2026-01-15T08:30:00.000-05:00"),
                make_segment("B", "2026-01-15T08:30:00.900-05:00", "2026-01-15T12:00:00.000-05:00"),
            ]
        )

    def test_same_instant_at_different_offsets(self):
        validate_contiguity(
            [
                make_segment("A", "2026-01-15T07:00:00.000-05:00", "2026-01-15T08:30:00.000-05:00"),
                make_segment("B", "2026-01-15T13:30:00.000+00:00", "2026-01-15T15:00:00.000+00:00"),
            ]
        )

    def test_gap_raises(self):
        with pytest.raises(ScheduleIntegrityError, match="Segments not contiguous: A.end"):
            validate_contiguity(
                [
                    make_segment(
                        "A", "2026-01-15T07:00:00.000-05:00", "2026-01-15T08:30:00.000-05:00"
                    ),
                    make_segment(
                        "B", "2026-01-15T08:30:02.000-05:00", "2026-01-15T12:00:00.000-05:00"
                    ),
                ]
            )

    def test_overlap_raises(self):
        with pytest.raises(ScheduleIntegrityError):
            validate_contiguity(
                [
                    make_segment(
                        "A", "2026-01-15T07:00:00.000-05:00", "2026-01-15T08:30:00.000-05:00"
                    ),
                    make_segment(
                        "B", "2026-01-15T07:00:00.000-05:00", "2026-01-15T12:00:00.000-05:00"
                    ),
                ]
            )


class TestValidateEnergyRange:
    def test_bounds_inclusive(self):
        validate_energy_range(
            [
                make_segment("A", "2026-01-15T07:00:00+00:00", "2026-01-15T08:00:00+00:00", 0.0),
                make_segment("B", "2026-01-15T08:00:00+00:00", "2026-01-15T09:00:00+00:00", 1.0),
            ]
        )

    @pytest.mark.parametrize("energy", [-0.01, 1.2])
    def test_out_of_range_raises(self, energy):
        with pytest.raises(ScheduleIntegrityError, match="Invalid energy score for A"):
            validate_energy_range(
                [make_segment("A", "2026-01-15T07:00:00+00:00", "2026-01-15T08:00:00+00:00", energy)]
            )


class TestAssembleSchedule:
    def test_six_segments_ending_with_melatonin(self):
        output = assemble_schedule(
            make_inputs(), FACTORS, modulate_windows(WAKE, FACTORS), EnergyConfig()
        )
        assert [s.category for s in output.segments] == [
            "groggy",
            "peak",
            "dip",
            "peak",
            "wind_down",
            "melatonin",
        ]

    def test_iso_uses_record_offset(self):
        output = assemble_schedule(
            make_inputs(), FACTORS, modulate_windows(WAKE, FACTORS), EnergyConfig()
        )
        assert output.wake_time_iso == "2026-01-15T07:00:00.000-05:00"
        assert output.segments[0].start_iso == "2026-01-15T07:00:00.000-05:00"
        assert output.wake_time_display == "Thursday, January 15th 7:00AM"

    def test_day_date_passed_through(self):
        output = assemble_schedule(
            make_inputs(),
            FACTORS,
            modulate_windows(WAKE, FACTORS),
            EnergyConfig(day_date="2026-01-15"),
        )
        assert output.day_date == "2026-01-15"

    def test_broken_windows_raise_integrity_error(self):
        """A gap introduced upstream is caught, never silently repaired."""
        windows = modulate_windows(WAKE, FACTORS)
        shifted = PlacedWindow(
            windows[2].label,
            windows[2].category,
            windows[2].start + timedelta(minutes=10),
            windows[2].end + timedelta(minutes=10),
        )
        windows[2] = shifted
        with pytest.raises(ScheduleIntegrityError, match="Morning Peak.end"):
            assemble_schedule(make_inputs(), FACTORS, windows, EnergyConfig())
