"""Tests for formatting helpers."""

import pytest

from repwise.models.exercises import ExerciseUnit
from repwise.models.workout import WorkoutSetEntry
from repwise.utils.formatting import (
    format_clock,
    format_duration,
    format_entry,
    format_number,
)


class TestFormatNumber:
    """Tests for format_number."""

    @pytest.mark.parametrize(
        "value, expected",
        [(100, "100"), (102.5, "102.5"), (2.25, "2.25"), (None, ""), (0, "")],
    )
    def test_values(self, value, expected):
        """Test number formatting."""
        assert format_number(value) == expected

    def test_suffix(self):
        """Test numbers with a unit suffix."""
        assert format_number(5.0, "km") == "5 km"


class TestFormatDuration:
    """Tests for duration and clock formatting."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [(45, "45s"), (120, "2m"), (125, "2m 05s"), (0, ""), (None, "")],
    )
    def test_duration(self, seconds, expected):
        """Test duration formatting."""
        assert format_duration(seconds) == expected

    @pytest.mark.parametrize(
        "seconds, expected", [(90, "1:30"), (5, "0:05"), (0, "0:00"), (None, "0:00")]
    )
    def test_clock(self, seconds, expected):
        """Test clock formatting."""
        assert format_clock(seconds) == expected


class TestFormatEntry:
    """Tests for format_entry."""

    def test_weight_reps(self):
        """Test weight and reps entries."""
        entry = WorkoutSetEntry("e", ExerciseUnit.WEIGHT_REPS, reps=5, weight=100)
        assert format_entry(entry) == "100 kg x 5 reps"
        assert format_entry(entry, weight_unit="lb") == "100 lb x 5 reps"

    def test_weight_reps_without_weight(self):
        """Test reps without a weight."""
        entry = WorkoutSetEntry("e", ExerciseUnit.WEIGHT_REPS, reps=12)
        assert format_entry(entry) == "12 reps"

    def test_distance_time(self):
        """Test distance and time entries."""
        entry = WorkoutSetEntry(
            "e", ExerciseUnit.DISTANCE_TIME, distance=5, duration_seconds=1500
        )
        assert format_entry(entry, distance_unit="mi") == "5 mi in 25m"

    def test_weight_time(self):
        """Test weight and time entries."""
        entry = WorkoutSetEntry("e", ExerciseUnit.WEIGHT_TIME, weight=32, duration_seconds=60)
        assert format_entry(entry) == "32 kg for 1m"

    def test_half_reps(self):
        """Test half reps are shown."""
        entry = WorkoutSetEntry("e", ExerciseUnit.REPS, reps=12, half_reps=1)
        assert format_entry(entry) == "12 reps - 1 half rep"

    def test_empty(self):
        """Test an entry without metrics."""
        assert format_entry(WorkoutSetEntry("e", ExerciseUnit.TIME)) == "-"
