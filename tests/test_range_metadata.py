"""Tests for tank range metadata."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from services.calibration_store import (
    CalibrationError, CalibrationStore, EmptyTableError, UnknownTankError,
)
from services.range_metadata import bounds, fill_percent


class TestBounds:
    """Test full-tank volume and maximum reading."""

    def test_bounds(self, store):
        assert bounds(store, "1") == {"max_reading_mm": 14, "max_volume_l": 5000}

    def test_bounds_empty_at_max_reading(self, store):
        assert bounds(store, "80") == {"max_reading_mm": 10, "max_volume_l": 1200}

    def test_max_volume_comes_from_smallest_reading(self):
        """The smallest reading is the full tank even if not the largest volume."""
        store = CalibrationStore({"5": {4: 100, 2: 900, 6: 50}})
        assert bounds(store, "5") == {"max_reading_mm": 6, "max_volume_l": 900}

    def test_unknown_tank(self, store):
        with pytest.raises(UnknownTankError):
            bounds(store, "999")

    def test_empty_table(self, store):
        with pytest.raises(EmptyTableError):
            bounds(store, "90")

    def test_errors_are_value_errors(self, store):
        with pytest.raises(CalibrationError):
            bounds(store, "90")
        with pytest.raises(ValueError):
            bounds(store, "999")


class TestFillPercent:
    """Test gauge percentage."""

    def test_half_full(self, store):
        assert fill_percent(store, "1", 2500) == 50.0

    def test_rounded_to_one_decimal(self, store):
        assert fill_percent(store, "80", 200) == 16.7

    def test_clamped(self, store):
        assert fill_percent(store, "1", 9000) == 100.0
        assert fill_percent(store, "1", -10) == 0.0

    def test_zero_capacity(self):
        store = CalibrationStore({"5": {0: 0, 2: 0}})
        assert fill_percent(store, "5", 10) == 0.0
