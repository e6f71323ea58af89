"""Conversion between dipstick readings (mm) and volumes (L)."""

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Union

from services.calibration_store import CalibrationStore
from services.range_metadata import bounds

logger = logging.getLogger(__name__)

READING_STEP_MM = 2


class Direction(str, Enum):
    """Conversion direction."""

    READING_TO_VOLUME = "reading_to_volume"
    VOLUME_TO_READING = "volume_to_reading"


class FailureKind(str, Enum):
    """Why a conversion did not produce a value."""

    INVALID_INPUT = "invalid_input"
    OUT_OF_RANGE = "out_of_range"
    NO_DATA = "no_data"


MESSAGES = {
    FailureKind.INVALID_INPUT: "Enter a whole number of 0 or more",
    FailureKind.OUT_OF_RANGE: (
        "Reading is outside the calibration table (max reading: {max_reading_mm} mm)"
    ),
    FailureKind.NO_DATA: "No calibration data for this tank",
}


@dataclass(frozen=True)
class ConversionRequest:
    tank_id: str
    direction: Direction
    value: int


@dataclass(frozen=True)
class ConversionSuccess:
    """Successful conversion."""

    display_value: int
    implied_volume: int
    unit: str
    exact: bool = True
    note: str | None = None
    rounded_reading: int | None = None
    matched_volume: int | None = None

    ok = True

    def to_dict(self) -> dict[str, Any]:
        return {"ok": True, **asdict(self)}


@dataclass(frozen=True)
class ConversionFailure:
    """Conversion that could not produce a value."""

    reason: FailureKind
    message: str

    ok = False

    def to_dict(self) -> dict[str, Any]:
        return {"ok": False, "reason": self.reason.value, "message": self.message}


ConversionResult = Union[ConversionSuccess, ConversionFailure]


def round_reading(reading_mm: int) -> int:
    """Snap a reading to the nearest even millimeter, halves rounding up."""
    return (reading_mm + READING_STEP_MM // 2) // READING_STEP_MM * READING_STEP_MM


def _is_whole_number(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _failure(reason: FailureKind, **fields: Any) -> ConversionFailure:
    return ConversionFailure(reason=reason, message=MESSAGES[reason].format(**fields))


class ConversionService:
    """Forward and inverse lookups against a calibration store."""

    def __init__(self, store: CalibrationStore) -> None:
        self._store = store

    def convert(self, request: ConversionRequest) -> ConversionResult:
        if request.direction == Direction.READING_TO_VOLUME:
            return self.reading_to_volume(request.tank_id, request.value)
        return self.volume_to_reading(request.tank_id, request.value)

    def reading_to_volume(self, tank_id: str, reading_mm: int) -> ConversionResult:
        """
        Convert a dipstick reading to a volume.

        Odd readings are rounded to the nearest even reading (3 -> 4) and the
        result carries a note naming both values.

        Args:
            tank_id: Tank identifier (e.g., "1", "41")
            reading_mm: Empty space from the top of the tank, in millimeters

        Returns:
            ConversionSuccess with the volume in liters, or ConversionFailure
        """
        if not _is_whole_number(reading_mm):
            return _failure(FailureKind.INVALID_INPUT)
        if not self._store.all_entries(tank_id):
            logger.warning("No calibration data for tank %s", tank_id)
            return _failure(FailureKind.NO_DATA)

        rounded = round_reading(reading_mm)
        volume = self._store.volume_at(tank_id, rounded)
        if volume is None:
            max_reading = bounds(self._store, tank_id)["max_reading_mm"]
            return _failure(FailureKind.OUT_OF_RANGE, max_reading_mm=max_reading)

        was_rounded = rounded != reading_mm
        return ConversionSuccess(
            display_value=volume,
            implied_volume=volume,
            unit="L",
            exact=not was_rounded,
            note=f"Rounded {reading_mm}mm → {rounded}mm" if was_rounded else None,
            rounded_reading=rounded,
            matched_volume=volume,
        )

    def volume_to_reading(self, tank_id: str, target_volume_l: int) -> ConversionResult:
        """
        Convert a volume to a dipstick reading.

        An exact volume match returns the smallest reading holding it.
        Otherwise the reading whose volume is nearest wins; on a tie the
        smaller reading is kept.
        """
        if not _is_whole_number(target_volume_l):
            return _failure(FailureKind.INVALID_INPUT)

        entries = self._store.all_entries(tank_id)
        if not entries:
            logger.warning("No calibration data for tank %s", tank_id)
            return _failure(FailureKind.NO_DATA)

        for reading, volume in entries:
            if volume == target_volume_l:
                return ConversionSuccess(
                    display_value=reading,
                    implied_volume=target_volume_l,
                    unit="mm",
                    exact=True,
                    matched_volume=volume,
                )

        best_reading, best_volume = entries[0]
        best_diff = abs(best_volume - target_volume_l)
        for reading, volume in entries[1:]:
            diff = abs(volume - target_volume_l)
            if diff < best_diff:
                best_reading, best_volume, best_diff = reading, volume, diff

        return ConversionSuccess(
            display_value=best_reading,
            implied_volume=target_volume_l,
            unit="mm",
            exact=False,
            note=f"No exact match; nearest volume is {best_volume} L",
            matched_volume=best_volume,
        )
