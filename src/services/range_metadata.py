"""Per-tank range metadata (full volume, deepest reading)."""

from typing import TypedDict

from services.calibration_store import CalibrationStore, EmptyTableError


class TankBounds(TypedDict):
    """Bounds of a tank's calibration table."""

    max_reading_mm: int
    max_volume_l: int


def bounds(store: CalibrationStore, tank_id: str) -> TankBounds:
    """
    Get the bounds of a tank's calibration table.

    The smallest reading (least empty space) holds the full-tank volume and
    the largest reading is the deepest reading the table covers.

    Raises:
        UnknownTankError: If the tank has no table
        EmptyTableError: If the table has no entries
    """
    table = store.table(tank_id)
    if not table:
        raise EmptyTableError(str(tank_id))

    entries = store.all_entries(tank_id)
    return TankBounds(
        max_reading_mm=entries[-1][0],
        max_volume_l=entries[0][1],
    )


def fill_percent(store: CalibrationStore, tank_id: str, volume_l: int | float) -> float:
    """Volume as a percentage of the full tank, clamped to 0-100."""
    max_volume = bounds(store, tank_id)["max_volume_l"]
    if max_volume <= 0:
        return 0.0
    percent = volume_l / max_volume * 100
    return round(min(max(percent, 0.0), 100.0), 1)
