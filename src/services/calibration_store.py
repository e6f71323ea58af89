"""Calibration table storage for tank dipstick (ukujaku) lookups."""

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

logger = logging.getLogger(__name__)


class CalibrationError(ValueError):
    """Base error for calibration data problems."""


class UnknownTankError(CalibrationError):
    """Raised when a tank id has no calibration table."""

    def __init__(self, tank_id: str):
        super().__init__(f"Unknown tank: {tank_id}")
        self.tank_id = tank_id


class EmptyTableError(CalibrationError):
    """Raised when a tank's calibration table has no entries."""

    def __init__(self, tank_id: str):
        super().__init__(f"Calibration table for tank {tank_id} is empty")
        self.tank_id = tank_id


def tank_sort_key(tank_id: str) -> tuple[int, int | str]:
    """Order numeric tank ids by value, anything else after them by text."""
    text = str(tank_id)
    if text.isdecimal():
        return (0, int(text))
    return (1, text)


class CalibrationStore:
    """Read-only per-tank mapping of reading (mm) to volume (L)."""

    def __init__(
        self,
        tables: Mapping[Any, Mapping[Any, Any]],
        metadata: Mapping[str, Any] | None = None,
    ) -> None:
        self._metadata = MappingProxyType(dict(metadata or {}))
        self._tables: dict[str, Mapping[int, int]] = {}
        self._entries: dict[str, tuple[tuple[int, int], ...]] = {}

        for tank_id, table in tables.items():
            key = str(tank_id)
            pairs = sorted((int(mm), int(liters)) for mm, liters in table.items())
            self._tables[key] = MappingProxyType(dict(pairs))
            self._entries[key] = tuple(pairs)

        self._tank_ids = tuple(sorted(self._tables, key=tank_sort_key))
        logger.debug("Loaded calibration tables for %d tanks", len(self._tank_ids))

    @classmethod
    def from_json(cls, path: Path | str) -> "CalibrationStore":
        """
        Load calibration tables from a JSON file.

        The file is either ``{"metadata": {...}, "tanks": {...}}`` or the bare
        ``{"<tank_id>": {"<mm>": <liters>}}`` mapping.
        """
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if "tanks" in data:
            return cls(data["tanks"], metadata=data.get("metadata"))
        return cls(data)

    @property
    def tank_ids(self) -> tuple[str, ...]:
        """Known tank ids, ascending by numeric value."""
        return self._tank_ids

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._metadata

    def has_tank(self, tank_id: str) -> bool:
        return str(tank_id) in self._tables

    def table(self, tank_id: str) -> Mapping[int, int]:
        """Get the read-only calibration table for a tank."""
        try:
            return self._tables[str(tank_id)]
        except KeyError:
            raise UnknownTankError(str(tank_id)) from None

    def volume_at(self, tank_id: str, reading_mm: int) -> int | None:
        """
        Look up the stored volume for an exact reading.

        Returns None when the tank is unknown or the reading is not a key.
        No interpolation is done.
        """
        table = self._tables.get(str(tank_id))
        if table is None:
            return None
        return table.get(reading_mm)

    def all_entries(self, tank_id: str) -> tuple[tuple[int, int], ...]:
        """Get (reading_mm, volume_l) pairs ascending by reading."""
        return self._entries.get(str(tank_id), ())
