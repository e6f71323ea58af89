"""Tank catalog: known tank ids and grouped selector options."""

from collections.abc import Iterator
from typing import NamedTuple

from services.calibration_store import CalibrationStore

RANGE_SEPARATOR = " ～ "


class DisplayOption(NamedTuple):
    """One selector entry, covering a run of tanks sharing a table."""

    value: str
    label: str
    members: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"value": self.value, "label": self.label, "members": list(self.members)}


class TankCatalog:
    """Lists tanks and collapses adjacent tanks with identical tables."""

    def __init__(self, store: CalibrationStore) -> None:
        self._store = store
        self._options: list[DisplayOption] | None = None

    def list_tank_ids(self) -> list[str]:
        return list(self._store.tank_ids)

    def iter_display_options(self) -> Iterator[DisplayOption]:
        """
        Yield selector options in tank order.

        Consecutive tanks whose calibration tables are equal are collapsed
        into one option labelled "<first> ～ <last>". A single tank is
        labelled with its own id.
        """
        run: list[str] = []
        for tank_id in self._store.tank_ids:
            if run and self._store.all_entries(run[-1]) != self._store.all_entries(tank_id):
                yield self._make_option(run)
                run = []
            run.append(tank_id)
        if run:
            yield self._make_option(run)

    def grouped_display_options(self) -> list[DisplayOption]:
        if self._options is None:
            self._options = list(self.iter_display_options())
        return list(self._options)

    def group_of(self, tank_id: str) -> DisplayOption | None:
        """Get the option whose run contains the tank."""
        for option in self.grouped_display_options():
            if str(tank_id) in option.members:
                return option
        return None

    def label_for(self, tank_id: str) -> str:
        option = self.group_of(tank_id)
        return option.label if option else str(tank_id)

    @staticmethod
    def _make_option(run: list[str]) -> DisplayOption:
        first, last = run[0], run[-1]
        label = first if len(run) == 1 else f"{first}{RANGE_SEPARATOR}{last}"
        return DisplayOption(value=first, label=label, members=tuple(run))
