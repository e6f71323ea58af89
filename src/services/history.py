"""Recent conversion history kept in session state."""

from typing import TypedDict

from services.conversion_service import ConversionRequest, ConversionResult, Direction

DEFAULT_HISTORY_LIMIT = 5


class HistoryEntry(TypedDict):
    """One past conversion."""

    direction: str
    tank_id: str
    tank_label: str
    input: int
    output: int
    unit: str


class ConversionHistory:
    """Newest-first list of recent successful conversions."""

    def __init__(
        self,
        entries: list[HistoryEntry] | None = None,
        limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> None:
        self.limit = limit
        self._entries: list[HistoryEntry] = list(entries or [])[:limit]

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def record(
        self,
        request: ConversionRequest,
        result: ConversionResult,
        tank_label: str,
    ) -> HistoryEntry | None:
        """Add a successful conversion. Failures are not recorded."""
        if not result.ok:
            return None

        entry = HistoryEntry(
            direction=Direction(request.direction).value,
            tank_id=request.tank_id,
            tank_label=tank_label,
            input=request.value,
            output=result.display_value,
            unit=result.unit,
        )
        self._entries = [entry, *self._entries][: self.limit]
        return entry

    def clear(self) -> None:
        self._entries = []

    def to_list(self) -> list[dict]:
        return [dict(entry) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)
