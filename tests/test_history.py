"""Tests for conversion history."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from services.conversion_service import ConversionRequest, Direction
from services.history import ConversionHistory


def _record(history, service, tank_id, direction, value, label=None):
    request = ConversionRequest(tank_id=tank_id, direction=direction, value=value)
    return history.record(request, service.convert(request), tank_label=label or tank_id)


class TestConversionHistory:
    """Test newest-first capped history."""

    def test_record_success(self, service):
        history = ConversionHistory()
        entry = _record(history, service, "42", Direction.READING_TO_VOLUME, 3, "41 ～ 43")
        assert entry == {
            "direction": "reading_to_volume",
            "tank_id": "42",
            "tank_label": "41 ～ 43",
            "input": 3,
            "output": 2970,
            "unit": "L",
        }
        assert history.entries == [entry]

    def test_failures_not_recorded(self, service):
        history = ConversionHistory()
        assert _record(history, service, "1", Direction.READING_TO_VOLUME, 100) is None
        assert len(history) == 0

    def test_newest_first(self, service):
        history = ConversionHistory()
        _record(history, service, "1", Direction.READING_TO_VOLUME, 0)
        _record(history, service, "1", Direction.VOLUME_TO_READING, 4600)
        assert [e["direction"] for e in history.entries] == [
            "volume_to_reading", "reading_to_volume",
        ]
        assert history.entries[0]["output"] == 12
        assert history.entries[0]["unit"] == "mm"

    def test_limit(self, service):
        history = ConversionHistory(limit=5)
        for reading in range(0, 14, 2):
            _record(history, service, "1", Direction.READING_TO_VOLUME, reading)
        assert len(history) == 5
        assert history.entries[0]["input"] == 12
        assert history.entries[-1]["input"] == 4

    def test_restore_from_session_list(self, service):
        stored = ConversionHistory()
        _record(stored, service, "80", Direction.READING_TO_VOLUME, 2)
        restored = ConversionHistory(stored.to_list())
        assert restored.entries == stored.entries

    def test_restore_truncates_to_limit(self):
        entries = [{"input": i} for i in range(8)]
        assert len(ConversionHistory(entries, limit=3)) == 3

    def test_clear(self, service):
        history = ConversionHistory()
        _record(history, service, "1", Direction.READING_TO_VOLUME, 0)
        history.clear()
        assert history.to_list() == []
