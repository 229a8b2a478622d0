"""Tests for the capped, newest-first diagnosis history."""

import json

from app.models.history import HistoryEntry
from app.services.history import (
    HISTORY_KEY,
    MAX_HISTORY_ENTRIES,
    DiagnosisHistory,
    JsonFileStore,
)


def _entry(i: int) -> HistoryEntry:
    return HistoryEntry(timestamp=f"t{i}", diagnosis=f"diagnosis {i}")


class TestDiagnosisHistory:
    def test_newest_first(self):
        history = DiagnosisHistory()
        history.add(_entry(1))
        history.add(_entry(2))
        assert [e.diagnosis for e in history.entries] == ["diagnosis 2", "diagnosis 1"]

    def test_never_exceeds_cap(self):
        history = DiagnosisHistory()
        for i in range(MAX_HISTORY_ENTRIES * 2 + 3):
            history.add(_entry(i))
            assert len(history) <= MAX_HISTORY_ENTRIES
        assert len(history) == MAX_HISTORY_ENTRIES

    def test_oldest_evicted_first(self):
        history = DiagnosisHistory()
        for i in range(MAX_HISTORY_ENTRIES + 5):
            history.add(_entry(i))
        kept = [e.diagnosis for e in history.entries]
        assert kept[0] == f"diagnosis {MAX_HISTORY_ENTRIES + 4}"
        assert kept[-1] == "diagnosis 5"
        assert "diagnosis 0" not in kept

    def test_record_builds_summary(self):
        history = DiagnosisHistory()
        entry = history.record(
            {"diagnosis": "Worn brake pads", "severity": "Medium", "dangerLevel": "Low"},
            {
                "description": "grinding",
                "location": "Front",
                "primarySituation": "Braking",
                "soundProfile": {"labels": ["grinding"]},
            },
        )
        assert history.entries[0] is entry
        assert entry.severity == "Medium"
        assert entry.payloadSummary.location == "Front"
        assert entry.payloadSummary.soundLabels == ["grinding"]

    def test_clear(self):
        history = DiagnosisHistory()
        history.add(_entry(1))
        history.clear()
        assert len(history) == 0

    def test_decode_tolerates_garbage(self):
        assert DiagnosisHistory.decode(None) == []
        assert DiagnosisHistory.decode("not json") == []
        assert DiagnosisHistory.decode('{"a": 1}') == []
        entries = DiagnosisHistory.decode(json.dumps([{"timestamp": "t"}, {"bad": True}]))
        assert len(entries) == 1


class TestJsonFileStore:
    def test_persists_across_sessions(self, tmp_path):
        store = JsonFileStore(tmp_path / "storage.json")
        first = DiagnosisHistory(store)
        first.add(_entry(1))
        first.add(_entry(2))

        second = DiagnosisHistory(JsonFileStore(tmp_path / "storage.json"))
        assert [e.diagnosis for e in second.entries] == ["diagnosis 2", "diagnosis 1"]

    def test_single_key(self, tmp_path):
        path = tmp_path / "storage.json"
        DiagnosisHistory(JsonFileStore(path)).add(_entry(1))
        data = json.loads(path.read_text())
        assert list(data) == [HISTORY_KEY]
        assert isinstance(json.loads(data[HISTORY_KEY]), list)

    def test_clear_removes_key(self, tmp_path):
        store = JsonFileStore(tmp_path / "storage.json")
        history = DiagnosisHistory(store)
        history.add(_entry(1))
        history.clear()
        assert store.get_item(HISTORY_KEY) is None

    def test_loaded_history_is_capped(self, tmp_path):
        store = JsonFileStore(tmp_path / "storage.json")
        entries = [_entry(i).model_dump() for i in range(MAX_HISTORY_ENTRIES + 10)]
        store.set_item(HISTORY_KEY, json.dumps(entries))
        assert len(DiagnosisHistory(store)) == MAX_HISTORY_ENTRIES

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "storage.json"
        path.write_text("{corrupt")
        assert DiagnosisHistory(JsonFileStore(path)).entries == []
