"""Capped, newest-first history of diagnoses for one client session.

Mirrors the browser's ``localStorage["diagnosisHistory"]``: a single key
holding a JSON list. Read-modify-write is not guarded; two sessions sharing a
store can overwrite each other's entries.
"""

import json
import logging
from datetime import datetime
from pathlib import Path

from pydantic import ValidationError

from app.models.history import HistoryEntry, PayloadSummary

logger = logging.getLogger(__name__)

HISTORY_KEY = "diagnosisHistory"
MAX_HISTORY_ENTRIES = 50


class JsonFileStore:
    """Tiny key/value store backed by one JSON file, shaped like localStorage."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Unreadable store %s: %s", self.path, e)
            return {}
        return data if isinstance(data, dict) else {}

    def get_item(self, key: str) -> str | None:
        return self._load().get(key)

    def set_item(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data), encoding="utf-8")

    def remove_item(self, key: str) -> None:
        data = self._load()
        if data.pop(key, None) is not None:
            self.path.write_text(json.dumps(data), encoding="utf-8")


class DiagnosisHistory:
    def __init__(self, store: JsonFileStore | None = None, limit: int = MAX_HISTORY_ENTRIES):
        self.store = store
        self.limit = limit
        self.entries: list[HistoryEntry] = []
        if store is not None:
            self.entries = self.decode(store.get_item(HISTORY_KEY))[: self.limit]

    def __len__(self) -> int:
        return len(self.entries)

    def add(self, entry: HistoryEntry) -> None:
        """Insert at the front and evict the oldest entries past the cap."""
        self.entries.insert(0, entry)
        del self.entries[self.limit:]
        self._save()

    def record(self, result: dict, payload: dict | None = None) -> HistoryEntry:
        """Build an entry from a diagnosis response and the request it answered."""
        payload = payload or {}
        sound = payload.get("soundProfile") or {}
        entry = HistoryEntry(
            timestamp=datetime.now().isoformat(timespec="seconds"),
            diagnosis=result.get("diagnosis") or "",
            severity=result.get("severity") or "",
            dangerLevel=result.get("dangerLevel") or "",
            payloadSummary=PayloadSummary(
                description=payload.get("description"),
                location=payload.get("location"),
                primarySituation=payload.get("primarySituation"),
                soundLabels=sound.get("labels") or [],
            ),
        )
        self.add(entry)
        return entry

    def clear(self) -> None:
        self.entries = []
        if self.store is not None:
            self.store.remove_item(HISTORY_KEY)

    def encode(self) -> str:
        return json.dumps([e.model_dump() for e in self.entries])

    @staticmethod
    def decode(raw: str | None) -> list[HistoryEntry]:
        if not raw:
            return []
        try:
            items = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding unreadable history")
            return []
        if not isinstance(items, list):
            return []
        entries = []
        for item in items:
            try:
                entries.append(HistoryEntry.model_validate(item))
            except ValidationError:
                logger.debug("Skipping malformed history entry: %s", item)
        return entries

    def _save(self) -> None:
        if self.store is not None:
            self.store.set_item(HISTORY_KEY, self.encode())
