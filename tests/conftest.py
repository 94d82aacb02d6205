from __future__ import annotations

from pathlib import Path

import pytest

from moodlogger.repository import EntryRepository
from moodlogger.storage import JsonFileStore


class RecordingStore(JsonFileStore):
    """JsonFileStore that remembers which keys were written or removed."""

    def __init__(self, data_path: Path):
        super().__init__(data_path)
        self.writes: list[str] = []

    def save(self, key, value):
        self.writes.append(key)
        super().save(key, value)

    def remove(self, key):
        self.writes.append(f"-{key}")
        super().remove(key)


@pytest.fixture()
def store(tmp_path: Path) -> RecordingStore:
    return RecordingStore(tmp_path / "moods.json")


@pytest.fixture()
def repo(store: RecordingStore) -> EntryRepository:
    return EntryRepository(store)
