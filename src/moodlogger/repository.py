from __future__ import annotations

import logging
from typing import Any

from .aggregate import counts_by_mood
from .models import (
    MOODS,
    Mood,
    MoodEntry,
    StorageReadError,
    check_intensity,
    clean_text,
    parse_mood,
)
from .storage import COUNTS_KEY, ENTRIES_KEY, JsonFileStore

log = logging.getLogger(__name__)


def _zero_counts() -> dict[Mood, int]:
    return {m: 0 for m in MOODS}


def _parse_entries(raw: Any) -> tuple[list[MoodEntry], int]:
    """Readable entries plus the number of records that had to be skipped."""
    if raw is None:
        return [], 0
    if not isinstance(raw, list):
        raise StorageReadError(f"{ENTRIES_KEY} is not a list")
    entries: list[MoodEntry] = []
    skipped = 0
    for i, item in enumerate(raw):
        try:
            entries.append(MoodEntry.from_dict(item))
        except StorageReadError as e:
            log.warning("Skipping unreadable %s[%d]: %s", ENTRIES_KEY, i, e)
            skipped += 1
    return entries, skipped


def _parse_counts(raw: Any) -> dict[Mood, int]:
    counts = _zero_counts()
    if raw is None:
        return counts
    if not isinstance(raw, dict):
        raise StorageReadError(f"{COUNTS_KEY} is not an object")
    for m in MOODS:
        v = raw.get(m.value, 0)
        if isinstance(v, bool) or not isinstance(v, int):
            raise StorageReadError(f"{COUNTS_KEY}.{m.value} is not an integer: {v!r}")
        counts[m] = max(0, v)
    return counts


def _dump_counts(counts: dict[Mood, int]) -> dict[str, int]:
    return {m.value: int(counts.get(m, 0)) for m in MOODS}


class EntryRepository:
    """CRUD over the persisted entry list, keeping per-mood counters in step.

    Indices are positions in the newest-first list. Stale or out-of-range
    indices are a quiet no-op: nothing is written and nothing raises.
    """

    def __init__(self, store: JsonFileStore):
        self.store = store

    # -------- reads --------

    def _read_entries(self) -> tuple[list[MoodEntry], bool]:
        """Entries that parse, and whether anything stored was left out."""
        try:
            entries, skipped = _parse_entries(self.store.load(ENTRIES_KEY))
        except StorageReadError as e:
            log.warning("Ignoring unreadable %s: %s", ENTRIES_KEY, e)
            return [], True
        return entries, skipped > 0

    def _entries(self) -> list[MoodEntry]:
        return self._read_entries()[0]

    def _stored_counts(self) -> dict[Mood, int]:
        try:
            return _parse_counts(self.store.load(COUNTS_KEY))
        except StorageReadError as e:
            log.warning("Ignoring unreadable %s: %s", COUNTS_KEY, e)
            return _zero_counts()

    def list(self) -> tuple[MoodEntry, ...]:
        return tuple(self._entries())

    def get(self, index: int) -> MoodEntry | None:
        entries = self._entries()
        if 0 <= index < len(entries):
            return entries[index]
        return None

    def counts(self) -> dict[Mood, int]:
        """
        Per-mood counts derived from the entry list.

        Read-only: a stale cached record is only reported here. The next
        mutation rewrites it from the entries.
        """
        derived = counts_by_mood(self._entries())
        stored = self._stored_counts()
        if stored != derived:
            log.debug(
                "Stored %s is stale (stored=%s, derived=%s)", COUNTS_KEY, _dump_counts(stored), _dump_counts(derived)
            )
        return derived

    def repair_counts(self) -> bool:
        """Rewrite the stored counts from the entries. True when they had drifted."""
        derived = counts_by_mood(self._entries())
        stored = self._stored_counts()
        if stored == derived:
            return False
        log.warning("Repairing %s: stored=%s, derived=%s", COUNTS_KEY, _dump_counts(stored), _dump_counts(derived))
        self._save_counts(derived)
        return True

    # -------- writes --------

    def _keep_unreadable(self, lossy: bool) -> None:
        # the raw record is about to be replaced by the readable part only
        if not lossy:
            return
        backup = self.store.backup(ENTRIES_KEY)
        if backup is not None:
            log.warning("Unreadable %s backed up to %s before rewrite", ENTRIES_KEY, backup)

    def _save_entries(self, entries: list[MoodEntry]) -> None:
        self.store.save(ENTRIES_KEY, [e.to_dict() for e in entries])

    def _save_counts(self, counts: dict[Mood, int]) -> None:
        self.store.save(COUNTS_KEY, _dump_counts(counts))

    def _sync_counts(self, entries: list[MoodEntry], force: bool = True) -> None:
        derived = counts_by_mood(entries)
        if force or self._stored_counts() != derived:
            self._save_counts(derived)

    def create(self, mood: Mood | str | None, text: str, emoji: str | None, date: str, intensity: int) -> MoodEntry:
        m = parse_mood(mood)
        entry = MoodEntry(
            mood=m,
            text=clean_text(text),
            emoji=emoji or m.emoji,
            date=date,
            intensity=check_intensity(intensity),
        )

        entries, lossy = self._read_entries()
        entries.insert(0, entry)

        self._keep_unreadable(lossy)
        self._save_entries(entries)
        self._sync_counts(entries)
        log.info("Logged %s entry (intensity %s)", m.value, entry.intensity)
        return entry

    def update(self, index: int, mood: Mood | str | None, text: str, emoji: str | None = None) -> bool:
        entries, lossy = self._read_entries()
        if not (0 <= index < len(entries)):
            log.debug("update(%s) ignored: %d entries", index, len(entries))
            return False

        new_mood = parse_mood(mood)
        new_text = clean_text(text)
        entry = entries[index]
        old_mood = entry.mood

        entry.mood = new_mood
        entry.text = new_text
        entry.emoji = emoji or new_mood.emoji

        self._keep_unreadable(lossy)
        self._save_entries(entries)
        # counts only move with the mood, unless the stored record had drifted
        self._sync_counts(entries, force=old_mood != new_mood)
        log.info("Updated entry %d (%s -> %s)", index, old_mood.value, new_mood.value)
        return True

    def delete(self, index: int) -> MoodEntry | None:
        entries, lossy = self._read_entries()
        if not (0 <= index < len(entries)):
            log.debug("delete(%s) ignored: %d entries", index, len(entries))
            return None

        removed = entries.pop(index)

        self._keep_unreadable(lossy)
        self._save_entries(entries)
        self._sync_counts(entries)
        log.info("Deleted entry %d (%s)", index, removed.mood.value)
        return removed

    def reset_all(self) -> int:
        removed = len(self._entries())
        self.store.remove(ENTRIES_KEY)
        self.store.remove(COUNTS_KEY)
        log.info("Reset: removed %d entries", removed)
        return removed
