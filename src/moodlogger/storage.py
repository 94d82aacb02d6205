from __future__ import annotations

import json
import logging
import os
import time
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

ENTRIES_KEY = "moodEntries"
COUNTS_KEY = "moodCounts"


def _ensure_parent(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def read_document(path: Path) -> dict[str, Any]:
    """
    Safe load of the whole key-value document:
    - creates parent dirs
    - if missing/empty -> writes {}
    - if corrupt or not an object -> backs up raw text then resets to {}
    Always returns a dict.
    """
    path = Path(path)
    _ensure_parent(path)

    if not path.exists():
        write_document(path, {})
        return {}

    txt = path.read_text(encoding="utf-8").strip()
    if not txt:
        write_document(path, {})
        return {}

    try:
        data = json.loads(txt)
    except json.JSONDecodeError:
        backup = backup_text(path, txt, "corrupt")
        log.warning("Corrupt data file %s backed up to %s; starting empty", path, backup)
        write_document(path, {})
        return {}

    if not isinstance(data, dict):
        backup = backup_text(path, txt, "corrupt")
        log.warning("Data file %s does not hold a JSON object; backed up to %s; starting empty", path, backup)
        write_document(path, {})
        return {}
    return data


def backup_text(path: Path, txt: str, tag: str) -> Path:
    """Copy raw text next to path as <stem>.<tag>-<epoch>.json and return the copy."""
    backup = Path(path).with_suffix(f".{tag}-{int(time.time())}.json")
    backup.write_text(txt, encoding="utf-8")
    return backup


def write_document(path: Path, data: dict[str, Any]) -> None:
    """
    Atomic-ish save: temp file in the same directory, fsync, os.replace,
    then chmod 0600 best-effort.
    """
    path = Path(path)
    _ensure_parent(path)

    tmp = path.with_name(path.name + ".tmp")
    payload = json.dumps(data, indent=2, sort_keys=True, ensure_ascii=False) + "\n"

    with open(tmp, "w", encoding="utf-8") as f:
        f.write(payload)
        f.flush()
        os.fsync(f.fileno())

    os.replace(tmp, path)

    try:
        os.chmod(path, 0o600)
    except OSError:
        log.debug("Could not chmod %s", path)


class JsonFileStore:
    """Key-value store persisted as one JSON object on disk.

    Every call re-reads the file, so the store never serves a stale copy.
    """

    def __init__(self, data_path: Path):
        self.data_path = Path(data_path)

    def load(self, key: str) -> Any | None:
        return read_document(self.data_path).get(key)

    def save(self, key: str, value: Any) -> None:
        data = read_document(self.data_path)
        data[key] = value
        write_document(self.data_path, data)
        log.debug("Saved %s to %s", key, self.data_path)

    def remove(self, key: str) -> None:
        data = read_document(self.data_path)
        if key not in data:
            return
        del data[key]
        write_document(self.data_path, data)
        log.debug("Removed %s from %s", key, self.data_path)

    def keys(self) -> list[str]:
        return sorted(read_document(self.data_path))

    def backup(self, key: str) -> Path | None:
        """Copy the raw value under key to a side file before it gets overwritten."""
        data = read_document(self.data_path)
        if key not in data:
            return None
        txt = json.dumps(data[key], indent=2, ensure_ascii=False) + "\n"
        return backup_text(self.data_path, txt, f"{key}-unreadable")
