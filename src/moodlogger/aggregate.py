"""Derived values over the entry list. Nothing here is persisted."""

from __future__ import annotations

from typing import Iterable, Mapping, Sequence

from .models import MOODS, Mood, MoodEntry


def total_count(entries: Sequence[MoodEntry]) -> int:
    return len(entries)


def total_intensity(entries: Iterable[MoodEntry]) -> int:
    return sum(e.intensity or 0 for e in entries)


def counts_by_mood(entries: Iterable[MoodEntry]) -> dict[Mood, int]:
    counts = {m: 0 for m in MOODS}
    for e in entries:
        counts[e.mood] += 1
    return counts


def intensity_sums_by_mood(entries: Iterable[MoodEntry]) -> dict[Mood, int]:
    sums = {m: 0 for m in MOODS}
    for e in entries:
        sums[e.mood] += e.intensity or 0
    return sums


def mood_share(values: Mapping[Mood, int]) -> dict[Mood, float]:
    """Percentage of the total held by each mood (0.0 everywhere when empty)."""
    total = sum(values.values())
    if total <= 0:
        return {m: 0.0 for m in values}
    return {m: 100.0 * v / total for m, v in values.items()}
