"""Mood entry record, mood enum, and the error types shared by the core."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

INTENSITY_MIN = 1
INTENSITY_MAX = 10
DEFAULT_INTENSITY = 5


class Mood(str, Enum):
    HAPPY = "happy"
    SAD = "sad"
    ANGRY = "angry"
    EXCITED = "excited"
    CALM = "calm"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def emoji(self) -> str:
        return MOOD_EMOJI[self]


MOOD_EMOJI: dict[Mood, str] = {
    Mood.HAPPY: "😊",
    Mood.SAD: "😢",
    Mood.ANGRY: "😠",
    Mood.EXCITED: "🤩",
    Mood.CALM: "😌",
}

MOODS: tuple[Mood, ...] = tuple(Mood)


class ValidationError(ValueError):
    """User input rejected at save time (missing mood, empty note, ...)."""


class StorageReadError(ValueError):
    """A persisted record is absent or has the wrong shape."""


def parse_mood(value: object) -> Mood:
    if isinstance(value, Mood):
        return value
    s = str(value or "").strip().lower()
    if not s:
        raise ValidationError("Please select your mood first!")
    try:
        return Mood(s)
    except ValueError:
        choices = ", ".join(m.value for m in MOODS)
        raise ValidationError(f"Unknown mood {value!r} (choose one of: {choices})") from None


def clean_text(value: object) -> str:
    s = str(value or "").strip()
    if not s:
        raise ValidationError("Please write something about your feeling.")
    return s


def check_intensity(value: object) -> int:
    try:
        n = int(value)  # type: ignore[call-overload]
    except (TypeError, ValueError):
        raise ValidationError(f"Intensity must be a whole number (got {value!r})") from None
    if not (INTENSITY_MIN <= n <= INTENSITY_MAX):
        raise ValidationError(f"Intensity must be between {INTENSITY_MIN} and {INTENSITY_MAX}")
    return n


@dataclass
class MoodEntry:
    mood: Mood
    text: str
    emoji: str
    date: str
    intensity: int | None = None

    @property
    def heading(self) -> str:
        return f"Feeling {self.mood.label} {self.emoji}"

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {
            "mood": self.mood.value,
            "text": self.text,
            "emoji": self.emoji,
            "date": self.date,
        }
        if self.intensity is not None:
            d["intensity"] = self.intensity
        return d

    @classmethod
    def from_dict(cls, raw: object) -> MoodEntry:
        """
        Rebuild an entry from its persisted JSON object.

        Raises StorageReadError when the object cannot be an entry: not a
        mapping, unknown mood, or non-integer intensity. A missing emoji is
        filled in from the mood; a missing intensity stays None.
        """
        if not isinstance(raw, dict):
            raise StorageReadError(f"entry is not an object: {raw!r}")
        try:
            mood = Mood(str(raw.get("mood", "")).strip().lower())
        except ValueError:
            raise StorageReadError(f"entry has unknown mood: {raw.get('mood')!r}") from None

        intensity = raw.get("intensity")
        if intensity is not None and (isinstance(intensity, bool) or not isinstance(intensity, int)):
            raise StorageReadError(f"entry has non-integer intensity: {intensity!r}")

        return cls(
            mood=mood,
            text=str(raw.get("text", "")),
            emoji=str(raw.get("emoji") or mood.emoji),
            date=str(raw.get("date", "")),
            intensity=intensity,
        )
