"""Editor state for the interaction controller: Idle or Editing(index)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .models import DEFAULT_INTENSITY, Mood


@dataclass(frozen=True)
class Idle:
    pass


@dataclass(frozen=True)
class Editing:
    index: int


EditorState = Union[Idle, Editing]


@dataclass
class FormState:
    """What the user has typed or picked but not saved yet."""

    selected_mood: Mood | None = None
    text: str = ""
    intensity: int = DEFAULT_INTENSITY
    motivation: str = ""

    def clear(self) -> None:
        self.selected_mood = None
        self.text = ""
        self.intensity = DEFAULT_INTENSITY
        self.motivation = ""
