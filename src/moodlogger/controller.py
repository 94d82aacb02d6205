from __future__ import annotations

import logging
import random
from typing import Callable

from .models import INTENSITY_MAX, INTENSITY_MIN, Mood, ValidationError, clean_text, parse_mood
from .motivation import pick_message
from .repository import EntryRepository
from .state import EditorState, Editing, FormState, Idle
from .timeparse import entry_date
from .view import MoodView, check_chart_type, render

log = logging.getLogger(__name__)

DELETE_PROMPT = "Are you sure you want to delete this entry?"
RESET_PROMPT = "Do you wish to clear all mood data and entries?"


def _always_yes(_message: str) -> bool:
    return True


def _ignore(*_args) -> None:
    return None


class MoodJournal:
    """
    Maps user actions onto repository calls.

    The front end supplies three callbacks:
    - confirm(message) -> bool, asked before delete and reset
    - notify(message), for validation problems the user must fix
    - on_render(view), called with a fresh MoodView after every change
    """

    def __init__(
        self,
        repo: EntryRepository,
        confirm: Callable[[str], bool] = _always_yes,
        notify: Callable[[str], None] = _ignore,
        on_render: Callable[[MoodView], None] = _ignore,
        chart_type: str = "bar",
        rng: random.Random | None = None,
        today: Callable[[], str] = entry_date,
    ):
        self.repo = repo
        self.confirm = confirm
        self.notify = notify
        self.on_render = on_render
        self.chart_type = check_chart_type(chart_type)
        self.rng = rng
        self.today = today

        self.state: EditorState = Idle()
        self.form = FormState()

    # -------- view --------

    def view(self) -> MoodView:
        return render(self.repo.list(), self.repo.counts(), self.state, self.form, self.chart_type)

    def refresh(self) -> MoodView:
        v = self.view()
        self.on_render(v)
        return v

    def _back_to_idle(self) -> None:
        self.state = Idle()
        self.form.clear()

    # -------- form input --------

    def select_mood(self, mood: Mood | str) -> None:
        m = parse_mood(mood)
        self.form.selected_mood = m
        self.form.motivation = pick_message(m, self.rng)
        self.refresh()

    def set_text(self, text: str) -> None:
        self.form.text = text

    def set_intensity(self, value: int) -> None:
        self.form.intensity = max(INTENSITY_MIN, min(INTENSITY_MAX, int(value)))

    def set_chart_type(self, chart_type: str) -> None:
        self.chart_type = check_chart_type(chart_type)
        self.refresh()

    # -------- actions --------

    def save(self) -> bool:
        """Create or update from the form. False when the input was rejected."""
        try:
            mood = parse_mood(self.form.selected_mood)
            text = clean_text(self.form.text)
        except ValidationError as e:
            self.notify(str(e))
            return False

        if isinstance(self.state, Editing):
            if not self.repo.update(self.state.index, mood, text, mood.emoji):
                log.info("Edited entry %d no longer exists; edit dropped", self.state.index)
        else:
            try:
                self.repo.create(mood, text, mood.emoji, self.today(), self.form.intensity)
            except ValidationError as e:
                self.notify(str(e))
                return False

        self._back_to_idle()
        self.refresh()
        return True

    def edit(self, index: int) -> bool:
        entry = self.repo.get(index)
        if entry is None:
            return False
        self.state = Editing(index)
        self.form.selected_mood = entry.mood
        self.form.text = entry.text
        if entry.intensity is not None:
            self.form.intensity = entry.intensity
        self.form.motivation = ""
        self.refresh()
        return True

    def cancel(self) -> None:
        self._back_to_idle()
        self.refresh()

    def delete(self, index: int) -> bool:
        if self.repo.get(index) is None:
            return False
        if not self.confirm(DELETE_PROMPT):
            return False
        if self.repo.delete(index) is None:
            return False

        if isinstance(self.state, Editing):
            if self.state.index == index:
                self._back_to_idle()
            elif self.state.index > index:
                self.state = Editing(self.state.index - 1)

        self.refresh()
        return True

    def reset(self) -> bool:
        if not self.confirm(RESET_PROMPT):
            return False
        self.repo.reset_all()
        self._back_to_idle()
        self.refresh()
        return True
