"""Tests for the Idle / Editing interaction flow."""

from __future__ import annotations

import random

import pytest

from moodlogger.controller import DELETE_PROMPT, RESET_PROMPT, MoodJournal
from moodlogger.models import DEFAULT_INTENSITY, Mood, ValidationError
from moodlogger.motivation import MOTIVATION
from moodlogger.state import Editing, Idle
from moodlogger.view import UPDATE_LABEL


class Recorder:
    def __init__(self, answer: bool = True):
        self.answer = answer
        self.prompts: list[str] = []
        self.notices: list[str] = []
        self.views = []

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer

    def notify(self, message: str) -> None:
        self.notices.append(message)

    def render(self, view) -> None:
        self.views.append(view)


@pytest.fixture()
def ui() -> Recorder:
    return Recorder()


@pytest.fixture()
def journal(repo, ui) -> MoodJournal:
    return MoodJournal(
        repo,
        confirm=ui.confirm,
        notify=ui.notify,
        on_render=ui.render,
        rng=random.Random(0),
        today=lambda: "April 8, 2024",
    )


def _log(journal, mood="happy", text="ok", intensity=3):
    journal.select_mood(mood)
    journal.set_text(text)
    journal.set_intensity(intensity)
    assert journal.save()


# ---- select / save ----


def test_select_mood_sets_form_and_motivation(journal, ui):
    journal.select_mood("calm")
    assert journal.form.selected_mood is Mood.CALM
    assert journal.form.motivation in MOTIVATION[Mood.CALM]
    assert isinstance(journal.state, Idle)
    assert ui.views[-1].form.selected_mood is Mood.CALM


def test_save_creates_entry_and_clears_form(journal, ui, repo):
    _log(journal, "happy", "ok", 3)
    assert repo.list()[0].to_dict() == {
        "mood": "happy",
        "text": "ok",
        "emoji": "😊",
        "date": "April 8, 2024",
        "intensity": 3,
    }
    assert journal.form.selected_mood is None
    assert journal.form.text == ""
    assert journal.form.intensity == DEFAULT_INTENSITY
    view = ui.views[-1]
    assert view.total_count == 1
    assert view.badges[Mood.HAPPY] == 1


def test_save_without_mood_is_rejected(journal, ui, repo):
    journal.set_text("something")
    assert journal.save() is False
    assert ui.notices == ["Please select your mood first!"]
    assert repo.list() == ()
    assert journal.form.text == "something"


def test_save_with_blank_text_is_rejected(journal, ui, repo):
    journal.select_mood("sad")
    journal.set_text("   ")
    assert journal.save() is False
    assert ui.notices == ["Please write something about your feeling."]
    assert repo.list() == ()
    assert journal.form.selected_mood is Mood.SAD


def test_set_intensity_clamps(journal):
    journal.set_intensity(99)
    assert journal.form.intensity == 10
    journal.set_intensity(-3)
    assert journal.form.intensity == 1


# ---- edit / cancel ----


def test_edit_prefills_form(journal, ui):
    _log(journal, "sad", "rainy day", 6)
    assert journal.edit(0)
    assert journal.state == Editing(0)
    assert journal.form.selected_mood is Mood.SAD
    assert journal.form.text == "rainy day"
    assert ui.views[-1].form.save_label == UPDATE_LABEL


def test_edit_out_of_range_keeps_state(journal):
    assert journal.edit(3) is False
    assert isinstance(journal.state, Idle)


def test_edit_save_updates_in_place(journal, repo):
    _log(journal, "happy", "first")
    _log(journal, "calm", "second")
    journal.edit(1)
    journal.select_mood("angry")
    journal.set_text("first, revised")
    assert journal.save()
    entries = repo.list()
    assert [e.text for e in entries] == ["second", "first, revised"]
    assert entries[1].mood is Mood.ANGRY
    assert entries[1].date == "April 8, 2024"
    assert repo.counts()[Mood.HAPPY] == 0
    assert repo.counts()[Mood.ANGRY] == 1
    assert isinstance(journal.state, Idle)
    assert journal.form.text == ""


def test_edit_save_with_blank_text_stays_editing(journal, ui):
    _log(journal)
    journal.edit(0)
    journal.set_text("")
    assert journal.save() is False
    assert journal.state == Editing(0)
    assert ui.notices


def test_cancel_returns_to_idle_without_mutation(journal, repo):
    _log(journal, "happy", "keep me")
    journal.edit(0)
    journal.set_text("changed my mind")
    journal.cancel()
    assert isinstance(journal.state, Idle)
    assert journal.form.text == ""
    assert repo.list()[0].text == "keep me"


# ---- delete ----


def test_delete_asks_then_removes(journal, ui, repo):
    _log(journal, "happy", "a")
    _log(journal, "sad", "b")
    assert journal.delete(0)
    assert ui.prompts == [DELETE_PROMPT]
    assert [e.text for e in repo.list()] == ["a"]
    assert ui.views[-1].badges[Mood.SAD] == 0


def test_delete_declined_keeps_entry(repo):
    ui = Recorder(answer=False)
    journal = MoodJournal(repo, confirm=ui.confirm, today=lambda: "April 8, 2024")
    _log(journal)
    assert journal.delete(0) is False
    assert len(repo.list()) == 1


def test_delete_out_of_range_does_not_prompt(journal, ui):
    _log(journal)
    assert journal.delete(5) is False
    assert ui.prompts == []


def test_delete_entry_being_edited_discards_edit(journal, repo):
    _log(journal, "happy", "a")
    _log(journal, "sad", "b")
    journal.edit(1)
    journal.delete(1)
    assert isinstance(journal.state, Idle)
    assert journal.form.text == ""
    assert [e.text for e in repo.list()] == ["b"]


def test_delete_above_edited_entry_shifts_edit_index(journal, repo):
    for t in ("a", "b", "c"):
        _log(journal, "calm", t)
    journal.edit(2)  # "a"
    journal.delete(0)  # "c"
    assert journal.state == Editing(1)
    journal.set_text("a2")
    journal.save()
    assert [e.text for e in repo.list()] == ["b", "a2"]


def test_delete_below_edited_entry_keeps_edit_index(journal):
    for t in ("a", "b", "c"):
        _log(journal, "calm", t)
    journal.edit(0)
    journal.delete(2)
    assert journal.state == Editing(0)


# ---- reset ----


def test_reset_clears_everything(journal, ui, repo):
    _log(journal, "happy")
    _log(journal, "excited")
    journal.edit(0)
    assert journal.reset()
    assert ui.prompts[-1] == RESET_PROMPT
    assert repo.list() == ()
    assert isinstance(journal.state, Idle)
    view = ui.views[-1]
    assert view.total_count == 0
    assert all(v == 0 for v in view.badges.values())
    assert view.chart.values == (0, 0, 0, 0, 0)


def test_reset_declined(repo):
    ui = Recorder(answer=False)
    journal = MoodJournal(repo, confirm=ui.confirm, today=lambda: "April 8, 2024")
    _log(journal)
    assert journal.reset() is False
    assert len(repo.list()) == 1


# ---- chart ----


def test_chart_type_switch(journal, ui):
    _log(journal, "happy", intensity=4)
    journal.set_chart_type("pie")
    assert ui.views[-1].chart.kind == "pie"
    assert ui.views[-1].chart.values[0] == 4


def test_chart_type_rejects_unknown(journal):
    with pytest.raises(ValidationError):
        journal.set_chart_type("radar")
