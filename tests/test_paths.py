"""Tests for data-path resolution, settings and the repo safety guard."""

from __future__ import annotations

from pathlib import Path

import pytest

from moodlogger.config import load_settings
from moodlogger.models import ValidationError
from moodlogger.paths import data_path_reason, default_data_path, resolve_data_path
from moodlogger.safety import assert_safe_data_path, find_git_root


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for var in ("MOODLOGGER_DATA", "MOODLOGGER_CHART", "MOODLOGGER_LOG_LEVEL", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(var, raising=False)


def test_default_path_uses_profile():
    assert default_data_path("dev").name == "dev.json"
    assert default_data_path(None).name == "data.json"
    assert default_data_path(None).parent.name == "moodlogger"


def test_default_path_follows_xdg_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert default_data_path("dev") == tmp_path / "moodlogger" / "dev.json"
    assert resolve_data_path(None, None) == (tmp_path / "moodlogger" / "data.json").resolve()
    assert data_path_reason(None, None) == "default XDG config location"


def test_relative_xdg_config_home_is_ignored(monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", "relative/dir")
    assert default_data_path().parent == Path.home() / ".config" / "moodlogger"


def test_flag_beats_env(monkeypatch, tmp_path):
    monkeypatch.setenv("MOODLOGGER_DATA", str(tmp_path / "env.json"))
    assert resolve_data_path(str(tmp_path / "flag.json"), None) == (tmp_path / "flag.json").resolve()
    assert data_path_reason(str(tmp_path / "flag.json"), None) == "because you passed --data"


def test_env_beats_profile(monkeypatch, tmp_path):
    monkeypatch.setenv("MOODLOGGER_DATA", str(tmp_path / "env.json"))
    assert resolve_data_path(None, "dev") == (tmp_path / "env.json").resolve()
    assert "MOODLOGGER_DATA" in data_path_reason(None, "dev")


def test_settings_defaults(tmp_path):
    s = load_settings(str(tmp_path / "d.json"))
    assert s.chart_type == "bar"
    assert s.log_level == "WARNING"


def test_settings_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("MOODLOGGER_CHART", "pie")
    monkeypatch.setenv("MOODLOGGER_LOG_LEVEL", "info")
    s = load_settings(str(tmp_path / "d.json"))
    assert s.chart_type == "pie"
    assert s.log_level == "INFO"
    assert load_settings(str(tmp_path / "d.json"), verbose=True).log_level == "DEBUG"


def test_settings_bad_chart(monkeypatch, tmp_path):
    monkeypatch.setenv("MOODLOGGER_CHART", "radar")
    with pytest.raises(ValidationError):
        load_settings(str(tmp_path / "d.json"))


def test_find_git_root(tmp_path: Path):
    (tmp_path / "repo" / ".git").mkdir(parents=True)
    nested = tmp_path / "repo" / "a" / "b"
    nested.mkdir(parents=True)
    assert find_git_root(nested) == tmp_path / "repo"


def test_guard_refuses_repo_path(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    with pytest.raises(SystemExit):
        assert_safe_data_path(tmp_path / "moods.json", allow_repo_data_path=False)


def test_guard_override(tmp_path: Path):
    (tmp_path / ".git").mkdir()
    assert_safe_data_path(tmp_path / "moods.json", allow_repo_data_path=True)
