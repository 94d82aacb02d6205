from __future__ import annotations

import os
from pathlib import Path

DATA_ENV = "MOODLOGGER_DATA"
APP_DIR = "moodlogger"


def config_home() -> Path:
    """$XDG_CONFIG_HOME when it is an absolute path, else ~/.config."""
    xdg = os.environ.get("XDG_CONFIG_HOME", "")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return Path.home() / ".config"


def default_data_path(profile: str | None = None) -> Path:
    return config_home() / APP_DIR / (f"{profile}.json" if profile else "data.json")


def _pick(data_arg: str | None, profile: str | None) -> tuple[Path, str]:
    # precedence: --data, then $MOODLOGGER_DATA, then the profile file under the config home
    if data_arg:
        return Path(data_arg), "because you passed --data"
    env = os.environ.get(DATA_ENV)
    if env:
        return Path(env), f"because {DATA_ENV} is set"
    if profile:
        return default_data_path(profile), f"because you used --profile {profile!r}"
    return default_data_path(), "default XDG config location"


def resolve_data_path(data_arg: str | None, profile: str | None) -> Path:
    return _pick(data_arg, profile)[0].expanduser().resolve()


def data_path_reason(data_arg: str | None, profile: str | None) -> str:
    return _pick(data_arg, profile)[1]
