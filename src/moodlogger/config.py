from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from .paths import resolve_data_path
from .view import check_chart_type

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    data_path: Path
    chart_type: str = "bar"
    log_level: str = "WARNING"


def load_settings(data_arg: str | None = None, profile: str | None = None, verbose: bool = False) -> Settings:
    chart_type = check_chart_type(os.getenv("MOODLOGGER_CHART") or "bar")
    level = "DEBUG" if verbose else (os.getenv("MOODLOGGER_LOG_LEVEL") or "WARNING").upper()
    return Settings(
        data_path=resolve_data_path(data_arg, profile),
        chart_type=chart_type,
        log_level=level,
    )


def configure_logging(settings: Settings) -> None:
    level = logging.getLevelName(settings.log_level)
    if not isinstance(level, int):
        level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)
