"""Settings loader for Agenda."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, cast

from dotenv import find_dotenv, load_dotenv

StoreBackend = Literal["sqlite", "memory"]


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    store_backend: StoreBackend
    prefs_name: str
    log_level: int


def _parse_store_backend(value: str) -> StoreBackend:
    normalized = value.strip().lower()
    if normalized not in {"sqlite", "memory"}:
        raise ValueError(f"Invalid store backend for AGENDA_STORE: {value}")
    return cast(StoreBackend, normalized)


def _parse_log_level(value: str) -> int:
    level = logging.getLevelName(value.strip().upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level for AGENDA_LOG_LEVEL: {value}")
    return level


def _parse_prefs_name(value: str) -> str:
    name = value.strip()
    if not name:
        raise ValueError("AGENDA_PREFS_NAME must not be empty")
    return name


def load_settings() -> Settings:
    load_dotenv(find_dotenv(usecwd=True))
    data_dir = Path(os.environ.get("AGENDA_DATA_DIR", "~/.agenda")).expanduser()
    store_backend = _parse_store_backend(os.environ.get("AGENDA_STORE", "sqlite"))
    prefs_name = _parse_prefs_name(
        os.environ.get("AGENDA_PREFS_NAME", "notes_prefs")
    )
    log_level = _parse_log_level(os.environ.get("AGENDA_LOG_LEVEL", "WARNING"))

    return Settings(
        data_dir=data_dir,
        store_backend=store_backend,
        prefs_name=prefs_name,
        log_level=log_level,
    )
