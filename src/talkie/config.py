# src/talkie/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Every other component receives settings by injection (tests pass a SimpleNamespace).

Environment variables (all optional):
- TALKIE_APP_NAME: name used in the greeting (default: Talkie).
- TALKIE_DATA_DIR: directory holding the task file (default: ./data).
- TALKIE_DATA_FILE: task file path (default: <data_dir>/Talkie.txt).
- TALKIE_LOG_LEVEL: console log level (default: WARNING).
- TALKIE_LOG_FILE_ENABLED: write a full debug log file (default: true).
- TALKIE_LOG_DIR: where talkie.log goes (default: <data_dir>).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TALKIE"

DEFAULT_DATA_DIR = Path("./data")
DEFAULT_DATA_FILE_NAME = "Talkie.txt"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    if v is None or v.strip() == "":
        return default
    return v.strip()


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_file_enabled: bool
    log_dir: Path

    # ---- Local data paths ----
    data_dir: Path
    data_file: Path

    @staticmethod
    def from_env(*, use_dotenv: bool = True) -> "Settings":
        if use_dotenv:
            load_dotenv(find_dotenv(usecwd=True), override=False)

        app_name = _env(_k("APP_NAME"), "Talkie")
        log_level = _env(_k("LOG_LEVEL"), "WARNING").upper()
        log_file_enabled = _env_bool(_k("LOG_FILE_ENABLED"), True)

        data_dir = _env_path(_k("DATA_DIR"), DEFAULT_DATA_DIR)
        data_file = _env_path(_k("DATA_FILE"), data_dir / DEFAULT_DATA_FILE_NAME)
        log_dir = _env_path(_k("LOG_DIR"), data_dir)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_file_enabled=log_file_enabled,
            log_dir=log_dir,
            data_dir=data_dir,
            data_file=data_file,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, read lazily on first use."""
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
