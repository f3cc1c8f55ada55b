# src/talkie/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
LOG_FILE_NAME = "talkie.log"


class _ConsoleNoiseFilter(logging.Filter):
    """Talkie records pass (the handler level gates them); anything else only at ERROR+."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "talkie" or record.name.startswith("talkie."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path | None = "data",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Route all logging to stderr (filtered) and, unless log_dir is None, to
    <log_dir>/talkie.log at file_level. Stdout stays reserved for the chat.

    Call once at startup; earlier root handlers are dropped.
    """
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    while root.handlers:
        root.removeHandler(root.handlers[0])

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(console_level)
    stderr_handler.setFormatter(formatter)
    stderr_handler.addFilter(_ConsoleNoiseFilter())
    root.addHandler(stderr_handler)

    if log_dir is not None:
        log_path = Path(log_dir) / LOG_FILE_NAME
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(str(log_path), encoding="utf-8")
        file_handler.setLevel(file_level)
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    # warnings.warn(...) ends up as 'py.warnings' records.
    logging.captureWarnings(True)
