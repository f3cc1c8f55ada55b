# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from talkie.logging_setup import _ConsoleNoiseFilter, setup_logging


@pytest.fixture()
def restore_root_logging():
    root = logging.getLogger()
    saved_handlers = list(root.handlers)
    saved_level = root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in saved_handlers:
        root.addHandler(h)
    root.setLevel(saved_level)
    logging.captureWarnings(False)


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_console_filter_keeps_talkie_and_quiets_third_party() -> None:
    f = _ConsoleNoiseFilter()
    assert f.filter(_record("talkie.tasks.task_store", logging.DEBUG))
    assert not f.filter(_record("urllib3", logging.WARNING))
    assert f.filter(_record("urllib3", logging.ERROR))
    assert not f.filter(_record("py.warnings", logging.WARNING))


def test_setup_logging_writes_file(tmp_path: Path, restore_root_logging) -> None:
    setup_logging(log_dir=tmp_path / "logs", console_level=logging.ERROR)
    logging.getLogger("talkie.test").debug("hello file")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "hello file" in (tmp_path / "logs" / "talkie.log").read_text("utf-8")


def test_setup_logging_without_file(restore_root_logging) -> None:
    setup_logging(log_dir=None)
    root = logging.getLogger()
    assert len(root.handlers) == 1
    assert not any(isinstance(h, logging.FileHandler) for h in root.handlers)
