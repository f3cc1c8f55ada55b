# tests/test_main.py

from __future__ import annotations

from types import SimpleNamespace

import pytest

from talkie.cli import main as cli_main
from talkie.connectors.console_connector import run_console_loop

from .fakes import ScriptedInput


@pytest.fixture()
def app_settings(settings) -> SimpleNamespace:
    settings.log_level = "WARNING"
    settings.log_file_enabled = False
    settings.log_dir = settings.data_dir
    return settings


@pytest.fixture()
def scripted_main(monkeypatch: pytest.MonkeyPatch, app_settings):
    """Run cli.main.main() with the given input lines and no real logging setup."""

    def run(*lines: str) -> list[str]:
        out: list[str] = []
        monkeypatch.setattr(cli_main, "get_settings", lambda: app_settings)
        monkeypatch.setattr(cli_main, "setup_logging", lambda **_: None)
        monkeypatch.setattr(
            cli_main,
            "run_console_loop",
            lambda state: run_console_loop(state, read_line=ScriptedInput(*lines), write=out.append),
        )
        cli_main.main()
        return out

    return run


def test_end_of_input_still_saves(scripted_main, app_settings) -> None:
    out = scripted_main("todo saved without bye", "mark 1")

    assert not any("Bye." in block for block in out)
    assert app_settings.data_file.read_text("utf-8") == "T | 1 | saved without bye\n"


def test_bye_session_persists_through_main(scripted_main, app_settings) -> None:
    scripted_main("todo once", "bye")
    assert app_settings.data_file.read_text("utf-8") == "T | 0 | once\n"


def test_unreadable_store_survives_a_session(scripted_main, app_settings) -> None:
    app_settings.data_file.mkdir(parents=True)
    (app_settings.data_file / "inside.txt").write_text("untouched", "utf-8")

    out = scripted_main("todo lost on purpose")

    assert "reading the task file" in out[1]
    assert (app_settings.data_file / "inside.txt").read_text("utf-8") == "untouched"
