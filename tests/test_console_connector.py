# tests/test_console_connector.py

from __future__ import annotations

from talkie.cli.bootstrap import create_initial_state, save_on_exit
from talkie.connectors.console_connector import HORIZONTAL_LINE, framed, run_console_loop
from talkie.core.state import AppState

from .fakes import ScriptedInput


def _session(state: AppState, *lines: str) -> list[str]:
    out: list[str] = []
    run_console_loop(state, read_line=ScriptedInput(*lines), write=out.append)
    return out


def test_framed_block() -> None:
    assert framed("hi") == f"{HORIZONTAL_LINE}\nhi\n{HORIZONTAL_LINE}\n"


def test_session_runs_until_bye_and_persists(state: AppState, settings) -> None:
    out = _session(state, "todo buy milk", "", "deadline report /by 2024-01-01 1800", "bye", "todo never read")

    assert "Hello! I'm Talkie" in out[0]
    assert len(out) == 4  # greeting + two adds + bye; blank line ignored, nothing after bye
    assert all(block.startswith(HORIZONTAL_LINE) for block in out)
    assert "Bye. Hope to see you again soon!" in out[-1]
    assert state.terminated

    reloaded = create_initial_state(settings=settings)
    assert [t.description for t in reloaded.tasks] == ["buy milk", "report"]


def test_errors_do_not_stop_the_loop(state: AppState) -> None:
    out = _session(state, "dance", "mark x", "todo ok", "bye")
    assert "don't know" in out[1]
    assert "integer" in out[2]
    assert "Got it." in out[3]
    assert state.terminated


def test_eof_ends_loop_and_save_on_exit_persists(state: AppState, settings) -> None:
    _session(state, "todo survive eof")
    assert not state.terminated

    save_on_exit(state)

    assert state.terminated
    assert settings.data_file.read_text("utf-8") == "T | 0 | survive eof\n"


def test_skipped_records_are_reported_at_start(settings) -> None:
    settings.data_dir.mkdir(parents=True)
    settings.data_file.write_text("T | 0 | good\nZ | 0 | bad\n", "utf-8")
    state = create_initial_state(settings=settings)

    out = _session(state, "list")

    assert "line 2" in out[1]
    assert "1.[T][ ] good" in out[2]
