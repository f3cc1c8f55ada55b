# src/talkie/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

HORIZONTAL_LINE = "-" * 67


def framed(text: str) -> str:
    """Wrap a reply between two horizontal rules."""
    return f"{HORIZONTAL_LINE}\n{text}\n{HORIZONTAL_LINE}\n"


def _greeting(state: AppState) -> str:
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Talkie"))
    return f"Hello! I'm {app_name}, your friendly ChatBot.\nWhat can I do for you?"


def _load_warnings(state: AppState) -> str | None:
    lines: list[str] = []
    if state.load_error:
        lines.append(state.load_error)
        lines.append("Starting with an empty list.")
    for rec in state.skipped_records:
        lines.append(f"OH NO! Error when reading data entry on line {rec.line_no} ({rec.reason}); skipped it.")
    return "\n".join(lines) if lines else None


def run_console_loop(
    state: AppState,
    *,
    read_line: Callable[[], str] = input,
    write: Callable[[str], None] = print,
) -> None:
    """
    Blocking REPL: one line is fully handled before the next one is read.

    Ends on `bye` or end of input (EOF / Ctrl+C). Saving on those paths is the
    caller's job (see cli.main).
    """
    logger.info("Console connector started (tasks=%d).", state.tasks.size())
    write(framed(_greeting(state)))

    warnings = _load_warnings(state)
    if warnings:
        write(framed(warnings))

    while not state.terminated:
        try:
            user_input = read_line().strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            break

        if not user_input:
            continue

        try:
            result = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            write(framed("Internal error while handling a command."))
            continue

        write(framed(result.message))
        if result.exit:
            logger.info("Console exit command received.")
            break

    logger.info("Console connector finished.")
