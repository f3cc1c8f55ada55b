# src/talkie/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local data directory exists,
- wires the TaskStore into AppState and loads the saved list.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import StorageError
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.data_file.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    If settings is None, falls back to get_settings(). A store that cannot be
    read leaves the session running with an empty list and a load_error the
    console will show.
    """
    if settings is None:
        settings = get_settings()

    try:
        _ensure_local_dirs(settings)
    except OSError:
        logger.exception("Failed to create data directory %s", settings.data_dir)

    store = TaskStore(settings.data_file)
    state = AppState(settings=settings, task_store=store)

    try:
        report = store.load()
    except StorageError as e:
        state.load_error = e.message
        return state

    state.tasks = report.tasks
    state.skipped_records = report.skipped
    return state


def save_on_exit(state: AppState) -> None:
    """Best-effort save for sessions that ended without `bye` (EOF, Ctrl+C)."""
    if state.terminated:
        return
    if state.load_error:
        # Never overwrite a file that was not read.
        logger.warning("Task file was unreadable at start; leaving it untouched.")
        state.terminate()
        return
    try:
        state.task_store.save(state.tasks)
    except StorageError:
        logger.error("Tasks were not saved on exit.")
    state.terminate()
