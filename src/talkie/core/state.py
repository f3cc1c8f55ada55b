# src/talkie/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from ..tasks.task_list import TaskList
from ..tasks.task_store import SkippedRecord
from .ports import TaskRepo


class SessionStatus(StrEnum):
    RUNNING = "running"
    TERMINATED = "terminated"


@dataclass
class AppState:
    # Settings object (real Settings or a SimpleNamespace in tests).
    settings: Any

    task_store: TaskRepo
    tasks: TaskList = field(default_factory=TaskList)
    status: SessionStatus = SessionStatus.RUNNING

    # What happened while loading the task file (shown once by the console).
    skipped_records: list[SkippedRecord] = field(default_factory=list)
    load_error: str | None = None

    @property
    def terminated(self) -> bool:
        return self.status is SessionStatus.TERMINATED

    def terminate(self) -> None:
        self.status = SessionStatus.TERMINATED
