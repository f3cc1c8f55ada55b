# src/talkie/core/ports.py

"""
Ports (interfaces) used by the core.

The command interpreter depends on this Protocol instead of the concrete
TaskStore, which keeps tests free to swap in in-memory or failing stores.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task
    from ..tasks.task_store import LoadReport


class TaskRepo(Protocol):
    def load(self) -> LoadReport: ...

    # Full overwrite; raises StorageError when the store cannot be written.
    def save(self, tasks: Iterable[Task]) -> int: ...
