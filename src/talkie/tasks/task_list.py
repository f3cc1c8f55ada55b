# src/talkie/tasks/task_list.py

from __future__ import annotations

from collections.abc import Iterable, Iterator

from ..core.errors import NoTaskFoundError
from .task_models import Task


class TaskList:
    """
    Ordered task collection addressed by 1-based positions.

    Insertion order is display order. Removing position i shifts every later
    task down by one; duplicates are allowed.
    """

    def __init__(self, tasks: Iterable[Task] | None = None) -> None:
        self._tasks: list[Task] = list(tasks or [])

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self._tasks)

    def __repr__(self) -> str:
        return f"TaskList({self._tasks!r})"

    def _offset(self, index: int) -> int:
        if index < 1 or index > len(self._tasks):
            raise NoTaskFoundError(index, len(self._tasks))
        return index - 1

    def add(self, task: Task) -> int:
        """Append and return the new size."""
        self._tasks.append(task)
        return len(self._tasks)

    def remove_at(self, index: int) -> Task:
        return self._tasks.pop(self._offset(index))

    def get(self, index: int) -> Task:
        return self._tasks[self._offset(index)]

    def size(self) -> int:
        return len(self._tasks)

    def is_empty(self) -> bool:
        return not self._tasks

    def search(self, keyword: str) -> TaskList:
        """New list (not a view) of matching tasks, in original order."""
        return TaskList(t for t in self._tasks if t.matches_keyword(keyword))

    def enumerate_tasks(self) -> Iterator[tuple[int, Task]]:
        return enumerate(self._tasks, start=1)
