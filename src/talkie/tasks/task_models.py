# src/talkie/tasks/task_models.py

"""
Task variants and their textual forms.

A task is one of three plain dataclasses (Todo, Deadline, Event); code that
needs to tell them apart matches on the variant instead of relying on
overridden methods.

Three date formats are in play and must not be mixed up:
- input   (what the user types):   2024-01-01 1800
- stored  (what the task file has): 2024-01-01 18:00
- display (what the user sees):     Jan 01 2024, 18:00
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from typing import ClassVar

from ..core.errors import BadDateTimeError, InvalidEventRangeError

INPUT_DATETIME_FORMAT = "%Y-%m-%d %H%M"
STORED_DATETIME_FORMAT = "%Y-%m-%d %H:%M"
DISPLAY_DATETIME_FORMAT = "%b %d %Y, %H:%M"

# strptime alone accepts "2024-1-1 900"; require fixed-width fields.
_INPUT_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{4}")
_STORED_DATETIME_RE = re.compile(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}")


class TaskKind(StrEnum):
    """Type letter used both in the display prefix and the stored record."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


def parse_input_datetime(text: str) -> datetime:
    """Parse a user-typed `yyyy-MM-dd HHmm` value (raises BadDateTimeError)."""
    raw = text.strip()
    if not _INPUT_DATETIME_RE.fullmatch(raw):
        raise BadDateTimeError(text)
    try:
        return datetime.strptime(raw, INPUT_DATETIME_FORMAT)
    except ValueError as e:
        raise BadDateTimeError(text) from e


def parse_stored_datetime(text: str) -> datetime:
    raw = text.strip()
    if not _STORED_DATETIME_RE.fullmatch(raw):
        raise ValueError(f"bad stored date-time: {text!r}")
    return datetime.strptime(raw, STORED_DATETIME_FORMAT)


def format_stored_datetime(value: datetime) -> str:
    return value.strftime(STORED_DATETIME_FORMAT)


def format_display_datetime(value: datetime) -> str:
    return value.strftime(DISPLAY_DATETIME_FORMAT)


@dataclass(slots=True)
class _TaskState:
    description: str
    is_done: bool = field(default=False, kw_only=True)

    def __post_init__(self) -> None:
        self.description = self.description.strip()
        if not self.description:
            raise ValueError("description is required")

    def mark_done(self) -> None:
        self.is_done = True

    def mark_not_done(self) -> None:
        self.is_done = False

    def matches_keyword(self, text: str) -> bool:
        """Case-sensitive substring test against the description only."""
        return text in self.description


@dataclass(slots=True)
class Todo(_TaskState):
    kind: ClassVar[TaskKind] = TaskKind.TODO


@dataclass(slots=True)
class Deadline(_TaskState):
    due_at: datetime
    kind: ClassVar[TaskKind] = TaskKind.DEADLINE


@dataclass(slots=True)
class Event(_TaskState):
    start_at: datetime
    end_at: datetime
    kind: ClassVar[TaskKind] = TaskKind.EVENT

    def __post_init__(self) -> None:
        super(Event, self).__post_init__()
        if self.start_at > self.end_at:
            raise InvalidEventRangeError()


Task = Todo | Deadline | Event


def render_task(task: Task) -> str:
    """User-facing line, e.g. `[D][ ] submit report (by: Jan 01 2024, 18:00)`."""
    head = f"[{task.kind}][{'X' if task.is_done else ' '}] {task.description}"
    match task:
        case Deadline(due_at=due_at):
            return f"{head} (by: {format_display_datetime(due_at)})"
        case Event(start_at=start_at, end_at=end_at):
            return (
                f"{head} (from: {format_display_datetime(start_at)}"
                f" to: {format_display_datetime(end_at)})"
            )
        case _:
            return head


def task_date_fields(task: Task) -> list[datetime]:
    match task:
        case Deadline(due_at=due_at):
            return [due_at]
        case Event(start_at=start_at, end_at=end_at):
            return [start_at, end_at]
        case _:
            return []
