# src/talkie/tasks/task_store.py

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from ..core.errors import MalformedRecordError, NoSuchTaskKindError, StorageError
from .task_list import TaskList
from .task_models import (
    Deadline,
    Event,
    Task,
    TaskKind,
    Todo,
    format_stored_datetime,
    parse_stored_datetime,
    task_date_fields,
)

logger = logging.getLogger(__name__)

FIELD_SEP = " | "

_DATE_FIELDS = {
    TaskKind.TODO: 0,
    TaskKind.DEADLINE: 1,
    TaskKind.EVENT: 2,
}


def encode_record(task: Task) -> str:
    """One stored line: `kind | doneFlag | description | [dates...]`."""
    fields = [str(task.kind), "1" if task.is_done else "0", task.description]
    fields.extend(format_stored_datetime(d) for d in task_date_fields(task))
    return FIELD_SEP.join(fields)


def decode_record(line: str) -> Task:
    """
    Rebuild a task from one stored line.

    Only the two leading fields are split from the left and only the kind's
    date fields from the right; whatever sits between is the description,
    so " | " (or a trailing " |") inside a description survives.
    """
    head = line.rstrip("\r\n").split(FIELD_SEP, 2)

    raw_kind = head[0].strip()
    try:
        kind = TaskKind(raw_kind)
    except ValueError:
        raise NoSuchTaskKindError(raw_kind) from None

    n_dates = _DATE_FIELDS[kind]
    rest = head[2].rsplit(FIELD_SEP, n_dates) if len(head) == 3 else []
    if len(rest) != 1 + n_dates:
        raise MalformedRecordError(f"expected {3 + n_dates} fields for kind {kind}")

    done_flag = head[1].strip()
    if done_flag not in ("0", "1"):
        raise MalformedRecordError(f"done flag must be 0 or 1, got {done_flag!r}")

    description = rest[0]

    try:
        dates = [parse_stored_datetime(f) for f in rest[1:]]
        task: Task
        match kind:
            case TaskKind.TODO:
                task = Todo(description)
            case TaskKind.DEADLINE:
                task = Deadline(description, dates[0])
            case TaskKind.EVENT:
                task = Event(description, dates[0], dates[1])
    except ValueError as e:
        raise MalformedRecordError(str(e)) from e

    if done_flag == "1":
        task.mark_done()
    return task


@dataclass(frozen=True, slots=True)
class SkippedRecord:
    line_no: int  # 1-based
    line: str
    reason: str


@dataclass(slots=True)
class LoadReport:
    tasks: TaskList
    skipped: list[SkippedRecord] = field(default_factory=list)


class TaskStore:
    """
    Flat-file task store.

    - one record per line, UTF-8
    - a missing file is not an error: it is created empty
    - malformed lines are skipped (reported in LoadReport), never fatal
    - save() fully rewrites the file via a temp file + os.replace
    """

    def __init__(self, path: str | Path = "data/Talkie.txt") -> None:
        self._path = Path(path)
        logger.info("TaskStore ready path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    def _create_empty(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
        except OSError as e:
            logger.exception("Failed to create task file %s", self._path)
            raise StorageError("Oops! Something went wrong when creating the task file!") from e
        logger.info("Created empty task file %s", self._path)

    def load(self) -> LoadReport:
        if not self._path.exists():
            self._create_empty()
            return LoadReport(tasks=TaskList())

        try:
            data = self._path.read_bytes()
        except OSError as e:
            logger.exception("Failed to read task file %s", self._path)
            raise StorageError("Oops! Something went wrong when reading the task file!") from e

        report = LoadReport(tasks=TaskList())
        # Decode per line: one bad byte costs one record, not the whole file.
        for line_no, raw in enumerate(data.splitlines(), start=1):
            line = raw.decode("utf-8", errors="replace")
            if not line.strip():
                continue
            try:
                text = raw.decode("utf-8")
                report.tasks.add(decode_record(text))
            except UnicodeDecodeError as e:
                logger.warning("Skipping undecodable task record line=%d: %s", line_no, e)
                report.skipped.append(SkippedRecord(line_no=line_no, line=line, reason="not valid UTF-8"))
            except MalformedRecordError as e:
                logger.warning("Skipping task record line=%d: %s", line_no, e)
                report.skipped.append(SkippedRecord(line_no=line_no, line=line, reason=str(e)))

        logger.info(
            "Loaded %d tasks from %s (skipped=%d)",
            report.tasks.size(),
            self._path,
            len(report.skipped),
        )
        return report

    def save(self, tasks: Iterable[Task]) -> int:
        """Overwrite the file with one record per task; returns the record count."""
        lines = [encode_record(t) for t in tasks]
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text("".join(f"{line}\n" for line in lines), "utf-8")
            os.replace(tmp, self._path)
        except OSError as e:
            logger.exception("Failed to save tasks to %s", self._path)
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageError("Oops! Something went wrong when saving the data!") from e

        logger.info("Saved %d tasks to %s", len(lines), self._path)
        return len(lines)
