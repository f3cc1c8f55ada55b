# src/talkie/core/errors.py

"""
Error taxonomy.

Command-level errors (TalkieError subclasses) are recoverable: the command
registry turns them into a CommandResult and the console keeps going.
Record-level errors (MalformedRecordError) only ever skip one stored line.
"""

from __future__ import annotations

from enum import StrEnum


class ErrorKind(StrEnum):
    UNKNOWN_COMMAND = "unknown_command"
    MISSING_ARGUMENT = "missing_argument"
    INVALID_ARGUMENT = "invalid_argument"
    NO_TASK_FOUND = "no_task_found"
    BAD_DATETIME = "bad_datetime"
    STORAGE_ERROR = "storage_error"


class TalkieError(Exception):
    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownCommandError(TalkieError):
    kind = ErrorKind.UNKNOWN_COMMAND

    def __init__(self, line: str) -> None:
        super().__init__(
            f"OOPS! I'm sorry, but I don't know what '{line}' means :-( Type 'help' to see what I can do."
        )
        self.line = line


class MissingArgumentError(TalkieError):
    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, command: str, detail: str) -> None:
        super().__init__(f"OOPS! The '{command}' command is missing something. {detail}")
        self.command = command


class InvalidArgumentError(TalkieError):
    kind = ErrorKind.INVALID_ARGUMENT

    def __init__(self, command: str, detail: str) -> None:
        super().__init__(f"OOPS! Invalid argument for '{command}'. {detail}")
        self.command = command


class NoTaskFoundError(TalkieError):
    kind = ErrorKind.NO_TASK_FOUND

    def __init__(self, index: int, size: int) -> None:
        if size == 0:
            hint = "Your list is empty."
        elif size == 1:
            hint = "The only valid task number is 1."
        else:
            hint = f"Pick a task number from 1 to {size}."
        super().__init__(f"OOPS! There is no task number {index} in your list. {hint}")
        self.index = index
        self.size = size


class BadDateTimeError(TalkieError):
    kind = ErrorKind.BAD_DATETIME

    def __init__(self, text: str) -> None:
        super().__init__("Please enter the time in the format of <yyyy-MM-dd HHmm>!")
        self.text = text


class StorageError(TalkieError):
    kind = ErrorKind.STORAGE_ERROR


class MalformedRecordError(ValueError):
    """A stored line could not be turned back into a task."""


class NoSuchTaskKindError(MalformedRecordError):
    def __init__(self, kind: str) -> None:
        super().__init__(f"no such task kind: {kind!r}")
        self.task_kind = kind


class InvalidEventRangeError(ValueError):
    def __init__(self) -> None:
        super().__init__("The end time cannot be before the start time!")
