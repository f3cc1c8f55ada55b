# src/talkie/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from ..core.errors import (
    ErrorKind,
    InvalidArgumentError,
    InvalidEventRangeError,
    MissingArgumentError,
    StorageError,
    TalkieError,
    UnknownCommandError,
)
from ..core.state import AppState
from ..tasks.task_list import TaskList
from ..tasks.task_models import Deadline, Event, Task, Todo, parse_input_datetime, render_task

logger = logging.getLogger(__name__)

_INDEX_RE = re.compile(r"[+-]?\d+")

KEPT_UNREADABLE_STORE = "Your task file could not be read earlier, so I left it untouched."


@dataclass(frozen=True, slots=True)
class CommandResult:
    """What one input line produced: a message, maybe an error kind, maybe the end of the session."""

    message: str
    error: ErrorKind | None = None
    exit: bool = False


CommandHandler = Callable[[AppState, str], "str | CommandResult"]


@dataclass(frozen=True, slots=True)
class _Command:
    name: str
    handler: CommandHandler
    help_text: str
    usage: str
    exact: bool


class CommandRegistry:
    """Command registry used by the console connector (todo, list, bye, ...)."""

    def __init__(self) -> None:
        self._commands: dict[str, _Command] = {}
        self._help: dict[str, _Command] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        *,
        usage: str | None = None,
        exact: bool = False,
        aliases: list[str] | None = None,
    ) -> None:
        """
        exact=True means the command takes no arguments: "list" works,
        "list all" is an unknown command.
        """
        key = name.lower()
        cmd = _Command(name=key, handler=handler, help_text=help_text, usage=usage or key, exact=exact)
        self._commands[key] = cmd
        self._help[key] = cmd
        for alias in aliases or []:
            self._commands[alias.lower()] = cmd

    def handle(self, state: AppState, line: str) -> CommandResult:
        """
        Handle one raw input line.

        The leading token picks the command (case-insensitive); the rest of the
        line is passed to the handler untouched apart from outer whitespace.
        Any TalkieError raised by a handler becomes an error result.
        """
        stripped = line.strip()
        parts = stripped.split(None, 1)

        try:
            if not parts:
                raise UnknownCommandError(stripped)

            name = parts[0].lower()
            args = parts[1].strip() if len(parts) > 1 else ""

            cmd = self._commands.get(name)
            if cmd is None or (cmd.exact and args):
                raise UnknownCommandError(stripped)

            logger.debug("Dispatching command=%s args=%r", cmd.name, args)
            out = cmd.handler(state, args)
        except TalkieError as e:
            logger.debug("Command failed kind=%s: %s", e.kind, e.message)
            return CommandResult(message=e.message, error=e.kind, exit=state.terminated)

        if isinstance(out, CommandResult):
            return out
        return CommandResult(message=out, exit=state.terminated)

    def build_help(self) -> str:
        width = max((len(c.usage) for c in self._help.values()), default=0)
        lines = ["Here is what I can do:"]
        for cmd in self._help.values():
            lines.append(f"  {cmd.usage.ljust(width)}  {cmd.help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- helpers ----


def _task_noun(count: int) -> str:
    return "task" if count == 1 else "tasks"


def _numbered(tasks: TaskList) -> str:
    return "\n".join(f"{i}.{render_task(t)}" for i, t in tasks.enumerate_tasks())


def _split_flag(text: str, flag: str) -> tuple[str, str] | None:
    """Split `text` around the first standalone `flag` (e.g. "/by"); None if absent."""
    m = re.search(rf"(?:^|\s){re.escape(flag)}(?:\s|$)", text)
    if m is None:
        return None
    return text[: m.start()].strip(), text[m.end() :].strip()


def _parse_index(command: str, args: str) -> int:
    raw = args.strip()
    if not raw:
        raise MissingArgumentError(command, f"The '{command}' command requires an integer as argument.")
    if not _INDEX_RE.fullmatch(raw):
        raise InvalidArgumentError(command, f"The '{command}' command requires an integer as argument.")
    return int(raw)


def _added(state: AppState, task: Task) -> str:
    size = state.tasks.add(task)
    logger.debug("Task added kind=%s size=%d", task.kind, size)
    return (
        "Got it. I've added this task:\n"
        f"  {render_task(task)}\n"
        f"Now you have {size} {_task_noun(size)} in the list."
    )


# ---- handlers ----


def cmd_help(state: AppState, args: str) -> str:
    return registry.build_help()


def cmd_bye(state: AppState, args: str) -> CommandResult:
    """Save, say goodbye, end the session. A failed save is reported but does not block exit."""
    state.terminate()
    goodbye = "Bye. Hope to see you again soon!"
    if state.load_error:
        # The file on disk was never read; overwriting it would lose it.
        return CommandResult(
            message=f"{KEPT_UNREADABLE_STORE}\n{goodbye}", error=ErrorKind.STORAGE_ERROR, exit=True
        )
    try:
        state.task_store.save(state.tasks)
    except StorageError as e:
        return CommandResult(message=f"{e.message}\n{goodbye}", error=e.kind, exit=True)
    return CommandResult(message=goodbye, exit=True)


def cmd_list(state: AppState, args: str) -> str:
    if state.tasks.is_empty():
        return "There are no tasks in your list!"
    return "Here are the tasks in your list:\n" + _numbered(state.tasks)


def cmd_todo(state: AppState, args: str) -> str:
    if not args:
        raise MissingArgumentError("todo", "The 'description' of todo cannot be empty.")
    return _added(state, Todo(args))


def cmd_deadline(state: AppState, args: str) -> str:
    """deadline <description> /by <yyyy-MM-dd HHmm>"""
    parts = _split_flag(args, "/by")
    if parts is None or not all(parts):
        raise MissingArgumentError(
            "deadline", "The 'description' and 'by' of deadline cannot be empty."
        )
    description, by = parts
    return _added(state, Deadline(description, parse_input_datetime(by)))


def cmd_event(state: AppState, args: str) -> str:
    """event <description> /from <yyyy-MM-dd HHmm> /to <yyyy-MM-dd HHmm>"""
    missing = MissingArgumentError(
        "event", "The 'description', 'from' and 'to' of event cannot be empty."
    )
    head = _split_flag(args, "/from")
    if head is None:
        raise missing
    description, times = head
    tail = _split_flag(times, "/to")
    if tail is None or not description or not all(tail):
        raise missing

    start_at = parse_input_datetime(tail[0])
    end_at = parse_input_datetime(tail[1])
    try:
        task = Event(description, start_at, end_at)
    except InvalidEventRangeError as e:
        # Ordering problem, not a parse failure: nothing is added.
        return str(e)
    return _added(state, task)


def cmd_mark(state: AppState, args: str) -> str:
    task = state.tasks.get(_parse_index("mark", args))
    task.mark_done()
    return f"Nice! I've marked this task as done:\n  {render_task(task)}"


def cmd_unmark(state: AppState, args: str) -> str:
    task = state.tasks.get(_parse_index("unmark", args))
    task.mark_not_done()
    return f"OK, I've marked this task as not done yet:\n  {render_task(task)}"


def cmd_delete(state: AppState, args: str) -> str:
    task = state.tasks.remove_at(_parse_index("delete", args))
    size = state.tasks.size()
    return (
        "Noted! I've removed this task:\n"
        f"  {render_task(task)}\n"
        f"Now you have {size} {_task_noun(size)} in the list."
    )


def cmd_find(state: AppState, args: str) -> str:
    if state.tasks.is_empty():
        return "There are no tasks in your list!"
    found = state.tasks.search(args)
    if found.is_empty():
        return "There are no tasks found in your list!"
    return "Here are the matching tasks in your list:\n" + _numbered(found)


registry.register("help", cmd_help, "Show this list of commands.", exact=True)
registry.register("list", cmd_list, "Show every task.", exact=True, aliases=["ls"])
registry.register("todo", cmd_todo, "Add a plain task.", usage="todo <description>")
registry.register(
    "deadline",
    cmd_deadline,
    "Add a task due at a date-time.",
    usage="deadline <description> /by <yyyy-MM-dd HHmm>",
)
registry.register(
    "event",
    cmd_event,
    "Add a task spanning a time range.",
    usage="event <description> /from <yyyy-MM-dd HHmm> /to <yyyy-MM-dd HHmm>",
)
registry.register("mark", cmd_mark, "Mark task number n as done.", usage="mark <n>")
registry.register("unmark", cmd_unmark, "Mark task number n as not done.", usage="unmark <n>")
registry.register("delete", cmd_delete, "Remove task number n.", usage="delete <n>")
registry.register("find", cmd_find, "Show tasks whose description contains keyword.", usage="find <keyword>")
registry.register("bye", cmd_bye, "Save the list and quit.", exact=True, aliases=["exit", "quit"])
