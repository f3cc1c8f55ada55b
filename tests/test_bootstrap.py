# tests/test_bootstrap.py

from __future__ import annotations

from talkie.cli.bootstrap import create_initial_state, save_on_exit
from talkie.cli.commands import registry
from talkie.core.errors import ErrorKind
from talkie.core.state import AppState, SessionStatus
from talkie.tasks.task_list import TaskList
from talkie.tasks.task_models import Todo

from .fakes import FailingTaskRepo, InMemoryTaskRepo


def test_first_run_creates_directory_and_empty_file(settings) -> None:
    state = create_initial_state(settings=settings)

    assert settings.data_file.exists()
    assert state.tasks.is_empty()
    assert state.status is SessionStatus.RUNNING
    assert state.load_error is None


def test_unreadable_store_starts_empty_with_load_error(settings) -> None:
    settings.data_file.mkdir(parents=True)

    state = create_initial_state(settings=settings)

    assert state.tasks.is_empty()
    assert state.load_error is not None


def test_save_on_exit_swallows_storage_error(settings) -> None:
    repo = FailingTaskRepo()
    state = AppState(settings=settings, task_store=repo)
    state.tasks.add(Todo("kept in memory"))

    save_on_exit(state)

    assert state.terminated
    assert len(repo.saves) == 1


def test_save_on_exit_skips_after_bye(settings) -> None:
    repo = FailingTaskRepo()
    state = AppState(settings=settings, task_store=repo)
    state.terminate()

    save_on_exit(state)

    assert repo.saves == []


def test_bad_byte_in_store_keeps_good_records_through_exit(settings) -> None:
    settings.data_dir.mkdir(parents=True)
    settings.data_file.write_bytes(b"T | 0 | keep me\nD | 0 | me too | 2024-01-01 18:00\nT | 0 | caf\xe9\n")

    state = create_initial_state(settings=settings)
    assert state.load_error is None
    assert state.tasks.size() == 2
    assert len(state.skipped_records) == 1

    save_on_exit(state)

    after = settings.data_file.read_bytes()
    assert after == b"T | 0 | keep me\nD | 0 | me too | 2024-01-01 18:00\n"


def test_save_on_exit_leaves_unread_store_untouched(settings) -> None:
    settings.data_dir.mkdir(parents=True)
    settings.data_file.write_text("T | 0 | precious\n", "utf-8")
    state = create_initial_state(settings=settings)
    state.load_error = "Oops! Something went wrong when reading the task file!"
    state.tasks = TaskList()

    save_on_exit(state)

    assert state.terminated
    assert settings.data_file.read_text("utf-8") == "T | 0 | precious\n"


def test_bye_leaves_unread_store_untouched(settings) -> None:
    repo = InMemoryTaskRepo()
    state = AppState(settings=settings, task_store=repo, load_error="could not read")
    state.tasks.add(Todo("new this session"))

    result = registry.handle(state, "bye")

    assert result.exit
    assert result.error is ErrorKind.STORAGE_ERROR
    assert "untouched" in result.message
    assert repo.saves == []
