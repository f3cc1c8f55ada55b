# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from talkie.cli.bootstrap import create_initial_state
from talkie.core.state import AppState


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI modules.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    data_dir = tmp_path / "data"
    return SimpleNamespace(
        app_name="Talkie",
        data_dir=data_dir,
        data_file=data_dir / "Talkie.txt",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState wired to a real TaskStore in tmp_path.

    The flat-file codec is part of what we want to test, so no fake here.
    """
    return create_initial_state(settings=settings)
