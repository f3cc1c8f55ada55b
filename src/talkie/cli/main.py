# src/talkie/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state, save_on_exit
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    log_dir = settings.log_dir if settings.log_file_enabled else None
    setup_logging(log_dir=log_dir, console_level=console_level)

    logger.info("Starting %s (data_file=%s)...", settings.app_name, settings.data_file)

    state = create_initial_state(settings=settings)
    try:
        run_console_loop(state)
    finally:
        save_on_exit(state)
        logger.info("Bye.")


if __name__ == "__main__":
    main()
