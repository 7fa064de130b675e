# src/pranav_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, kicks off the one-time motivational
fetch, then runs the console front-end until /exit, EOF or Ctrl+C.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..ui.view import TaskView

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s (log level %s)...", settings.app_name, level_name)

    # IMPORTANT: reuse same settings object
    state = create_initial_state(settings=settings)

    def notify(text: str) -> None:
        print(f"\n[{settings.app_name}] {text}", flush=True)

    view = TaskView(state.task_store, state.assistant, notify=notify)
    view.start_motivation()

    try:
        run_console_loop(view, app_name=settings.app_name)
    finally:
        view.close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
