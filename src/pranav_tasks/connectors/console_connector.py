# src/pranav_tasks/connectors/console_connector.py

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..ui.render import render_screen
from ..ui.view import BUSY_NOTICE, TaskView

logger = logging.getLogger(__name__)

PROMPT = "What does Pranav need to do today? > "


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}", flush=True)


def run_console_loop(
    view: TaskView,
    *,
    app_name: str = "Pranav AI",
    read_line: Callable[[str], str] = input,
) -> None:
    """
    Interactive front-end: one input line per intent.

    - plain text            -> add (Low priority)
    - /smart <text>         -> Pranav AI Organize
    - /done, /del, /tab ... -> see /help
    - empty line            -> pick up finished AI work and redraw
    """
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type a task and press Enter. Use /help for commands. Use /exit to quit.\n")

    rendered_rev = -1

    while True:
        view.poll()
        if view.revision != rendered_rev:
            print(render_screen(view, app_name), end="\n\n", flush=True)
            rendered_rev = view.revision

        try:
            user_input = read_line(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            view.poll()
            if view.revision == rendered_rev and view.ai_busy:
                _print_ts("Pranav AI is still organizing...")
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(view, user_input, emit=_print_ts)
            if reply is None:
                if view.ai_busy:
                    reply = BUSY_NOTICE
                else:
                    task = view.add(user_input)
                    reply = "" if task is not None else "Nothing added."
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply:
            _print_ts(reply)

    logger.info("Console connector finished.")
