# src/pranav_tasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """
    Log lines share the terminal with the redrawn task list, so the console
    handler lets little through:
    - pranav_tasks.* records pass at the handler level (Pranav AI failures show up)
    - pranav_tasks.llm.* only from WARNING: it logs every model it tries
    - py.warnings and third-party loggers only from ERROR
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name.startswith("pranav_tasks.llm."):
            return record.levelno >= logging.WARNING
        if name.startswith("pranav_tasks."):
            return True
        # py.warnings included
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/pranav",
    console_level: int = logging.WARNING,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Send filtered records to stderr and everything from file_level up to
    <log_dir>/pranav.log (the place to look when Pranav AI falls back to a
    default). Call before the first log record is emitted.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "pranav.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # setup_logging may run again in tests; never stack handlers.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    # SDK deprecation warnings go to the log file, not over the task list.
    logging.captureWarnings(True)

    # One line per HTTP request is too much even for the file at DEBUG.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)
