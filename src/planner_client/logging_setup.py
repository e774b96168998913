# src/planner_client/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ConsoleNoiseFilter(logging.Filter):
    """Console shows planner_client at any level; httpx/httpcore from WARNING; the rest from ERROR."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("planner_client"):
            return True
        if record.name.startswith(("httpx", "httpcore")):
            return record.levelno >= logging.WARNING
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/planner",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Send session and API logs to stderr and to `<log_dir>/planner.log`.

    The file keeps DEBUG detail of every request/recovery step; the console
    only gets the filtered view. Replaces whatever root handlers are installed,
    so repeated calls do not double the output.
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    logfile = logging.FileHandler(str(log_path / "planner.log"), encoding="utf-8")
    logfile.setLevel(file_level)
    logfile.setFormatter(fmt)
    root.addHandler(logfile)

    # deprecation notices from httpx end up under 'py.warnings'
    logging.captureWarnings(True)

    # httpx logs each request line at INFO, including the URL
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
