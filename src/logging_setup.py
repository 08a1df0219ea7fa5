# src/logging_setup.py

import logging
import sys
from pathlib import Path


class _ConsoleNoiseFilter(logging.Filter):
    """Keep our own loggers on the console; third-party only from ERROR up."""

    OWN_PREFIXES = ("models", "store", "services", "ui", "app", "__main__")

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.split(".")[0] in self.OWN_PREFIXES:
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir="logs",
    console_level="INFO",
    file_level=logging.DEBUG,
) -> Path:
    """
    Console handler (filtered) + file handler with everything.

    Call once, before the first window is created. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskboard.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    if isinstance(console_level, str):
        console_level = getattr(logging, console_level.upper(), logging.INFO)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
    return log_file
