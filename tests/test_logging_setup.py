# tests/test_logging_setup.py

import logging
from pathlib import Path

from logging_setup import setup_logging


def test_file_gets_everything_console_filters_third_party(tmp_path: Path) -> None:
    root = logging.getLogger()
    saved = list(root.handlers)
    try:
        log_file = setup_logging(log_dir=tmp_path / "logs", console_level="WARNING")
        logging.getLogger("store.task_store").debug("own debug line")
        logging.getLogger("urllib3").info("third party line")
        for h in root.handlers:
            h.flush()

        assert log_file == tmp_path / "logs" / "taskboard.log"
        text = log_file.read_text(encoding="utf-8")
        assert "own debug line" in text
        assert "third party line" in text

        console = next(h for h in root.handlers if not isinstance(h, logging.FileHandler))
        assert console.level == logging.WARNING
        record = logging.LogRecord("urllib3", logging.WARNING, __file__, 1, "x", None, None)
        assert not console.filter(record)
    finally:
        for h in list(root.handlers):
            root.removeHandler(h)
            h.close()
        for h in saved:
            root.addHandler(h)
