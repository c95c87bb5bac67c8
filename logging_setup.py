from __future__ import annotations
import logging
import sys
from pathlib import Path
from paths import get_data_dir, get_log_level

LOG_FILE_NAME = "study_tracker.log"

_APP_LOGGERS = ("task_store", "storage", "views", "validation", "calendar_export", "pdf_export", "app")


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep our own modules on the console; other libraries
    (streamlit, watchdog, reportlab) only show errors.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        root_name = record.name.split(".", 1)[0]
        if root_name in _APP_LOGGERS or root_name == "__main__":
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path | None = None,
    console_level: int | None = None,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Console handler (filtered) plus a file handler with everything.

    Replaces any handlers already on the root logger, so calling it again
    does not duplicate output. Returns the log file path.
    """
    log_dir = Path(log_dir) if log_dir is not None else get_data_dir()
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME
    if console_level is None:
        console_level = get_log_level()

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

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

    logging.captureWarnings(True)
    return log_file
