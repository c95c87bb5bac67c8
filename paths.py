from __future__ import annotations
import logging
import os
import sys
from pathlib import Path


APP_NAME = "StudyTracker"
DATA_DIR_ENV = "STUDY_TRACKER_DATA_DIR"
LOG_LEVEL_ENV = "STUDY_TRACKER_LOG_LEVEL"


def get_data_dir() -> Path:
    """
    Resolve the directory used for storing local app data.
    Uses an environment override when provided, otherwise falls back to a
    per-OS user data location.
    """
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        base = Path(override).expanduser()
    else:
        home = Path.home()
        platform = sys.platform
        if platform == "darwin":
            base = home / "Library" / "Application Support" / APP_NAME
        elif platform.startswith("win"):
            roaming = os.environ.get("APPDATA")
            base = Path(roaming) / APP_NAME if roaming else home / "AppData" / "Roaming" / APP_NAME
        else:
            base = home / ".local" / "share" / "study-tracker"

    base.mkdir(parents=True, exist_ok=True)
    return base


def get_log_level(default: int = logging.INFO) -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default
