from __future__ import annotations
import re
from pathlib import Path
from typing import Dict, Optional, Protocol
from paths import get_data_dir


class StorageBackend(Protocol):
    """Single-key string storage used by TaskStore."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


def _sanitize_key(key: str) -> str:
    safe = re.sub(r"[^A-Za-z0-9_-]+", "_", key.strip())
    safe = safe.strip("_") or "default"
    return safe[:80]


def write_text_atomic(path: Path, text: str) -> None:
    """
    Atomic write: write to temp file then replace target.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    temp = path.with_suffix(path.suffix + ".tmp")
    temp.write_text(text, encoding="utf-8")
    temp.replace(path)


class JsonFileBackend:
    """
    One JSON file per key inside the data directory.
    Missing files read as None; errors from the filesystem propagate.
    """

    def __init__(self, directory: Path | str | None = None) -> None:
        self.directory = Path(directory) if directory is not None else get_data_dir()
        self.directory.mkdir(parents=True, exist_ok=True)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{_sanitize_key(key)}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        write_text_atomic(self.path_for(key), value)

    def remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class MemoryBackend:
    """Dict-backed storage for tests and throwaway sessions."""

    def __init__(self, initial: Dict[str, str] | None = None) -> None:
        self.data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)
