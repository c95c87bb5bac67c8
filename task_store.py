from __future__ import annotations
import json
import logging
import threading
from typing import Any, Iterable, List, Mapping
from pydantic import TypeAdapter
from models import Task, field_names_by_key
from storage import StorageBackend

logger = logging.getLogger(__name__)

DEFAULT_KEY = "smart_study_planner_tasks"
IMMUTABLE_FIELDS = frozenset({"id", "created_at"})

_TASK_LIST = TypeAdapter(List[Task])


class TaskStore:
    """
    Whole-collection task persistence over a single storage key.

    Every mutation is one full read plus one full write. Mutations run under a
    single lock so overlapping callers (streamlit runs each session in its own
    thread) are applied one at a time instead of overwriting each other.

    Backend and serialization failures never leave the store: reads degrade to
    an empty list, writes return False. Both are logged.
    """

    def __init__(self, backend: StorageBackend, key: str = DEFAULT_KEY) -> None:
        self._backend = backend
        self._key = key
        self._lock = threading.RLock()
        logger.info("TaskStore ready backend=%s key=%s", type(backend).__name__, key)

    @property
    def key(self) -> str:
        return self._key

    # ---- low-level helpers ----

    def _read(self) -> List[Task]:
        raw = self._backend.get(self._key)
        if raw is None or not raw.strip():
            return []
        records = json.loads(raw)
        if not isinstance(records, list):
            raise ValueError(f"expected a JSON array under {self._key!r}, got {type(records).__name__}")
        for record in records:
            # Records written without a priority sort as unranked.
            if isinstance(record, dict):
                record.setdefault("priority", None)
        return _TASK_LIST.validate_python(records)

    def _write(self, tasks: Iterable[Task]) -> None:
        payload = _TASK_LIST.dump_json(list(tasks), by_alias=True, indent=2)
        self._backend.set(self._key, payload.decode("utf-8"))

    @staticmethod
    def _clean_changes(fields: Mapping[str, Any]) -> dict[str, Any]:
        names = field_names_by_key()
        changes: dict[str, Any] = {}
        for key, value in fields.items():
            name = names.get(key)
            if name is None:
                logger.warning("Ignoring unknown task field %r", key)
                continue
            if name in IMMUTABLE_FIELDS:
                logger.warning("Ignoring update to immutable task field %r", key)
                continue
            changes[name] = value
        return changes

    # ---- public API ----

    def get_all(self) -> List[Task]:
        try:
            return self._read()
        except Exception:
            logger.exception("Failed to load tasks key=%s; returning empty list.", self._key)
            return []

    def save_all(self, tasks: Iterable[Task]) -> bool:
        with self._lock:
            try:
                self._write(tasks)
                return True
            except Exception:
                logger.exception("Failed to save tasks key=%s", self._key)
                return False

    def add(self, task: Task) -> bool:
        with self._lock:
            try:
                tasks = self._read()
                if any(t.id == task.id for t in tasks):
                    logger.warning("Refusing to add task with duplicate id=%s", task.id)
                    return False
                tasks.append(task)
                self._write(tasks)
                logger.debug("Task added id=%s subject=%s", task.id, task.subject)
                return True
            except Exception:
                logger.exception("Failed to add task id=%s", task.id)
                return False

    def update(self, task_id: str, fields: Mapping[str, Any]) -> bool:
        """
        Shallow-overwrite the given fields of one task.

        Keys may be python names (study_time) or persisted names (studyTime).
        An unknown id is a successful no-op.
        """
        changes = self._clean_changes(fields)
        with self._lock:
            try:
                tasks = self._read()
                found = False
                updated: List[Task] = []
                for task in tasks:
                    if task.id == task_id:
                        task = Task.model_validate({**task.model_dump(), **changes})
                        found = True
                    updated.append(task)
                if not found:
                    logger.debug("No task id=%s to update; collection unchanged.", task_id)
                    return True
                self._write(updated)
                return True
            except Exception:
                logger.exception("Failed to update task id=%s", task_id)
                return False

    def toggle_completed(self, task_id: str) -> bool:
        with self._lock:
            try:
                tasks = self._read()
            except Exception:
                logger.exception("Failed to load tasks to toggle id=%s", task_id)
                return False
            current = next((t for t in tasks if t.id == task_id), None)
            if current is None:
                logger.debug("No task id=%s to toggle.", task_id)
                return True
            return self.update(task_id, {"completed": not current.completed})

    def delete(self, task_id: str) -> bool:
        with self._lock:
            try:
                tasks = self._read()
                kept = [t for t in tasks if t.id != task_id]
                if len(kept) == len(tasks):
                    logger.debug("No task id=%s to delete; collection unchanged.", task_id)
                    return True
                self._write(kept)
                logger.debug("Task deleted id=%s", task_id)
                return True
            except Exception:
                logger.exception("Failed to delete task id=%s", task_id)
                return False

    def clear(self) -> bool:
        with self._lock:
            try:
                self._backend.remove(self._key)
                logger.info("Cleared all tasks key=%s", self._key)
                return True
            except Exception:
                logger.exception("Failed to clear tasks key=%s", self._key)
                return False
