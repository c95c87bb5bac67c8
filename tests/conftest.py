# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from typing import Callable

import pytest

from models import Task
from storage import MemoryBackend
from task_store import TaskStore

NOW = datetime(2026, 3, 10, 9, 30)


@pytest.fixture()
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture()
def store(backend: MemoryBackend) -> TaskStore:
    return TaskStore(backend)


@pytest.fixture()
def make_task() -> Callable[..., Task]:
    """
    Build a valid Task; keyword arguments override the defaults.
    Ids are sequential per test so they stay readable in failures.
    """
    counter = {"n": 0}

    def _make(**overrides) -> Task:
        counter["n"] += 1
        fields = dict(
            id=f"task-{counter['n']}",
            subject="Math",
            topic="Algebra",
            study_time=1.0,
            deadline=datetime(2026, 3, 11, 18, 0),
            priority="Medium",
            completed=False,
            created_at=NOW,
        )
        fields.update(overrides)
        return Task(**fields)

    return _make
