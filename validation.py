from __future__ import annotations
import math
from datetime import date, datetime, time
from typing import Any, Dict, Optional
from uuid import uuid4
from models import Priority, Task
from views import local_day


class TaskValidationError(ValueError):
    """Raised by create_task; `errors` maps field name to message."""

    def __init__(self, errors: Dict[str, str]) -> None:
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))


def new_task_id() -> str:
    return str(uuid4())


def normalize_priority(value: Any) -> Priority:
    if isinstance(value, Priority):
        return value
    text = str(value or "").strip().lower()
    for p in Priority:
        if p.value.lower() == text:
            return p
    return Priority.MEDIUM


def parse_study_time(value: Any) -> Optional[float]:
    """
    Hours as a finite float, or None when the input is not a number.
    """
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    return number if math.isfinite(number) else None


def _to_datetime(value: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime.combine(value, time.min)


def validate_task_input(
    subject: Any,
    topic: Any,
    study_time: Any,
    deadline: date | datetime | None,
    today: date | None = None,
) -> Dict[str, str]:
    """
    Check every field and collect one message per invalid field.

    Priority is not checked here: create_task maps anything unrecognised to Medium.
    """
    today = today or date.today()
    errors: Dict[str, str] = {}

    if not str(subject or "").strip():
        errors["subject"] = "Subject name is required"

    if not str(topic or "").strip():
        errors["topic"] = "Topic name is required"

    if study_time is None or (isinstance(study_time, str) and not study_time.strip()):
        errors["study_time"] = "Study time is required"
    else:
        hours = parse_study_time(study_time)
        if hours is None or hours <= 0:
            errors["study_time"] = "Please enter a valid positive number"

    if deadline is None:
        errors["deadline"] = "Deadline is required"
    elif local_day(deadline) < today:
        errors["deadline"] = "Deadline must be today or a future date"

    return errors


def create_task(
    subject: Any,
    topic: Any,
    study_time: Any,
    deadline: date | datetime | None,
    priority: Any = Priority.MEDIUM,
    *,
    today: date | None = None,
    now: datetime | None = None,
) -> Task:
    errors = validate_task_input(subject, topic, study_time, deadline, today)
    if errors:
        raise TaskValidationError(errors)

    return Task(
        id=new_task_id(),
        subject=str(subject).strip(),
        topic=str(topic).strip(),
        study_time=parse_study_time(study_time),
        deadline=_to_datetime(deadline),
        priority=normalize_priority(priority).value,
        completed=False,
        created_at=now or datetime.now(),
    )
