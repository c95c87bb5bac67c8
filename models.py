from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Priority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class CompletionFilter(str, Enum):
    ALL = "all"
    PENDING = "pending"
    COMPLETED = "completed"


class Task(BaseModel):
    # Persisted with camelCase keys: studyTime, createdAt.
    # Strings are stripped before min_length is checked, so blank text is rejected.
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, str_strip_whitespace=True)

    id: str
    subject: str = Field(min_length=1)
    topic: str = Field(min_length=1)
    study_time: float = Field(gt=0, allow_inf_nan=False)
    deadline: datetime
    priority: Optional[str] = Priority.MEDIUM.value
    completed: bool = False
    created_at: datetime


def field_names_by_key() -> Dict[str, str]:
    """
    Map both python names and persisted aliases of Task fields to the python name.
    """
    out: Dict[str, str] = {}
    for name, info in Task.model_fields.items():
        out[name] = name
        if info.alias:
            out[info.alias] = name
    return out


class HoursSummary(BaseModel):
    total: float = 0.0
    completed: float = 0.0
    remaining: float = 0.0


class TaskCounts(BaseModel):
    total: int = 0
    pending: int = 0
    completed: int = 0


class Motivation(BaseModel):
    icon: str
    text: str
