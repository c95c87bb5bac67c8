from __future__ import annotations
import math
from datetime import date, datetime
from typing import Iterable, List, Optional
from models import CompletionFilter, HoursSummary, Motivation, Priority, Task, TaskCounts


_PRIORITY_RANK = {
    Priority.HIGH.value.lower(): 1,
    Priority.MEDIUM.value.lower(): 2,
    Priority.LOW.value.lower(): 3,
}
_UNRANKED = 4

_PRIORITY_COLORS = {
    "high": "#FF4757",
    "medium": "#FFA502",
    "low": "#2ED573",
}
_DEFAULT_COLOR = "#747D8C"

# (lowest percent of tier, icon, text), highest tier first; 100 is checked separately.
_MOTIVATION_TIERS = [
    (75, "🔥", "Almost there! Keep pushing!"),
    (50, "💪", "Great progress! Stay focused!"),
    (25, "📈", "Good start! Keep going!"),
]


def local_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        if value.tzinfo:
            value = value.astimezone().replace(tzinfo=None)
        return value.date()
    return value


def priority_rank(priority: Optional[str]) -> int:
    if not priority:
        return _UNRANKED
    return _PRIORITY_RANK.get(str(priority).lower(), _UNRANKED)


def progress_percent(tasks: Iterable[Task]) -> int:
    tasks = list(tasks)
    if not tasks:
        return 0
    done = sum(1 for t in tasks if t.completed)
    # Half rounds up, never to even.
    return int(math.floor(100 * done / len(tasks) + 0.5))


def sort_by_priority(tasks: Iterable[Task]) -> List[Task]:
    # sorted() is stable, so equal ranks keep their input order.
    return sorted(tasks, key=lambda t: priority_rank(t.priority))


def filter_by_completion(tasks: Iterable[Task], mode: CompletionFilter | str = CompletionFilter.ALL) -> List[Task]:
    mode = CompletionFilter(mode)
    if mode is CompletionFilter.PENDING:
        return [t for t in tasks if not t.completed]
    if mode is CompletionFilter.COMPLETED:
        return [t for t in tasks if t.completed]
    return list(tasks)


def tasks_due_today(tasks: Iterable[Task], reference: date | datetime) -> List[Task]:
    """
    Tasks whose deadline falls on the same local calendar day as `reference`.
    """
    day = local_day(reference)
    return [t for t in tasks if local_day(t.deadline) == day]


def aggregate_hours(tasks: Iterable[Task]) -> HoursSummary:
    # total is built from the two parts so total == completed + remaining holds exactly.
    tasks = list(tasks)
    completed = math.fsum(t.study_time for t in tasks if t.completed)
    remaining = math.fsum(t.study_time for t in tasks if not t.completed)
    return HoursSummary(total=completed + remaining, completed=completed, remaining=remaining)


def task_counts(tasks: Iterable[Task]) -> TaskCounts:
    tasks = list(tasks)
    completed = sum(1 for t in tasks if t.completed)
    return TaskCounts(total=len(tasks), pending=len(tasks) - completed, completed=completed)


def select_motivational_message(percent: int) -> Motivation:
    if percent >= 100:
        return Motivation(icon="🏆", text="Perfect! You've completed all tasks!")
    for threshold, icon, text in _MOTIVATION_TIERS:
        if percent >= threshold:
            return Motivation(icon=icon, text=text)
    if percent > 0:
        return Motivation(icon="🚀", text="You've started! Let's build momentum!")
    return Motivation(icon="📋", text="Add tasks to start tracking progress!")


def greeting_for_hour(hour: int) -> str:
    if hour < 12:
        return "Good Morning"
    if hour < 17:
        return "Good Afternoon"
    return "Good Evening"


def priority_color(priority: Optional[str]) -> str:
    if not priority:
        return _DEFAULT_COLOR
    return _PRIORITY_COLORS.get(str(priority).lower(), _DEFAULT_COLOR)


def format_date(value: date | datetime) -> str:
    """
    Short display date, e.g. "Jan 15, 2026".
    """
    day = local_day(value)
    return f"{day.strftime('%b')} {day.day}, {day.year}"
