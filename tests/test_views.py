# tests/test_views.py

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from models import CompletionFilter, HoursSummary, TaskCounts
from views import (
    aggregate_hours,
    filter_by_completion,
    format_date,
    greeting_for_hour,
    priority_color,
    priority_rank,
    progress_percent,
    select_motivational_message,
    sort_by_priority,
    task_counts,
    tasks_due_today,
)


def test_progress_percent_empty_is_zero() -> None:
    assert progress_percent([]) == 0


def test_progress_percent_none_and_all_completed(make_task) -> None:
    tasks = [make_task(), make_task(), make_task()]
    assert progress_percent(tasks) == 0
    assert progress_percent([t.model_copy(update={"completed": True}) for t in tasks]) == 100


@pytest.mark.parametrize(
    ("done", "total", "expected"),
    [(1, 3, 33), (2, 3, 67), (1, 8, 13), (1, 200, 1), (199, 200, 100), (1, 2, 50)],
)
def test_progress_percent_rounds_half_up(make_task, done: int, total: int, expected: int) -> None:
    tasks = [make_task(completed=i < done) for i in range(total)]
    assert progress_percent(tasks) == expected


def test_sort_by_priority_example_order(make_task) -> None:
    low, high1, medium, high2 = (
        make_task(priority="Low"),
        make_task(priority="High"),
        make_task(priority="Medium"),
        make_task(priority="High"),
    )
    result = sort_by_priority([low, high1, medium, high2])
    assert [t.id for t in result] == [high1.id, high2.id, medium.id, low.id]


def test_sort_by_priority_is_stable_within_rank(make_task) -> None:
    tasks = [make_task(priority="Medium", subject=f"S{i}") for i in range(6)]
    tasks.insert(3, make_task(priority="High"))
    result = sort_by_priority(tasks)

    mediums = [t.subject for t in result if t.priority == "Medium"]
    assert mediums == [f"S{i}" for i in range(6)]
    assert result[0].priority == "High"


def test_sort_by_priority_puts_unranked_last_and_keeps_input(make_task) -> None:
    odd = make_task(priority="Urgent")
    missing = make_task(priority=None)
    low = make_task(priority="low")
    tasks = [odd, missing, low]

    result = sort_by_priority(tasks)

    assert [t.id for t in result] == [low.id, odd.id, missing.id]
    assert [t.id for t in tasks] == [odd.id, missing.id, low.id]


def test_priority_rank_is_case_insensitive() -> None:
    assert priority_rank("HIGH") == 1
    assert priority_rank("medium") == 2
    assert priority_rank("Low") == 3
    assert priority_rank("") == 4
    assert priority_rank(None) == 4


def test_filter_by_completion_modes(make_task) -> None:
    a, b, c = make_task(), make_task(completed=True), make_task()
    tasks = [a, b, c]

    assert filter_by_completion(tasks, "all") == tasks
    assert filter_by_completion(tasks) == tasks
    assert filter_by_completion(tasks, CompletionFilter.PENDING) == [a, c]
    assert filter_by_completion(tasks, "completed") == [b]


def test_filter_by_completion_rejects_unknown_mode(make_task) -> None:
    with pytest.raises(ValueError):
        filter_by_completion([make_task()], "archived")


def test_tasks_due_today_compares_calendar_day(make_task) -> None:
    reference = datetime(2026, 3, 11, 23, 59)
    morning = make_task(deadline=datetime(2026, 3, 11, 0, 0))
    evening = make_task(deadline=datetime(2026, 3, 11, 22, 0))
    tomorrow = make_task(deadline=datetime(2026, 3, 12, 0, 0))
    yesterday = make_task(deadline=datetime(2026, 3, 10, 23, 59))

    result = tasks_due_today([morning, tomorrow, evening, yesterday], reference)

    assert result == [morning, evening]
    assert tasks_due_today([morning, tomorrow], date(2026, 3, 12)) == [tomorrow]


def test_tasks_due_today_converts_aware_deadlines_to_local(make_task) -> None:
    deadline = datetime(2026, 3, 11, 12, 0, tzinfo=timezone.utc)
    local_day = deadline.astimezone().date()
    task = make_task(deadline=deadline)

    assert tasks_due_today([task], local_day) == [task]
    assert tasks_due_today([task], local_day + timedelta(days=1)) == []


def test_aggregate_hours(make_task) -> None:
    tasks = [make_task(study_time=2, completed=True), make_task(study_time=1.5), make_task(study_time=0.5)]
    summary = aggregate_hours(tasks)

    assert summary == HoursSummary(total=4.0, completed=2.0, remaining=2.0)
    assert summary.total == summary.completed + summary.remaining
    assert aggregate_hours([]) == HoursSummary(total=0, completed=0, remaining=0)


@pytest.mark.parametrize(
    "hours",
    [(0.2, 0.7, 0.1), (0.1, 0.2, 0.3), (0.7, 1.1, 0.45), (2.3, 0.1, 3.3, 0.2)],
)
def test_aggregate_hours_parts_add_up_exactly(make_task, hours) -> None:
    tasks = [make_task(study_time=h, completed=i == 0) for i, h in enumerate(hours)]
    summary = aggregate_hours(tasks)

    assert summary.total == summary.completed + summary.remaining
    assert summary.completed == hours[0]
    assert summary.total == pytest.approx(sum(hours))


def test_task_counts(make_task) -> None:
    tasks = [make_task(completed=True), make_task(), make_task()]
    assert task_counts(tasks) == TaskCounts(total=3, pending=2, completed=1)
    assert task_counts([]) == TaskCounts()


def test_motivational_message_tiers() -> None:
    assert select_motivational_message(100).icon == "🏆"
    assert select_motivational_message(99) != select_motivational_message(100)

    assert select_motivational_message(75) == select_motivational_message(99)
    assert select_motivational_message(74) != select_motivational_message(75)
    assert select_motivational_message(50).text == "Great progress! Stay focused!"
    assert select_motivational_message(49).text == "Good start! Keep going!"
    assert select_motivational_message(25).text == "Good start! Keep going!"
    assert select_motivational_message(24).icon == "🚀"
    assert select_motivational_message(1).icon == "🚀"
    assert select_motivational_message(0).icon == "📋"


@pytest.mark.parametrize(
    ("hour", "expected"),
    [(0, "Good Morning"), (11, "Good Morning"), (12, "Good Afternoon"), (16, "Good Afternoon"), (17, "Good Evening"), (23, "Good Evening")],
)
def test_greeting_for_hour(hour: int, expected: str) -> None:
    assert greeting_for_hour(hour) == expected


def test_priority_color() -> None:
    assert priority_color("High") == "#FF4757"
    assert priority_color("medium") == "#FFA502"
    assert priority_color("LOW") == "#2ED573"
    assert priority_color(None) == priority_color("Urgent") == "#747D8C"


def test_format_date() -> None:
    assert format_date(date(2026, 1, 15)) == "Jan 15, 2026"
    assert format_date(datetime(2026, 11, 3, 20, 15)) == "Nov 3, 2026"


def test_two_task_scenario(store, make_task) -> None:
    tomorrow = datetime(2026, 3, 11, 12, 0)
    math = make_task(subject="Math", topic="Algebra", study_time=2, deadline=tomorrow, priority="High")
    history = make_task(subject="History", topic="WWII", study_time=1, deadline=tomorrow, priority="Low")
    store.add(math)
    store.add(history)
    store.update(math.id, {"completed": True})

    tasks = store.get_all()
    assert progress_percent(tasks) == 50
    assert aggregate_hours(tasks) == HoursSummary(total=3, completed=2, remaining=1)
    assert [t.subject for t in sort_by_priority(tasks)] == ["Math", "History"]
