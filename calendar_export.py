from __future__ import annotations
from datetime import timedelta
from typing import Iterable
from icalendar import Calendar, Event as IcsEvent
from models import Task
from views import local_day


def tasks_to_ics(tasks: Iterable[Task]) -> bytes:
    """
    One all-day event per pending task, placed on its deadline day.
    """
    cal = Calendar()
    cal.add("PRODID", "-//Study Tracker//Local//")
    cal.add("version", "2.0")
    cal.add("X-WR-CALNAME", "Study Deadlines")

    for task in tasks:
        if task.completed:
            continue
        day = local_day(task.deadline)
        event = IcsEvent()
        event.add("uid", f"{task.id}@study-tracker")
        event.add("summary", f"Study: {task.subject} - {task.topic}")
        event.add("dtstart", day)
        event.add("dtend", day + timedelta(days=1))
        event.add("dtstamp", task.created_at)
        event.add(
            "description",
            f"{task.study_time:g} hours planned. Priority: {task.priority or 'Unranked'}.",
        )
        cal.add_component(event)

    return cal.to_ical()
