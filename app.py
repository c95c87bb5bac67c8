from __future__ import annotations
from datetime import date, datetime
import pandas as pd
import streamlit as st

from calendar_export import tasks_to_ics
from logging_setup import setup_logging
from models import CompletionFilter, Priority, Task
from pdf_export import progress_report_pdf
from storage import JsonFileBackend
from task_store import TaskStore
from validation import TaskValidationError, create_task
from views import (
    aggregate_hours,
    filter_by_completion,
    format_date,
    greeting_for_hour,
    priority_color,
    progress_percent,
    select_motivational_message,
    sort_by_priority,
    task_counts,
    tasks_due_today,
)


PRIORITY_OPTIONS = [p.value for p in Priority]
ADD_FORM_KEYS = ("add_subject", "add_topic", "add_study_time", "add_priority", "add_deadline")
FILTER_LABELS = {"All": CompletionFilter.ALL, "Pending": CompletionFilter.PENDING, "Completed": CompletionFilter.COMPLETED}

st.set_page_config(page_title="Study Tracker", page_icon="🎓", layout="wide")


@st.cache_resource
def get_store() -> TaskStore:
    setup_logging()
    return TaskStore(JsonFileBackend())


def _queue_toast(message: str) -> None:
    st.session_state.toast_message = message


def _flush_toast() -> None:
    message = st.session_state.pop("toast_message", None)
    if message:
        st.toast(message)


def _save_failed() -> None:
    st.error("Failed to save. Please try again.")


def _priority_badge(priority: str | None) -> str:
    color = priority_color(priority)
    return f"<span style='color:{color}'>●</span> {priority or 'Unranked'}"


def render_home(store: TaskStore, tasks: list[Task]) -> None:
    now = datetime.now()
    st.header(f"{greeting_for_hour(now.hour)}! 🎓")
    st.caption("Ready to study today?")

    percent = progress_percent(tasks)
    counts = task_counts(tasks)
    st.subheader("Your progress")
    st.progress(percent / 100)
    st.write(f"{counts.completed} of {counts.total} tasks completed")

    a, b, c = st.columns(3)
    a.metric("Pending", counts.pending)
    b.metric("Completed", counts.completed)
    c.metric("Total", counts.total)

    st.divider()
    st.subheader("Due today")
    due = sort_by_priority(tasks_due_today(tasks, now))
    if not due:
        st.info("Nothing due today.")
        return
    for task in due:
        checked = st.checkbox(
            f"{task.subject} - {task.topic} ({task.study_time:g}h)",
            value=task.completed,
            key=f"due_done_{task.id}",
        )
        if checked != task.completed:
            if store.update(task.id, {"completed": checked}):
                st.rerun()
            else:
                _save_failed()


def render_add_task(store: TaskStore) -> None:
    st.header("Add task")
    errors = st.session_state.pop("add_task_errors", {})

    with st.form("add_task_form", clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            subject = st.text_input("Subject", placeholder="Math", key="add_subject")
            study_time = st.text_input("Study time (hours)", placeholder="2", key="add_study_time")
            priority = st.radio("Priority", PRIORITY_OPTIONS, index=1, horizontal=True, key="add_priority")
        with col2:
            topic = st.text_input("Topic", placeholder="Algebra", key="add_topic")
            deadline = st.date_input("Deadline", value=date.today(), min_value=date.today(), key="add_deadline")
        for message in errors.values():
            st.warning(message)
        submitted = st.form_submit_button("Add task", type="primary")

    if not submitted:
        return
    try:
        task = create_task(subject, topic, study_time, deadline, priority, today=date.today())
    except TaskValidationError as e:
        st.session_state.add_task_errors = e.errors
        st.rerun()
        return
    if store.add(task):
        # Inputs keep their values after a failed submit; reset them only once saved.
        for key in ADD_FORM_KEYS:
            st.session_state.pop(key, None)
        _queue_toast(f"Task '{task.subject}' added.")
        st.rerun()
    else:
        _save_failed()


def render_task_list(store: TaskStore, tasks: list[Task]) -> None:
    st.header("Tasks")

    counts = task_counts(tasks)
    label = st.radio(
        "Show",
        list(FILTER_LABELS),
        horizontal=True,
        format_func=lambda x: {
            "All": f"All ({counts.total})",
            "Pending": f"Pending ({counts.pending})",
            "Completed": f"Completed ({counts.completed})",
        }[x],
    )
    visible = filter_by_completion(tasks, FILTER_LABELS[label])

    if not visible:
        st.info("No tasks yet. Add your first study task!" if label == "All" else "Try changing the filter to see other tasks.")
    else:
        rows = [
            {
                "id": t.id,
                "Select": False,
                "Done": t.completed,
                "Subject": t.subject,
                "Topic": t.topic,
                "Hours": t.study_time,
                "Deadline": format_date(t.deadline),
                "Priority": t.priority or "Unranked",
            }
            for t in visible
        ]
        df = pd.DataFrame(rows).set_index("id")
        edited = st.data_editor(
            df,
            hide_index=True,
            use_container_width=True,
            column_config={
                "Select": st.column_config.CheckboxColumn("Select"),
                "Done": st.column_config.CheckboxColumn("Done"),
                "Hours": st.column_config.NumberColumn("Hours", format="%.1f"),
            },
            disabled=["Subject", "Topic", "Hours", "Deadline", "Priority"],
            key=f"tasks_editor_{label}",
        )
        edited_records = edited.reset_index().to_dict("records")
        by_id = {t.id: t for t in visible}
        changed = [
            (row["id"], bool(row.get("Done")))
            for row in edited_records
            if row["id"] in by_id and by_id[row["id"]].completed != bool(row.get("Done"))
        ]
        selected_ids = [row["id"] for row in edited_records if row.get("Select")]

        col_save, col_delete = st.columns(2)
        if changed and col_save.button("Save changes", type="primary"):
            ok = all([store.update(task_id, {"completed": done}) for task_id, done in changed])
            if ok:
                _queue_toast("Changes saved.")
                st.rerun()
            else:
                _save_failed()

        if col_delete.button("Delete selected", disabled=not selected_ids):
            ok = all([store.delete(task_id) for task_id in selected_ids])
            if ok:
                _queue_toast("Tasks deleted.")
                st.rerun()
            else:
                _save_failed()

    st.divider()
    if st.button("Clear all tasks", disabled=not tasks):

        @st.dialog("Clear all tasks?")
        def _confirm_clear() -> None:
            st.write("This removes every task and cannot be undone.")
            if st.button("Clear tasks", type="primary"):
                if store.clear():
                    _queue_toast("All tasks cleared.")
                    st.rerun()
                else:
                    _save_failed()

        _confirm_clear()


def render_progress(tasks: list[Task]) -> None:
    st.header("Your progress 📊")

    percent = progress_percent(tasks)
    motivation = select_motivational_message(percent)
    st.metric("Complete", f"{percent}%")
    st.progress(percent / 100)
    st.write(f"{motivation.icon} {motivation.text}")

    hours = aggregate_hours(tasks)
    a, b, c = st.columns(3)
    a.metric("Total hours", f"{hours.total:g}")
    b.metric("Completed hours", f"{hours.completed:g}")
    c.metric("Remaining hours", f"{hours.remaining:g}")

    if tasks:
        st.subheader("By priority")
        for task in sort_by_priority(tasks):
            mark = "✅" if task.completed else "⬜"
            st.markdown(
                f"{mark} **{task.subject}** - {task.topic} · {task.study_time:g}h · "
                f"{format_date(task.deadline)} · {_priority_badge(task.priority)}",
                unsafe_allow_html=True,
            )

    st.divider()
    st.subheader("Exports")
    today = date.today()
    st.download_button(
        "Download deadlines (ICS)",
        data=tasks_to_ics(tasks),
        file_name="study_deadlines.ics",
        mime="text/calendar",
        disabled=not tasks,
    )
    st.download_button(
        "Download progress report (PDF)",
        data=progress_report_pdf(tasks, today),
        file_name=f"study_progress_{today.isoformat()}.pdf",
        mime="application/pdf",
    )


store = get_store()
tasks = store.get_all()

st.title("Smart Study Planner")
_flush_toast()

with st.sidebar:
    st.header("Navigate")
    pages = ["Home", "Add task", "Tasks", "Progress"]
    page = st.radio("Page", pages, key="nav_page", label_visibility="collapsed")
    st.caption("Data is stored locally on this device.")

if page == "Home":
    render_home(store, tasks)
elif page == "Add task":
    render_add_task(store)
elif page == "Tasks":
    render_task_list(store, tasks)
elif page == "Progress":
    render_progress(tasks)
