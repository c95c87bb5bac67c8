from __future__ import annotations
from datetime import date
from io import BytesIO
from typing import List
from reportlab.lib import colors
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.platypus import SimpleDocTemplate, Paragraph, Spacer, Table, TableStyle
from models import Task
from views import aggregate_hours, format_date, progress_percent, select_motivational_message, sort_by_priority


def progress_report_pdf(tasks: List[Task], generated_on: date) -> bytes:
    buf = BytesIO()
    doc = SimpleDocTemplate(
        buf,
        pagesize=letter,
        leftMargin=40,
        rightMargin=40,
        topMargin=40,
        bottomMargin=40,
    )
    styles = getSampleStyleSheet()
    elems = []

    percent = progress_percent(tasks)
    hours = aggregate_hours(tasks)
    motivation = select_motivational_message(percent)

    elems.append(Paragraph(f"Study Progress: {format_date(generated_on)}", styles["Title"]))
    elems.append(Spacer(1, 10))
    elems.append(Paragraph(f"{percent}% complete. {motivation.text}", styles["Normal"]))
    elems.append(Paragraph(
        f"Hours: {hours.total:g} total | {hours.completed:g} completed | {hours.remaining:g} remaining",
        styles["Normal"],
    ))
    elems.append(Spacer(1, 12))

    if not tasks:
        elems.append(Paragraph("No tasks yet.", styles["Normal"]))
        doc.build(elems)
        return buf.getvalue()

    elems.append(Paragraph("Tasks by priority", styles["Heading3"]))
    table_data = [["Subject", "Topic", "Hours", "Deadline", "Priority", "Done"]]
    for task in sort_by_priority(tasks):
        table_data.append([
            task.subject,
            task.topic,
            f"{task.study_time:g}",
            format_date(task.deadline),
            task.priority or "-",
            "Yes" if task.completed else "No",
        ])
    table_data.append(["Total", "", f"{hours.total:g}", "", "", ""])

    table = Table(table_data, hAlign="LEFT", colWidths=[110, 140, 50, 90, 60, 40])
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.lightgrey),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("BACKGROUND", (0, -1), (-1, -1), colors.whitesmoke),
        ("ALIGN", (2, 1), (2, -1), "RIGHT"),
    ]))
    elems.append(table)

    doc.build(elems)
    return buf.getvalue()
