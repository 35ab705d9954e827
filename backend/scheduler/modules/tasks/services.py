from __future__ import annotations

from datetime import date, datetime
import logging

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from scheduler.modules.nextdate.rules import ParseRule
from scheduler.modules.nextdate.services import NextDate
from scheduler.modules.tasks.models import Task
from scheduler.utils.dates import FormatCompactDate, ParseCompactDate, ParseDottedDate, ToCalendarDate

DEFAULT_LIST_LIMIT = 50
TODAY_KEYWORD = "today"

logger = logging.getLogger("tasks")


class TaskNotFoundError(ValueError):
    pass


class TaskValidationError(ValueError):
    pass


def ParseTaskId(value) -> int:
    if value is None or value == "":
        raise TaskValidationError("ID is required")
    if isinstance(value, bool):
        raise TaskValidationError("Invalid ID format")
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise TaskValidationError("Invalid ID format") from exc


def _RequireTitle(title: str | None) -> str:
    cleaned = (title or "").strip()
    if not cleaned:
        raise TaskValidationError("Task title is required")
    return cleaned


def _ParseTaskDate(value: str) -> date:
    try:
        return ParseCompactDate(value)
    except ValueError as exc:
        raise TaskValidationError("Invalid date format, use YYYYMMDD") from exc


def _ValidateRepeat(repeat: str) -> None:
    if repeat:
        ParseRule(repeat)


def ResolveTaskDate(date_value: str, repeat: str, now: date | datetime) -> str:
    """Pick the stored date for a new task.

    Empty or ``today`` means today. A past date moves forward: to the next
    occurrence when the task repeats, otherwise to today. Today itself is not
    treated as past.
    """
    today = ToCalendarDate(now)
    if not date_value or date_value.lower() == TODAY_KEYWORD:
        return FormatCompactDate(today)

    parsed = _ParseTaskDate(date_value)
    if parsed >= today:
        return date_value
    if repeat:
        return NextDate(today, date_value, repeat)
    return FormatCompactDate(today)


def CreateTask(db: Session, title: str, date_value: str, comment: str, repeat: str, now: datetime) -> Task:
    cleaned_title = _RequireTitle(title)
    _ValidateRepeat(repeat)
    resolved_date = ResolveTaskDate(date_value, repeat, now)

    record = Task(Date=resolved_date, Title=cleaned_title, Comment=comment or "", Repeat=repeat or "")
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("task %s added for %s (repeat=%r)", record.Id, record.Date, record.Repeat)
    return record


def GetTask(db: Session, task_id: int) -> Task:
    record = db.query(Task).filter(Task.Id == task_id).first()
    if not record:
        raise TaskNotFoundError("Task not found")
    return record


def UpdateTask(
    db: Session,
    task_id,
    title: str,
    date_value: str,
    comment: str,
    repeat: str,
    now: datetime,
) -> Task:
    parsed_id = ParseTaskId(task_id)
    cleaned_title = _RequireTitle(title)
    if date_value:
        _ParseTaskDate(date_value)
    else:
        date_value = FormatCompactDate(ToCalendarDate(now))
    _ValidateRepeat(repeat)

    record = GetTask(db, parsed_id)
    record.Title = cleaned_title
    record.Date = date_value
    record.Comment = comment or ""
    record.Repeat = repeat or ""
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("task %s updated", record.Id)
    return record


def DeleteTask(db: Session, task_id: int) -> None:
    record = GetTask(db, task_id)
    db.delete(record)
    db.commit()
    logger.info("task %s deleted", task_id)


def ListTasks(db: Session, search: str | None = None, limit: int = DEFAULT_LIST_LIMIT) -> list[Task]:
    query = db.query(Task)
    search = (search or "").strip()
    if search:
        search_date = ParseDottedDate(search)
        if search_date:
            query = query.filter(Task.Date == FormatCompactDate(search_date))
        else:
            term = f"%{search.lower()}%"
            query = query.filter(or_(func.lower(Task.Title).like(term), func.lower(Task.Comment).like(term)))
    return query.order_by(Task.Date.asc(), Task.Id.asc()).limit(limit).all()


def CompleteTask(db: Session, task_id: int, now: datetime) -> Task | None:
    """Mark a task done.

    One-off tasks are deleted and None is returned. Repeating tasks move to
    their next occurrence after ``now``.
    """
    record = GetTask(db, task_id)
    if not record.Repeat:
        db.delete(record)
        db.commit()
        logger.info("task %s completed and removed", task_id)
        return None

    logger.info("calculating next date for task %s (date=%s, repeat=%s)", task_id, record.Date, record.Repeat)
    record.Date = NextDate(now, record.Date, record.Repeat)
    db.add(record)
    db.commit()
    db.refresh(record)
    logger.info("task %s moved to %s", task_id, record.Date)
    return record
