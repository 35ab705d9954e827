from datetime import datetime, timezone

import pytest

from scheduler.modules.nextdate.errors import InvalidWeekdayError, UnsupportedRuleError
from scheduler.modules.tasks.models import Task
from scheduler.modules.tasks.services import (
    CompleteTask,
    CreateTask,
    DeleteTask,
    GetTask,
    ListTasks,
    ParseTaskId,
    ResolveTaskDate,
    TaskNotFoundError,
    TaskValidationError,
    UpdateTask,
)

NOW = datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc)


def _AddTask(db, title="Task", date_value="20240110", comment="", repeat=""):
    record = Task(Date=date_value, Title=title, Comment=comment, Repeat=repeat)
    db.add(record)
    db.commit()
    db.refresh(record)
    return record


def test_resolve_task_date_today_and_empty():
    assert ResolveTaskDate("", "", NOW) == "20240110"
    assert ResolveTaskDate("Today", "d 3", NOW) == "20240110"


def test_resolve_task_date_keeps_today_and_future():
    assert ResolveTaskDate("20240110", "d 3", NOW) == "20240110"
    assert ResolveTaskDate("20240301", "", NOW) == "20240301"


def test_resolve_task_date_moves_past_dates():
    assert ResolveTaskDate("20240101", "", NOW) == "20240110"
    assert ResolveTaskDate("20240101", "d 4", NOW) == "20240113"


def test_resolve_task_date_rejects_bad_date():
    with pytest.raises(TaskValidationError):
        ResolveTaskDate("2024-01-01", "", NOW)


def test_create_task(db_session):
    record = CreateTask(db_session, "  Call the bank ", "20240101", "before noon", "w 1", NOW)
    assert record.Id is not None
    assert record.Title == "Call the bank"
    assert record.Date == "20240115"
    assert GetTask(db_session, record.Id).Comment == "before noon"


def test_create_task_requires_title(db_session):
    with pytest.raises(TaskValidationError):
        CreateTask(db_session, "   ", "", "", "", NOW)


def test_create_task_validates_rule_even_for_future_dates(db_session):
    with pytest.raises(UnsupportedRuleError):
        CreateTask(db_session, "Plan", "20250101", "", "every day", NOW)
    assert db_session.query(Task).count() == 0


def test_get_task_missing(db_session):
    with pytest.raises(TaskNotFoundError):
        GetTask(db_session, 999)


def test_update_task(db_session):
    record = _AddTask(db_session)
    updated = UpdateTask(db_session, str(record.Id), "Renamed", "20240220", "note", "m -1", NOW)
    assert updated.Title == "Renamed"
    assert updated.Date == "20240220"
    assert updated.Repeat == "m -1"


def test_update_task_empty_date_is_today(db_session):
    record = _AddTask(db_session, date_value="20240301")
    updated = UpdateTask(db_session, record.Id, "Task", "", "", "", NOW)
    assert updated.Date == "20240110"


def test_update_task_validation(db_session):
    record = _AddTask(db_session)
    with pytest.raises(TaskValidationError):
        UpdateTask(db_session, "", "Task", "", "", "", NOW)
    with pytest.raises(TaskValidationError):
        UpdateTask(db_session, "abc", "Task", "", "", "", NOW)
    with pytest.raises(TaskValidationError):
        UpdateTask(db_session, record.Id, "", "", "", "", NOW)
    with pytest.raises(TaskValidationError):
        UpdateTask(db_session, record.Id, "Task", "10.01.2024", "", "", NOW)
    with pytest.raises(InvalidWeekdayError):
        UpdateTask(db_session, record.Id, "Task", "", "", "w 0", NOW)
    with pytest.raises(TaskNotFoundError):
        UpdateTask(db_session, 12345, "Task", "", "", "", NOW)


def test_delete_task(db_session):
    record = _AddTask(db_session)
    DeleteTask(db_session, record.Id)
    with pytest.raises(TaskNotFoundError):
        GetTask(db_session, record.Id)
    with pytest.raises(TaskNotFoundError):
        DeleteTask(db_session, record.Id)


def test_list_tasks_orders_by_date(db_session):
    _AddTask(db_session, title="Later", date_value="20240305")
    _AddTask(db_session, title="Sooner", date_value="20240102")
    _AddTask(db_session, title="Middle", date_value="20240201")
    assert [task.Title for task in ListTasks(db_session)] == ["Sooner", "Middle", "Later"]


def test_list_tasks_limit(db_session):
    for index in range(5):
        _AddTask(db_session, title=f"Task {index}")
    assert len(ListTasks(db_session, limit=3)) == 3


def test_list_tasks_search_text(db_session):
    _AddTask(db_session, title="Gym", comment="Leg DAY")
    _AddTask(db_session, title="Groceries", comment="milk")
    _AddTask(db_session, title="Dentist")
    assert [task.Title for task in ListTasks(db_session, "day")] == ["Gym"]
    assert [task.Title for task in ListTasks(db_session, "GRO")] == ["Groceries"]


def test_list_tasks_search_date(db_session):
    _AddTask(db_session, title="On date", date_value="20240208")
    _AddTask(db_session, title="Other", date_value="20240209")
    assert [task.Title for task in ListTasks(db_session, "08.02.2024")] == ["On date"]


def test_complete_one_off_task_deletes_it(db_session):
    record = _AddTask(db_session)
    assert CompleteTask(db_session, record.Id, NOW) is None
    assert db_session.query(Task).count() == 0


def test_complete_repeating_task_moves_it(db_session):
    record = _AddTask(db_session, date_value="20240110", repeat="d 5")
    moved = CompleteTask(db_session, record.Id, NOW)
    assert moved.Id == record.Id
    assert moved.Date == "20240115"


def test_complete_missing_task(db_session):
    with pytest.raises(TaskNotFoundError):
        CompleteTask(db_session, 42, NOW)


def test_parse_task_id():
    assert ParseTaskId("7") == 7
    assert ParseTaskId(7) == 7
    with pytest.raises(TaskValidationError):
        ParseTaskId(None)
    with pytest.raises(TaskValidationError):
        ParseTaskId("seven")
