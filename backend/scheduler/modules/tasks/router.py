import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from scheduler.db import GetDb
from scheduler.modules.auth.deps import NowUtc, RequireAuthenticated
from scheduler.modules.nextdate.errors import NextDateError
from scheduler.modules.tasks.schemas import (
    TaskCreate,
    TaskCreateResponse,
    TaskListResponse,
    TaskOut,
    TaskUpdate,
)
from scheduler.modules.tasks.services import (
    CompleteTask,
    CreateTask,
    DeleteTask,
    GetTask,
    ListTasks,
    ParseTaskId,
    TaskNotFoundError,
    TaskValidationError,
    UpdateTask,
)

router = APIRouter(prefix="/api", tags=["tasks"], dependencies=[Depends(RequireAuthenticated)])
logger = logging.getLogger("tasks")


def _handle_db_error(exc: Exception) -> None:
    logger.exception("tasks database error")
    raise HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Tasks storage unavailable",
    ) from exc


def _handle_task_error(exc: Exception) -> None:
    detail = str(exc)
    if isinstance(exc, TaskNotFoundError):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=detail) from exc
    if isinstance(exc, NextDateError):
        logger.info("repeat rule rejected (%s): %s", exc.Kind.value, detail)
    raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=detail) from exc


def _BuildTaskOut(task) -> TaskOut:
    return TaskOut(
        id=str(task.Id),
        date=task.Date,
        title=task.Title,
        comment=task.Comment or "",
        repeat=task.Repeat or "",
    )


@router.post("/task", response_model=TaskCreateResponse)
@router.post("/addtask", response_model=TaskCreateResponse, include_in_schema=False)
def CreateTaskItem(payload: TaskCreate, db: Session = Depends(GetDb)) -> TaskCreateResponse:
    try:
        record = CreateTask(db, payload.title, payload.date, payload.comment, payload.repeat, NowUtc())
        return TaskCreateResponse(id=str(record.Id))
    except (TaskValidationError, NextDateError) as exc:
        _handle_task_error(exc)
    except SQLAlchemyError as exc:
        _handle_db_error(exc)


@router.get("/task", response_model=TaskOut)
def GetTaskItem(id: str = "", db: Session = Depends(GetDb)) -> TaskOut:
    try:
        return _BuildTaskOut(GetTask(db, ParseTaskId(id)))
    except (TaskValidationError, TaskNotFoundError) as exc:
        _handle_task_error(exc)
    except SQLAlchemyError as exc:
        _handle_db_error(exc)


@router.put("/task")
def UpdateTaskItem(payload: TaskUpdate, db: Session = Depends(GetDb)) -> dict:
    try:
        UpdateTask(db, payload.id, payload.title, payload.date, payload.comment, payload.repeat, NowUtc())
        return {}
    except (TaskValidationError, TaskNotFoundError, NextDateError) as exc:
        _handle_task_error(exc)
    except SQLAlchemyError as exc:
        _handle_db_error(exc)


@router.delete("/task")
def DeleteTaskItem(id: str = "", db: Session = Depends(GetDb)) -> dict:
    try:
        DeleteTask(db, ParseTaskId(id))
        return {}
    except (TaskValidationError, TaskNotFoundError) as exc:
        _handle_task_error(exc)
    except SQLAlchemyError as exc:
        _handle_db_error(exc)


@router.get("/tasks", response_model=TaskListResponse)
def ListTaskItems(search: str = "", db: Session = Depends(GetDb)) -> TaskListResponse:
    try:
        tasks = ListTasks(db, search)
        return TaskListResponse(tasks=[_BuildTaskOut(task) for task in tasks])
    except SQLAlchemyError as exc:
        _handle_db_error(exc)


@router.post("/task/done")
def CompleteTaskItem(id: str = "", db: Session = Depends(GetDb)) -> dict:
    try:
        CompleteTask(db, ParseTaskId(id), NowUtc())
        return {}
    except (TaskValidationError, TaskNotFoundError, NextDateError) as exc:
        _handle_task_error(exc)
    except SQLAlchemyError as exc:
        _handle_db_error(exc)
