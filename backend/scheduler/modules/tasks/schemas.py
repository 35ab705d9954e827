from pydantic import BaseModel, Field


class TaskOut(BaseModel):
    id: str
    date: str
    title: str
    comment: str
    repeat: str


class TaskListResponse(BaseModel):
    tasks: list[TaskOut]


class TaskCreate(BaseModel):
    date: str = ""
    title: str = Field(default="", max_length=255)
    comment: str = ""
    repeat: str = Field(default="", max_length=128)


class TaskUpdate(TaskCreate):
    id: int | str | None = None


class TaskCreateResponse(BaseModel):
    id: str
