"""Pydantic models for the JSON routes."""

from pydantic import BaseModel, ConfigDict, Field

from htmx_todo.state.tasks import Task


class TaskModel(BaseModel):
    """A task as the client scripts see it. The text travels as 'task'."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    text: str = Field(serialization_alias="task")
    done: bool
    editing: bool

    @classmethod
    def from_task(cls, task: Task) -> "TaskModel":
        return cls(id=task.id, text=task.text, done=task.done, editing=task.editing)


class HealthResponse(BaseModel):
    status: str
    tasks: int
    next_id: int
