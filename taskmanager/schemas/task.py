"""Request/response schemas for tasks."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from taskmanager.models.enums import TaskStatus


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255, description="Task title")
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus | None = Field(default=None, description="Defaults to TODO")


class TaskUpdate(BaseModel):
    """Partial update; only non-null fields overwrite the stored task."""

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    status: TaskStatus | None = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None
    status: TaskStatus
    owner_id: int = Field(validation_alias=AliasChoices("user_id", "owner_id"))
    created_at: datetime
    updated_at: datetime
