"""Todo schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class TodoCreate(BaseModel):
    """Create a new todo.

    ``status`` is a plain string: unknown values fall back to ``pending``.
    """

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    status: str | None = None


class TodoUpdate(BaseModel):
    """Update a todo. Only fields present in the request body are changed."""

    title: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=5000)
    status: str | None = None


class TodoResponse(BaseModel):
    """Todo response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    title: str
    description: str | None
    status: str
    created_at: datetime
    updated_at: datetime


class TodoPageResponse(BaseModel):
    """A page of the user's todos."""

    model_config = ConfigDict(populate_by_name=True)

    items: list[TodoResponse]
    total: int
    page: int
    total_pages: int = Field(..., alias="totalPages")
    limit: int


class TodoDeleteResponse(BaseModel):
    """Identifier of a deleted todo."""

    id: int
