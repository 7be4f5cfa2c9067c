"""Response envelope shared by all endpoints."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Successful response envelope."""

    status: Literal["success"] = "success"
    message: str
    data: T | None = None


class ApiErrorResponse(BaseModel):
    """Failure response envelope."""

    status: Literal["error"] = "error"
    message: str
    error: Any = None
