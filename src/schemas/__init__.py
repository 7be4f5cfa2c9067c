"""Pydantic schemas for API requests and responses."""

from src.schemas.auth import AuthResponse, ProfileResponse, UserLogin, UserRegister, UserResponse
from src.schemas.common import ApiErrorResponse, ApiResponse
from src.schemas.todo import (
    TodoCreate,
    TodoDeleteResponse,
    TodoPageResponse,
    TodoResponse,
    TodoUpdate,
)

__all__ = [
    "ApiResponse",
    "ApiErrorResponse",
    "UserRegister",
    "UserLogin",
    "AuthResponse",
    "UserResponse",
    "ProfileResponse",
    "TodoCreate",
    "TodoUpdate",
    "TodoResponse",
    "TodoPageResponse",
    "TodoDeleteResponse",
]
