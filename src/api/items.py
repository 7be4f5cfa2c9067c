"""Todo item API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user_id, get_todo_service
from src.schemas.common import ApiResponse
from src.schemas.todo import (
    TodoCreate,
    TodoDeleteResponse,
    TodoPageResponse,
    TodoResponse,
    TodoUpdate,
)
from src.services.todo_service import TodoService

router = APIRouter(prefix="/items", tags=["items"])


@router.get("", response_model=ApiResponse[TodoPageResponse])
def get_items(
    user_id: Annotated[int, Depends(get_current_user_id)],
    todo_service: Annotated[TodoService, Depends(get_todo_service)],
    page: str | None = Query(default=None, description="Page number, starting at 1"),
    limit: str | None = Query(default=None, description="Items per page"),
):
    """Get a page of the current user's todos."""
    # Raw strings: non-numeric values fall back to defaults instead of failing
    result = todo_service.list_todos(user_id, page, limit)

    return ApiResponse[TodoPageResponse](
        message="Todos retrieved successfully",
        data=TodoPageResponse(
            items=[TodoResponse.model_validate(todo) for todo in result.items],
            total=result.total,
            page=result.page,
            total_pages=result.total_pages,
            limit=result.limit,
        ),
    )


@router.get("/{item_id}", response_model=ApiResponse[TodoResponse])
def get_item(
    item_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    todo_service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Get a single todo."""
    todo = todo_service.get_todo(user_id, item_id)
    return ApiResponse[TodoResponse](
        message="Todo retrieved successfully",
        data=TodoResponse.model_validate(todo),
    )


@router.post("", response_model=ApiResponse[TodoResponse], status_code=status.HTTP_201_CREATED)
def create_item(
    item_data: TodoCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    todo_service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Create a new todo."""
    todo = todo_service.create_todo(
        user_id,
        title=item_data.title,
        description=item_data.description,
        status=item_data.status,
    )
    return ApiResponse[TodoResponse](
        message="Todo created successfully",
        data=TodoResponse.model_validate(todo),
    )


@router.put("/{item_id}", response_model=ApiResponse[TodoResponse])
def update_item(
    item_id: int,
    item_data: TodoUpdate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    todo_service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Update a todo. Fields left out of the body keep their values."""
    todo = todo_service.update_todo(user_id, item_id, item_data.model_dump(exclude_unset=True))
    return ApiResponse[TodoResponse](
        message="Todo updated successfully",
        data=TodoResponse.model_validate(todo),
    )


@router.delete("/{item_id}", response_model=ApiResponse[TodoDeleteResponse])
def delete_item(
    item_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    todo_service: Annotated[TodoService, Depends(get_todo_service)],
):
    """Delete a todo permanently."""
    deleted_id = todo_service.delete_todo(user_id, item_id)
    return ApiResponse[TodoDeleteResponse](
        message="Todo deleted successfully",
        data=TodoDeleteResponse(id=deleted_id),
    )
