"""Todo service: ownership-scoped CRUD and pagination."""

import logging
import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.config import Settings, get_settings
from src.exceptions import InternalError, NotFoundError, ValidationError
from src.models.enums import TodoStatus
from src.models.todo import Todo

logger = logging.getLogger(__name__)

# Largest id a BIGINT column can hold
MAX_ROW_ID = 2**63 - 1


@dataclass
class TodoPage:
    """One page of a user's todos."""

    items: list[Todo]
    total: int
    page: int
    limit: int
    total_pages: int


def parse_positive_int(value: Any, default: int) -> int:
    """Parse a query value as a positive int, falling back to ``default``."""
    if value is None or isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except ValueError:
        return default
    return parsed if parsed >= 1 else default


class TodoService:
    """Service for todo operations. Every query is filtered by the owner's id."""

    def __init__(self, db: Session, settings: Settings | None = None):
        self.db = db
        self.settings = settings or get_settings()

    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to {action}: {e}")
            raise InternalError(f"Failed to {action}", details=str(e)) from e

    def list_todos(self, user_id: int, page: Any = None, limit: Any = None) -> TodoPage:
        """Return the requested page of the user's todos, oldest first."""
        page = parse_positive_int(page, 1)
        limit = min(
            parse_positive_int(limit, self.settings.default_page_size),
            self.settings.max_page_size,
        )
        offset = (page - 1) * limit

        query = self.db.query(Todo).filter(Todo.user_id == user_id)
        total = query.count()
        if offset >= total:
            items = []
        else:
            items = query.order_by(Todo.id).offset(offset).limit(limit).all()

        return TodoPage(
            items=items,
            total=total,
            page=page,
            limit=limit,
            total_pages=math.ceil(total / limit),
        )

    def get_todo(self, user_id: int, todo_id: int) -> Todo:
        """Get a todo owned by the user."""
        if not 1 <= todo_id <= MAX_ROW_ID:
            raise NotFoundError("Todo not found")
        todo = self.db.query(Todo).filter(Todo.id == todo_id, Todo.user_id == user_id).first()
        if not todo:
            raise NotFoundError("Todo not found")
        return todo

    def create_todo(
        self,
        user_id: int,
        title: str | None,
        description: str | None = None,
        status: str | None = None,
    ) -> Todo:
        """Create a todo. Unknown or missing status becomes ``pending``."""
        if not title or not title.strip():
            raise ValidationError("Title is required")

        todo = Todo(
            user_id=user_id,
            title=title.strip(),
            description=description,
            status=(TodoStatus.parse(status) or TodoStatus.PENDING).value,
        )
        self.db.add(todo)
        self._commit("create todo")
        self.db.refresh(todo)
        return todo

    def update_todo(self, user_id: int, todo_id: int, changes: dict[str, Any]) -> Todo:
        """Apply a partial update.

        ``changes`` holds only the fields the client sent. A ``None`` title or
        status keeps the stored value; a ``None`` description clears it.
        """
        todo = self.get_todo(user_id, todo_id)

        # Validate everything before touching the row
        updates: dict[str, Any] = {}
        if changes.get("title") is not None:
            if not changes["title"].strip():
                raise ValidationError("Title cannot be empty")
            updates["title"] = changes["title"].strip()
        if changes.get("status") is not None:
            status = TodoStatus.parse(changes["status"])
            if status is None:
                allowed = ", ".join(s.value for s in TodoStatus)
                raise ValidationError(f"Status must be one of: {allowed}")
            updates["status"] = status.value
        if "description" in changes:
            updates["description"] = changes["description"]

        for field, value in updates.items():
            setattr(todo, field, value)
        todo.updated_at = datetime.now(UTC)

        self._commit("update todo")
        self.db.refresh(todo)
        return todo

    def delete_todo(self, user_id: int, todo_id: int) -> int:
        """Permanently delete a todo and return its id."""
        todo = self.get_todo(user_id, todo_id)
        self.db.delete(todo)
        self._commit("delete todo")
        return todo_id
