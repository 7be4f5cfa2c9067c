"""Enums for model fields."""

from enum import Enum


class TodoStatus(str, Enum):
    """Lifecycle states of a todo."""

    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, value: str | None) -> "TodoStatus | None":
        """Return the matching status, or None if the value is not a known status."""
        if value is None:
            return None
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            return None
