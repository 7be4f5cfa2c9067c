"""Todo model."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.enums import TodoStatus
from src.models.mixins import TimestampMixin


class Todo(Base, TimestampMixin):
    """A to-do entry owned by exactly one user."""

    __tablename__ = "todos"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    status = Column(
        String(20),
        nullable=False,
        default=TodoStatus.PENDING.value,
        server_default=TodoStatus.PENDING.value,
    )

    owner = relationship("User", back_populates="todos")
