"""FastAPI dependencies for authentication and services."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.services.auth import AuthService
from src.services.todo_service import TodoService

# auto_error is off so a missing header becomes an AuthError with the usual envelope
security = HTTPBearer(auto_error=False)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
) -> AuthService:
    """Get auth service bound to the request session."""
    return AuthService(db)


def get_todo_service(
    db: Annotated[Session, Depends(get_db)],
) -> TodoService:
    """Get todo service bound to the request session."""
    return TodoService(db)


def get_current_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
) -> int:
    """Get the authenticated user's id from the bearer token."""
    token = credentials.credentials if credentials else None
    return auth_service.verify_token(token)
