"""Authentication API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_auth_service, get_current_user_id
from src.schemas.auth import AuthResponse, ProfileResponse, UserLogin, UserRegister, UserResponse
from src.schemas.common import ApiResponse
from src.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    user_data: UserRegister,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Register a new user."""
    token, user = auth_service.register(user_data.email, user_data.password, user_data.name)

    return ApiResponse[AuthResponse](
        message="User registered successfully",
        data=AuthResponse(token=token, user=UserResponse.model_validate(user)),
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    credentials: UserLogin,
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Login with email and password."""
    token, user = auth_service.login(credentials.email, credentials.password)

    return ApiResponse[AuthResponse](
        message="Login successful",
        data=AuthResponse(token=token, user=UserResponse.model_validate(user)),
    )


@router.get("/profile", response_model=ApiResponse[ProfileResponse])
def get_profile(
    user_id: Annotated[int, Depends(get_current_user_id)],
    auth_service: Annotated[AuthService, Depends(get_auth_service)],
):
    """Get current user information."""
    user = auth_service.get_profile(user_id)

    return ApiResponse[ProfileResponse](
        message="Profile retrieved successfully",
        data=ProfileResponse.model_validate(user),
    )
