"""Auth API routes — login, register, me."""

from fastapi import APIRouter, Depends, status

from fuel_tracker.application.services.auth_service import (
    authenticate_user,
    create_access_token,
    register_user,
)
from fuel_tracker.core.exceptions import UnauthorizedException
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.domain.schemas.auth import LoginRequest, TokenResponse, UserCreate, UserRead
from fuel_tracker.interfaces.api.deps import get_current_user
from fuel_tracker.interfaces.deps import get_user_repository

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/login", response_model=TokenResponse)
def login(body: LoginRequest, users: UserRepository = Depends(get_user_repository)):
    user = authenticate_user(users, body.email, body.password)
    if not user:
        raise UnauthorizedException("Invalid email or password")

    access_token = create_access_token(data={"sub": user.email, "role": user.role})

    return TokenResponse(
        access_token=access_token,
        user=UserRead.model_validate(user),
    )


@router.post("/register", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register(body: UserCreate, users: UserRepository = Depends(get_user_repository)):
    return UserRead.model_validate(register_user(users, body))


@router.get("/me", response_model=UserRead)
def get_me(user: User = Depends(get_current_user)):
    return UserRead.model_validate(user)
