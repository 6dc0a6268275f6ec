"""FastAPI dependency — JWT auth middleware."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from fuel_tracker.application.services.auth_service import decode_access_token
from fuel_tracker.core.exceptions import ForbiddenException, UnauthorizedException
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.interfaces.deps import get_user_repository

# Missing credentials are reported through UnauthorizedException below
security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    users: UserRepository = Depends(get_user_repository),
) -> User:
    """Extract and validate the current user from JWT token."""
    if credentials is None:
        raise UnauthorizedException("Not authenticated")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Invalid or expired token")

    email = payload.get("sub")
    if email is None:
        raise UnauthorizedException("Invalid token")

    user = users.get_by_email(email)
    if user is None or not user.is_active:
        raise UnauthorizedException("User not found or inactive")

    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    """Require admin role."""
    if user.role != "admin":
        raise ForbiddenException("Only administrators can access this resource")
    return user
