"""Auth service — JWT token management and password hashing."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from fuel_tracker.config import get_settings
from fuel_tracker.core.exceptions import BusinessRuleViolationException
from fuel_tracker.domain.models.user import User
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.domain.schemas.auth import UserCreate

settings = get_settings()
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def authenticate_user(users: UserRepository, email: str, password: str) -> Optional[User]:
    user = users.get_by_email(email)
    if not user or not verify_password(password, user.password_hash):
        return None
    if not user.is_active:
        return None

    user.last_login = datetime.now(timezone.utc)
    return users.save(user)


def create_user(
    users: UserRepository,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    phone: Optional[str] = None,
    role: str = "user",
) -> User:
    user = User(
        email=email.strip().lower(),
        password_hash=hash_password(password),
        first_name=first_name,
        last_name=last_name,
        phone=phone,
        role=role,
    )
    return users.save(user)


def register_user(users: UserRepository, body: UserCreate) -> User:
    if users.get_by_email(body.email):
        raise BusinessRuleViolationException("Email already registered", {"email": body.email})
    return create_user(
        users,
        email=body.email,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
        phone=body.phone,
    )


def ensure_admin(users: UserRepository, email: str, password: str) -> Optional[User]:
    """Create the bootstrap admin if configured and missing."""
    if not email or not password:
        return None
    existing = users.get_by_email(email)
    if existing:
        return existing
    return create_user(users, email=email, password=password, first_name="Admin", last_name="User", role="admin")
