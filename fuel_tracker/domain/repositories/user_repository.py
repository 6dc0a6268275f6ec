"""
User Repository Interface.
Defines specific data access operations for Users.
"""

from typing import List, Optional

from fuel_tracker.domain.repositories.base import BaseRepository
from fuel_tracker.domain.models.user import User


class UserRepository(BaseRepository[User]):
    """Interface for User-specific operations."""

    def get_by_email(self, email: str) -> Optional[User]:
        """Get a user by (case-insensitive) email."""
        ...

    def list_alert_subscribers(self) -> List[User]:
        """Users with at least one active alert and email notifications enabled."""
        ...
