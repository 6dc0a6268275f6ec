"""
SQLAlchemy Implementation of User Repository.
"""

from typing import List, Optional

from sqlalchemy import func, select

from fuel_tracker.domain.models.user import PriceAlert, User
from fuel_tracker.domain.repositories.user_repository import UserRepository
from fuel_tracker.infrastructure.repositories.base_repository import SQLAlchemyRepository


class SQLAlchemyUserRepository(SQLAlchemyRepository[User], UserRepository):
    """User repository implementation using SQLAlchemy."""

    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(func.lower(User.email) == email.strip().lower()).first()

    def list_alert_subscribers(self) -> List[User]:
        subscriber_ids = select(PriceAlert.user_id).where(PriceAlert.is_active.is_(True)).distinct()
        return (
            self.db.query(User)
            .filter(User.id.in_(subscriber_ids), User.email_notifications.is_(True))
            .order_by(User.id)
            .all()
        )
