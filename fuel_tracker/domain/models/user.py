"""User domain model — maps to 'users', 'favorite_stations' and 'price_alerts'."""

from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from fuel_tracker.domain.constants import FuelType
from fuel_tracker.infrastructure.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    phone = Column(String(30), nullable=True)
    role = Column(String(50), nullable=False, default="user")  # user, admin
    is_active = Column(Boolean, default=True)

    # Preferences
    default_city = Column(String(200), nullable=True)
    preferred_fuel_type = Column(String(20), nullable=False, default=FuelType.GASOLINE_95.value)
    email_notifications = Column(Boolean, nullable=False, default=True)
    push_notifications = Column(Boolean, nullable=False, default=False)

    last_login = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    favorites = relationship(
        "FavoriteStation",
        order_by="FavoriteStation.id",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    price_alerts = relationship(
        "PriceAlert",
        order_by="PriceAlert.id",
        cascade="all, delete-orphan",
        back_populates="user",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def preferences(self) -> dict:
        return {
            "default_city": self.default_city,
            "preferred_fuel_type": self.preferred_fuel_type,
            "email_notifications": self.email_notifications,
            "push_notifications": self.push_notifications,
        }

    @property
    def favorite_station_ids(self) -> list[int]:
        return [fav.station_id for fav in self.favorites]

    def __repr__(self):
        return f"<User {self.email}>"


class FavoriteStation(Base):
    """Ordered, weak reference from a user to a station."""

    __tablename__ = "favorite_stations"
    __table_args__ = (UniqueConstraint("user_id", "station_id", name="uq_favorite_user_station"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    station = relationship("Station", lazy="joined")


class PriceAlert(Base):
    # One alert per (station, fuel type) per user is checked by the API only
    __tablename__ = "price_alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    station_id = Column(Integer, ForeignKey("stations.id"), nullable=False)
    fuel_type = Column(String(20), nullable=False)
    target_price = Column(Float, nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    last_triggered = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    user = relationship("User", back_populates="price_alerts")
    station = relationship("Station", lazy="joined")

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<PriceAlert {self.id} {self.fuel_type}<={self.target_price}>"
