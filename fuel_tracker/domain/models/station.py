"""Station domain model — maps to the 'stations' and 'fuel_prices' tables."""

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship, attribute_keyed_dict
from sqlalchemy.sql import func

from fuel_tracker.infrastructure.database import Base


class Station(Base):
    __tablename__ = "stations"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False, index=True)
    address = Column(String(500), nullable=False)
    city = Column(String(200), nullable=False, index=True)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    brand = Column(String(50), nullable=False, index=True)  # see constants.Brand
    is_active = Column(Boolean, nullable=False, default=True)
    opening_hours = Column(JSON, nullable=False, default=dict)  # weekday -> "06:00-22:00"
    services = Column(JSON, nullable=False, default=list)
    last_scraped = Column(DateTime(timezone=True), server_default=func.now())
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    fuel_types = relationship(
        "FuelPrice",
        collection_class=attribute_keyed_dict("fuel_type"),
        cascade="all, delete-orphan",
        back_populates="station",
        lazy="selectin",
    )

    __mapper_args__ = {"version_id_col": version}

    @property
    def coordinates(self) -> dict:
        return {"lat": self.latitude, "lng": self.longitude}

    def price_for(self, fuel_type: str) -> float | None:
        """Current price for a fuel type, or None when the station does not sell it."""
        record = self.fuel_types.get(fuel_type)
        return record.price if record is not None else None

    def __repr__(self):
        return f"<Station {self.id} - {self.name}>"


class FuelPrice(Base):
    __tablename__ = "fuel_prices"
    __table_args__ = (UniqueConstraint("station_id", "fuel_type", name="uq_fuel_price_station_type"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    station_id = Column(Integer, ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True)
    fuel_type = Column(String(20), nullable=False)  # see constants.FuelType
    price = Column(Float, nullable=True)
    last_updated = Column(DateTime(timezone=True), nullable=True)

    station = relationship("Station", back_populates="fuel_types")

    def __repr__(self):
        return f"<FuelPrice {self.station_id}:{self.fuel_type}={self.price}>"
