"""SQLAlchemy models for the place catalog and key-value preferences."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, Float, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from place_search.db.base import Base
from place_search.domain.models import LocationRecord


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Location(Base):
    __tablename__ = "locations"

    name: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    latitude: Mapped[float] = mapped_column(Float, nullable=False)
    longitude: Mapped[float] = mapped_column(Float, nullable=False)

    def to_record(self) -> LocationRecord:
        return LocationRecord(
            name=self.name,
            address=self.address,
            category=self.category,
            latitude=self.latitude,
            longitude=self.longitude,
        )


class Preference(Base):
    __tablename__ = "preferences"
    __table_args__ = (UniqueConstraint("key", name="uq_preferences_key"),)

    key: Mapped[str] = mapped_column(String(128), nullable=False)
    value: Mapped[str] = mapped_column(Text, nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utc_now, onupdate=utc_now
    )


__all__ = ["Location", "Preference"]
