"""
Daily schedule model: which catalog entries are served at each meal of a day.
"""

from sqlalchemy import (
    Column,
    TIMESTAMP,
    DateTime,
    ForeignKey,
    Boolean,
    Uuid,
    JSON,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


def empty_slot() -> dict:
    return {"foodItems": [], "curries": []}


class DailyMeal(Base):
    """Per-date meal schedule.

    Each slot column stores ``{"foodItems": [id, ...], "curries": [id, ...]}``
    with ids as strings. References are not foreign keys: a catalog entry may
    be deleted while still listed here, and readers skip it.
    """

    __tablename__ = "daily_meal"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    date = Column(DateTime, nullable=False)  # local midnight
    breakfast = Column(JSON, nullable=False, default=empty_slot)
    lunch = Column(JSON, nullable=False, default=empty_slot)
    dinner = Column(JSON, nullable=False, default=empty_slot)
    is_active = Column(Boolean, nullable=False, default=True)
    created_by = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    creator = relationship("AppUser")

    __table_args__ = (
        UniqueConstraint("date", "is_active", name="uq_daily_meal_date_active"),
    )

    def slot(self, meal_type: str) -> dict:
        return getattr(self, meal_type) or empty_slot()
