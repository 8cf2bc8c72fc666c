"""
Catalog models: food items and curries offered by the canteen.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    ForeignKey,
    Numeric,
    Boolean,
    Uuid,
    CheckConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base, MONEY_PRECISION, MONEY_SCALE


class FoodItem(Base):
    """Priced menu item that can be ordered"""

    __tablename__ = "food_item"

    DISPLAY_PREFIX = "FD"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    display_id = Column(Text, unique=True, nullable=False)
    name = Column(Text, nullable=False)
    price = Column(Numeric(MONEY_PRECISION, MONEY_SCALE), nullable=False)
    available = Column(Boolean, nullable=False, default=True)
    created_by = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    creator = relationship("AppUser")

    __table_args__ = (CheckConstraint("price > 0", name="ck_food_item_price_pos"),)


class Curry(Base):
    """Curry served alongside the day's meals (not priced separately)"""

    __tablename__ = "curry"

    DISPLAY_PREFIX = "CUR"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    display_id = Column(Text, unique=True, nullable=False)
    name = Column(Text, nullable=False)
    available = Column(Boolean, nullable=False, default=True)
    created_by = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="SET NULL"), nullable=True
    )
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    creator = relationship("AppUser")
