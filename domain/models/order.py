"""
Order ledger models.
"""

from sqlalchemy import (
    Column,
    Text,
    TIMESTAMP,
    DateTime,
    ForeignKey,
    Numeric,
    Integer,
    Uuid,
    Enum as SQLEnum,
    CheckConstraint,
    Index,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from datetime import datetime
import uuid

from domain.models.database import Base, MONEY_PRECISION, MONEY_SCALE
from domain.enums import OrderStatus, MealType


def _enum_values(enum_cls):
    return [m.value for m in enum_cls]


class Order(Base):
    """A placed order, identified at the counter by its pickup token"""

    __tablename__ = "canteen_order"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid, ForeignKey("app_user.user_id", ondelete="CASCADE"), nullable=False
    )
    user_index_no = Column(Text, nullable=False)
    time_slot = Column(Text, nullable=False)
    total_amount = Column(Numeric(MONEY_PRECISION, MONEY_SCALE), nullable=False)
    token = Column(Text, nullable=False, unique=True)
    status = Column(
        SQLEnum(OrderStatus, values_callable=_enum_values),
        nullable=False,
        default=OrderStatus.PENDING,
    )
    order_date = Column(DateTime, nullable=False, default=datetime.now)
    notes = Column(Text, nullable=False, default="")
    created_at = Column(TIMESTAMP, server_default=func.now())
    updated_at = Column(TIMESTAMP, server_default=func.now(), onupdate=func.now())

    user = relationship("AppUser", lazy="selectin")
    items = relationship(
        "OrderItem",
        back_populates="order",
        cascade="all, delete-orphan",
        order_by="OrderItem.position",
        lazy="selectin",
    )

    __table_args__ = (
        CheckConstraint("total_amount > 0", name="ck_order_total_pos"),
        Index("ix_order_user_date", "user_id", "order_date"),
        Index("ix_order_status", "status"),
    )


class OrderItem(Base):
    """Snapshot of a catalog entry's name and price at purchase time"""

    __tablename__ = "canteen_order_item"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(
        Uuid, ForeignKey("canteen_order.id", ondelete="CASCADE"), nullable=False
    )
    position = Column(Integer, nullable=False)
    food_item_id = Column(Uuid, nullable=False)
    name = Column(Text, nullable=False)
    price = Column(Numeric(MONEY_PRECISION, MONEY_SCALE), nullable=False)
    quantity = Column(Integer, nullable=False)
    meal_type = Column(SQLEnum(MealType, values_callable=_enum_values), nullable=False)

    order = relationship("Order", back_populates="items")

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_order_item_qty_pos"),
    )
