"""
Order Repository - Data access for the order ledger
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy import or_
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import Order, OrderItem
from domain.enums import MealType, OrderStatus


class OrderRepository(BaseRepository[Order]):
    """Repository for placed orders"""

    def __init__(self, db: Session):
        super().__init__(db, Order)

    def get_by_id(self, order_id: UUID) -> Optional[Order]:
        return self.db.query(Order).filter(Order.id == order_id).first()

    def get_by_token(self, token: str) -> Optional[Order]:
        return self.db.query(Order).filter(Order.token == token).first()

    def get_by_token_for_user(self, token: str, user_id: UUID) -> Optional[Order]:
        return (
            self.db.query(Order)
            .filter(Order.token == token, Order.user_id == user_id)
            .first()
        )

    def token_exists(self, token: str) -> bool:
        return self.db.query(Order.id).filter(Order.token == token).first() is not None

    def search(
        self,
        skip: int,
        limit: int,
        user_id: Optional[UUID] = None,
        status: Optional[OrderStatus] = None,
        meal_type: Optional[MealType] = None,
        day_start: Optional[datetime] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[Order], int]:
        """Filtered page of orders, newest ``order_date`` first, plus total count.

        ``meal_type`` matches orders with at least one line of that meal;
        ``search`` is a case-insensitive substring match on token or index no.
        """
        query = self.db.query(Order)
        if user_id is not None:
            query = query.filter(Order.user_id == user_id)
        if status is not None:
            query = query.filter(Order.status == status)
        if meal_type is not None:
            query = query.filter(Order.items.any(OrderItem.meal_type == meal_type))
        if day_start is not None:
            query = query.filter(
                Order.order_date >= day_start,
                Order.order_date < day_start + timedelta(days=1),
            )
        if search:
            # % and _ in the search text match themselves
            escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
            pattern = f"%{escaped}%"
            query = query.filter(
                or_(
                    Order.token.ilike(pattern, escape="\\"),
                    Order.user_index_no.ilike(pattern, escape="\\"),
                )
            )

        total = query.count()
        orders = (
            query.order_by(Order.order_date.desc()).offset(skip).limit(limit).all()
        )
        return orders, total
