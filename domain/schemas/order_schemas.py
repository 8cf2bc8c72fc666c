from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field

from domain.enums import MealType, OrderStatus
from domain.schemas.base import CamelModel


class OrderLineRequest(CamelModel):
    """One cart line as submitted by the client.

    ``name`` and ``price`` are accepted for display purposes only; pricing
    always comes from the catalog.
    """

    food_item_id: Optional[str] = None
    name: Optional[str] = None
    price: Optional[float] = None
    quantity: Optional[Any] = None
    meal_type: Optional[str] = None


class OrderCreate(CamelModel):
    """Cart submission. Field rules are checked by the intake service in a
    fixed order so the first failing rule decides the error message."""

    items: Optional[List[OrderLineRequest]] = None
    time_slot: Optional[str] = None
    total_amount: Optional[float] = None
    token: Optional[str] = Field(None, description="Pickup token, e.g. #12345")
    notes: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    status: Optional[str] = None


class OrderItemResponse(CamelModel):
    food_item_id: UUID
    name: str
    price: float
    quantity: int
    meal_type: MealType


class UserSummary(CamelModel):
    """Contact details of the account that placed an order"""

    name: str
    email: str
    index_no: str


class OrderResponse(CamelModel):
    id: UUID
    user_id: UUID
    user_index_no: str
    user: Optional[UserSummary] = None
    items: List[OrderItemResponse]
    time_slot: str
    total_amount: float
    token: str
    status: OrderStatus
    order_date: datetime
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class OrderEnvelope(CamelModel):
    message: Optional[str] = None
    order: OrderResponse


class OrderListResponse(CamelModel):
    orders: List[OrderResponse]
    total_pages: int
    current_page: int
    total_orders: int
