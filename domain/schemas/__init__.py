"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.base import CamelModel
from domain.schemas.catalog_schemas import (
    FoodItemCreate,
    FoodItemUpdate,
    FoodItemResponse,
    FoodItemEnvelope,
    CurryCreate,
    CurryUpdate,
    CurryResponse,
    CurryEnvelope,
    CurryListResponse,
    DeleteEntryResponse,
)
from domain.schemas.daily_meal_schemas import (
    MealSlotRequest,
    DailyMealUpsert,
    MealSlotResponse,
    CreatorSummary,
    DailyMealResponse,
    DailyMealEnvelope,
    DailyMealHistoryResponse,
    PaginationMeta,
)
from domain.schemas.order_schemas import (
    OrderLineRequest,
    OrderCreate,
    StatusUpdateRequest,
    OrderItemResponse,
    UserSummary,
    OrderResponse,
    OrderEnvelope,
    OrderListResponse,
)

__all__ = [
    "CamelModel",
    # Catalog schemas
    "FoodItemCreate",
    "FoodItemUpdate",
    "FoodItemResponse",
    "FoodItemEnvelope",
    "CurryCreate",
    "CurryUpdate",
    "CurryResponse",
    "CurryEnvelope",
    "CurryListResponse",
    "DeleteEntryResponse",
    # Schedule schemas
    "MealSlotRequest",
    "DailyMealUpsert",
    "MealSlotResponse",
    "CreatorSummary",
    "DailyMealResponse",
    "DailyMealEnvelope",
    "DailyMealHistoryResponse",
    "PaginationMeta",
    # Order schemas
    "OrderLineRequest",
    "OrderCreate",
    "StatusUpdateRequest",
    "OrderItemResponse",
    "UserSummary",
    "OrderResponse",
    "OrderEnvelope",
    "OrderListResponse",
]
