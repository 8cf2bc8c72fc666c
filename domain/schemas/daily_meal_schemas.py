from datetime import datetime
from typing import Any, List, Optional
from uuid import UUID

from pydantic import Field

from domain.schemas.base import CamelModel


class MealSlotRequest(CamelModel):
    """Catalog ids submitted for one meal slot (order is irrelevant).

    Entries are left untyped: ids that are not valid catalog ids are dropped
    by the service rather than rejected.
    """

    food_items: List[Any] = Field(default_factory=list)
    curries: List[Any] = Field(default_factory=list)


class DailyMealUpsert(CamelModel):
    """Create-or-replace payload for a day's schedule"""

    date: Optional[Any] = Field(
        None, description="Calendar day (YYYY-MM-DD); unparseable values mean today"
    )
    breakfast: Optional[MealSlotRequest] = None
    lunch: Optional[MealSlotRequest] = None
    dinner: Optional[MealSlotRequest] = None


class FoodItemSummary(CamelModel):
    id: UUID
    display_id: str
    name: str
    price: float
    available: bool


class CurrySummary(CamelModel):
    id: UUID
    display_id: str
    name: str
    available: bool


class MealSlotResponse(CamelModel):
    food_items: List[FoodItemSummary] = Field(default_factory=list)
    curries: List[CurrySummary] = Field(default_factory=list)


class CreatorSummary(CamelModel):
    name: str
    email: str


class DailyMealResponse(CamelModel):
    """Schedule as served to clients.

    ``exists`` is false when no active schedule covers the requested day; in
    that case only ``date`` and the empty slots are meaningful.
    """

    id: Optional[UUID] = None
    date: datetime
    breakfast: MealSlotResponse = Field(default_factory=MealSlotResponse)
    lunch: MealSlotResponse = Field(default_factory=MealSlotResponse)
    dinner: MealSlotResponse = Field(default_factory=MealSlotResponse)
    is_active: Optional[bool] = None
    created_by: Optional[UUID] = None
    creator: Optional[CreatorSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    exists: bool = True


class DailyMealEnvelope(CamelModel):
    message: str
    daily_meal: DailyMealResponse


class PaginationMeta(CamelModel):
    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int


class DailyMealHistoryResponse(CamelModel):
    daily_meals: List[DailyMealResponse]
    pagination: PaginationMeta
