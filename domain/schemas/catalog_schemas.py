from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from domain.schemas.base import CamelModel


class FoodItemCreate(CamelModel):
    """Schema for creating a food item.

    Fields are optional at the schema level so the service can report the
    same messages for a missing and for an empty value.
    """

    name: Optional[str] = Field(None, description="Display name, unique ignoring case")
    price: Optional[float] = Field(None, description="Unit price, must be positive")


class FoodItemUpdate(CamelModel):
    name: Optional[str] = None
    price: Optional[float] = None
    available: Optional[bool] = None


class CurryCreate(CamelModel):
    name: Optional[str] = Field(None, description="Display name, unique ignoring case")


class CurryUpdate(CamelModel):
    name: Optional[str] = None
    available: Optional[bool] = None


class FoodItemResponse(CamelModel):
    id: UUID
    display_id: str
    name: str
    price: float
    available: bool
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class CurryResponse(CamelModel):
    id: UUID
    display_id: str
    name: str
    available: bool
    created_by: Optional[UUID] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FoodItemEnvelope(CamelModel):
    message: str
    food_item: FoodItemResponse


class CurryEnvelope(CamelModel):
    message: str
    curry: CurryResponse


class CurryListResponse(CamelModel):
    curries: List[CurryResponse]


class DeletedEntry(CamelModel):
    id: UUID
    name: str


class DeleteEntryResponse(CamelModel):
    message: str
    deleted_item: DeletedEntry
