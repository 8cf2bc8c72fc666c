"""Food item catalog routes"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, require_admin
from domain.enums import CatalogKind
from domain.models import AppUser
from domain.schemas.catalog_schemas import (
    DeleteEntryResponse,
    FoodItemCreate,
    FoodItemEnvelope,
    FoodItemResponse,
    FoodItemUpdate,
)
from services.catalog_service import CatalogService

router = APIRouter(prefix="/food-items", tags=["Food Items"])
logger = logging.getLogger("canteen.api.food_items")

KIND = CatalogKind.FOOD_ITEM


@router.get("", response_model=List[FoodItemResponse])
def list_food_items(
    available: Optional[bool] = Query(None, description="Filter by availability"),
    db: Session = Depends(get_db),
):
    """All food items, newest first"""
    return CatalogService.list_entries(db, KIND, available)


@router.get("/{item_id}", response_model=FoodItemResponse)
def get_food_item(item_id: UUID, db: Session = Depends(get_db)):
    return CatalogService.get_entry(db, KIND, item_id)


@router.post("", response_model=FoodItemEnvelope, status_code=status.HTTP_201_CREATED)
def create_food_item(
    payload: FoodItemCreate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Add a food item (admin only). New items are available by default."""
    item = CatalogService.create_entry(db, KIND, admin, payload.name, payload.price)
    return {
        "message": "Food item created successfully",
        "food_item": FoodItemResponse.model_validate(item),
    }


@router.put("/{item_id}", response_model=FoodItemEnvelope)
def update_food_item(
    item_id: UUID,
    payload: FoodItemUpdate,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    item = CatalogService.update_entry(
        db,
        KIND,
        item_id,
        admin,
        name=payload.name,
        price=payload.price,
        available=payload.available,
    )
    return {
        "message": "Food item updated successfully",
        "food_item": FoodItemResponse.model_validate(item),
    }


@router.patch("/{item_id}/toggle-availability", response_model=FoodItemEnvelope)
def toggle_food_item_availability(
    item_id: UUID,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    item = CatalogService.toggle_availability(db, KIND, item_id, admin)
    state = "available" if item.available else "unavailable"
    return {
        "message": f"Food item marked as {state}",
        "food_item": FoodItemResponse.model_validate(item),
    }


@router.delete("/{item_id}", response_model=DeleteEntryResponse)
def delete_food_item(
    item_id: UUID,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    deleted = CatalogService.delete_entry(db, KIND, item_id, admin)
    return {"message": "Food item deleted successfully", "deleted_item": deleted}
