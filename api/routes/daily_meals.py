"""Daily meal schedule routes"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db, require_admin
from app.config import settings
from domain.models import AppUser
from domain.schemas.daily_meal_schemas import (
    DailyMealEnvelope,
    DailyMealHistoryResponse,
    DailyMealResponse,
    DailyMealUpsert,
)
from services.daily_meal_service import DailyMealService

router = APIRouter(prefix="/daily-meals", tags=["Daily Meals"])
logger = logging.getLogger("canteen.api.daily_meals")


@router.get("", response_model=DailyMealResponse, response_model_exclude_none=True)
def get_daily_meal(
    date: Optional[str] = Query(None, description="Day to show (YYYY-MM-DD), default today"),
    db: Session = Depends(get_db),
):
    """
    Get the active schedule for a day.

    When nothing has been scheduled the response still has the normal shape,
    with empty slots and ``exists: false``.
    """
    return DailyMealService.get_active_schedule_for_date(db, date)


@router.post("", response_model=DailyMealEnvelope, response_model_exclude_none=True)
def save_daily_meal(
    payload: DailyMealUpsert,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """
    Create or replace the schedule for a day (admin only).

    Unavailable or unknown catalog ids are dropped from each slot.

    Example:
        POST /api/daily-meals
        {"date": "2024-06-01",
         "lunch": {"foodItems": ["<food id>"], "curries": ["<curry id>"]}}
    """
    daily_meal = DailyMealService.upsert_schedule(db, payload, admin)
    return {"message": "Daily meal saved successfully", "daily_meal": daily_meal}


@router.get(
    "/history",
    response_model=DailyMealHistoryResponse,
    response_model_exclude_none=True,
)
def get_daily_meal_history(
    page: int = Query(1, ge=1, le=settings.max_page),
    limit: int = Query(settings.history_page_size, ge=1, le=100),
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Paginated list of active schedules, most recent first (admin only)"""
    return DailyMealService.list_history(db, page, limit)


@router.delete("/{daily_meal_id}")
def delete_daily_meal(
    daily_meal_id: UUID,
    admin: AppUser = Depends(require_admin),
    db: Session = Depends(get_db),
):
    """Delete a schedule (admin only)"""
    DailyMealService.delete_schedule(db, daily_meal_id, admin)
    return {"message": "Daily meal deleted successfully"}
