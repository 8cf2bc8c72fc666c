"""
Daily Meal Repository - Data access for per-date schedules
"""

from datetime import datetime, timedelta
from typing import List, Optional, Tuple
from uuid import UUID
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import DailyMeal


class DailyMealRepository(BaseRepository[DailyMeal]):
    """Repository for daily schedule documents"""

    def __init__(self, db: Session):
        super().__init__(db, DailyMeal)

    def get_by_id(self, daily_meal_id: UUID) -> Optional[DailyMeal]:
        return self.db.query(DailyMeal).filter(DailyMeal.id == daily_meal_id).first()

    def get_active_for_day(self, day_start: datetime) -> Optional[DailyMeal]:
        """Active schedule whose date falls in [day_start, day_start + 24h)"""
        return (
            self.db.query(DailyMeal)
            .filter(
                DailyMeal.date >= day_start,
                DailyMeal.date < day_start + timedelta(days=1),
                DailyMeal.is_active.is_(True),
            )
            .first()
        )

    def list_active(self, skip: int, limit: int) -> Tuple[List[DailyMeal], int]:
        """Page of active schedules, newest date first, plus the total count"""
        query = self.db.query(DailyMeal).filter(DailyMeal.is_active.is_(True))
        total = query.count()
        items = query.order_by(DailyMeal.date.desc()).offset(skip).limit(limit).all()
        return items, total
