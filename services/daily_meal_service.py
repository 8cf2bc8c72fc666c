"""
Daily schedule management: which catalog entries are served per meal per day.
"""

from typing import Any, Dict, List, Optional, Union
import logging
import math
import uuid
from datetime import date, datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.enums import CatalogKind, MealType
from domain.models import AppUser, DailyMeal
from domain.schemas.daily_meal_schemas import (
    CreatorSummary,
    CurrySummary,
    DailyMealHistoryResponse,
    DailyMealResponse,
    DailyMealUpsert,
    FoodItemSummary,
    MealSlotRequest,
    MealSlotResponse,
    PaginationMeta,
)
from repositories import CurryRepository, DailyMealRepository, FoodItemRepository
from services.catalog_service import CatalogService, parse_entry_id
from app.exceptions import ConflictError, NotFoundError

logger = logging.getLogger("canteen.daily_meals")

MEAL_SLOTS = [m.value for m in MealType]


def parse_schedule_date(value: Any) -> datetime:
    """
    Normalize a requested schedule day to local midnight.

    Accepts ISO dates ("2024-06-01"), ISO datetimes and date objects. Any other
    value, including a missing one, falls back to today rather than failing
    the request.
    """
    parsed: Optional[datetime] = None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            logger.warning("Unparseable schedule date %r, using today", value)

    if parsed is None:
        parsed = datetime.now()
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed.replace(hour=0, minute=0, second=0, microsecond=0)


class DailyMealService:
    @staticmethod
    def _populate(db: Session, meal: DailyMeal) -> DailyMealResponse:
        """Resolve stored ids into catalog summaries, skipping deleted entries"""
        food_ids, curry_ids = set(), set()
        for slot in MEAL_SLOTS:
            content = meal.slot(slot)
            food_ids.update(filter(None, map(parse_entry_id, content.get("foodItems", []))))
            curry_ids.update(filter(None, map(parse_entry_id, content.get("curries", []))))

        foods = {f.id: f for f in FoodItemRepository(db).get_many(list(food_ids))}
        curries = {c.id: c for c in CurryRepository(db).get_many(list(curry_ids))}

        slots: Dict[str, MealSlotResponse] = {}
        for slot in MEAL_SLOTS:
            content = meal.slot(slot)
            slots[slot] = MealSlotResponse(
                food_items=[
                    FoodItemSummary.model_validate(foods[i])
                    for i in map(parse_entry_id, content.get("foodItems", []))
                    if i in foods
                ],
                curries=[
                    CurrySummary.model_validate(curries[i])
                    for i in map(parse_entry_id, content.get("curries", []))
                    if i in curries
                ],
            )

        return DailyMealResponse(
            id=meal.id,
            date=meal.date,
            is_active=meal.is_active,
            created_by=meal.created_by,
            creator=CreatorSummary.model_validate(meal.creator) if meal.creator else None,
            created_at=meal.created_at,
            updated_at=meal.updated_at,
            exists=True,
            **slots,
        )

    @staticmethod
    def get_active_schedule_for_date(
        db: Session, requested: Union[None, str, date, datetime] = None
    ) -> DailyMealResponse:
        """Active schedule for the day, or an empty ``exists=False`` shape."""
        day = parse_schedule_date(requested)
        meal = DailyMealRepository(db).get_active_for_day(day)
        if meal is None:
            return DailyMealResponse(date=day, exists=False)
        return DailyMealService._populate(db, meal)

    @staticmethod
    def _validated_slots(db: Session, payload: DailyMealUpsert) -> Dict[str, dict]:
        slots = {}
        for slot in MEAL_SLOTS:
            submitted: MealSlotRequest = getattr(payload, slot) or MealSlotRequest()
            slots[slot] = {
                "foodItems": CatalogService.filter_available_ids(
                    db, CatalogKind.FOOD_ITEM, submitted.food_items
                ),
                "curries": CatalogService.filter_available_ids(
                    db, CatalogKind.CURRY, submitted.curries
                ),
            }
        return slots

    @staticmethod
    def _apply(meal: DailyMeal, slots: Dict[str, dict], actor: AppUser) -> None:
        for slot, content in slots.items():
            setattr(meal, slot, content)
        meal.created_by = actor.user_id

    @staticmethod
    def upsert_schedule(
        db: Session, payload: DailyMealUpsert, actor: AppUser
    ) -> DailyMealResponse:
        """
        Create or replace the active schedule for a day.

        Only ids of currently available catalog entries are kept. If an
        active schedule already covers the day it is updated in place, so
        repeating the call with the same input leaves one identical document.

        Raises:
            ConflictError: a concurrent writer kept winning the
                (date, is_active) unique index
        """
        repo = DailyMealRepository(db)
        day = parse_schedule_date(payload.date)
        slots = DailyMealService._validated_slots(db, payload)

        meal = repo.get_active_for_day(day)
        if meal is not None:
            DailyMealService._apply(meal, slots, actor)
            meal = repo.update(meal)
        else:
            meal = DailyMeal(date=day, is_active=True)
            DailyMealService._apply(meal, slots, actor)
            try:
                meal = repo.create(meal)
            except IntegrityError:
                # Another request created the day's schedule first; update theirs
                db.rollback()
                logger.warning("daily_meal_insert_conflict date=%s, retrying as update", day.date())
                meal = repo.get_active_for_day(day)
                if meal is None:
                    raise ConflictError(
                        "Daily meal for this date is being modified, please retry"
                    )
                DailyMealService._apply(meal, slots, actor)
                meal = repo.update(meal)

        logger.info(
            "daily_meal_saved id=%s date=%s by=%s counts=%s",
            meal.id,
            day.date(),
            actor.user_id,
            {s: len(c["foodItems"]) + len(c["curries"]) for s, c in slots.items()},
        )
        return DailyMealService._populate(db, meal)

    @staticmethod
    def delete_schedule(db: Session, daily_meal_id: uuid.UUID, actor: AppUser) -> None:
        repo = DailyMealRepository(db)
        if not repo.delete(daily_meal_id):
            raise NotFoundError("Daily meal not found")
        logger.info("daily_meal_deleted id=%s by=%s", daily_meal_id, actor.user_id)

    @staticmethod
    def list_history(db: Session, page: int, limit: int) -> DailyMealHistoryResponse:
        """Active schedules, most recent date first"""
        meals, total = DailyMealRepository(db).list_active((page - 1) * limit, limit)
        return DailyMealHistoryResponse(
            daily_meals=[DailyMealService._populate(db, m) for m in meals],
            pagination=PaginationMeta(
                current_page=page,
                total_pages=math.ceil(total / limit),
                total_items=total,
                items_per_page=limit,
            ),
        )
