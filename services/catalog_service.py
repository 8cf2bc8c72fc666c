"""
Catalog administration: food items and curries.
"""

from typing import List, Optional, Type
import logging
import uuid
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from domain.enums import CatalogKind
from domain.models import MAX_MONEY, AppUser, FoodItem, Curry
from repositories import CatalogRepository, FoodItemRepository, CurryRepository
from app.exceptions import ConflictError, NotFoundError, ServiceValidationError

logger = logging.getLogger("canteen.catalog")

_LABELS = {CatalogKind.FOOD_ITEM: "Food item", CatalogKind.CURRY: "Curry"}


def _repository_for(db: Session, kind: CatalogKind) -> CatalogRepository:
    if kind == CatalogKind.FOOD_ITEM:
        return FoodItemRepository(db)
    return CurryRepository(db)


def _model_for(kind: CatalogKind) -> Type:
    return FoodItem if kind == CatalogKind.FOOD_ITEM else Curry


def parse_entry_id(raw) -> Optional[uuid.UUID]:
    """Coerce a client-supplied catalog id; malformed ids resolve to None"""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError, AttributeError):
        return None


class CatalogService:
    """Read contract used by ordering and scheduling, plus admin CRUD."""

    @staticmethod
    def find_available(db: Session, kind: CatalogKind) -> List:
        return _repository_for(db, kind).find_available()

    @staticmethod
    def find_by_id(db: Session, kind: CatalogKind, entry_id) -> Optional[object]:
        parsed = parse_entry_id(entry_id)
        if parsed is None:
            return None
        return _repository_for(db, kind).get_by_id(parsed)

    @staticmethod
    def filter_available_ids(db: Session, kind: CatalogKind, raw_ids) -> List[str]:
        """
        Keep only ids that name an existing, available entry.

        Unknown, unavailable and malformed ids are dropped silently; duplicates
        collapse to one. The result keeps the submitted order.
        """
        parsed = []
        for raw in raw_ids or []:
            entry_id = parse_entry_id(raw)
            if entry_id is not None and entry_id not in parsed:
                parsed.append(entry_id)
        if not parsed:
            return []
        valid = {e.id for e in _repository_for(db, kind).find_available_by_ids(parsed)}
        return [str(entry_id) for entry_id in parsed if entry_id in valid]

    @staticmethod
    def list_entries(
        db: Session, kind: CatalogKind, available: Optional[bool] = None
    ) -> List:
        return _repository_for(db, kind).list_entries(available)

    @staticmethod
    def get_entry(db: Session, kind: CatalogKind, entry_id: uuid.UUID):
        entry = _repository_for(db, kind).get_by_id(entry_id)
        if not entry:
            raise NotFoundError(f"{_LABELS[kind]} not found")
        return entry

    @staticmethod
    def _validate_name(name: Optional[str]) -> str:
        cleaned = (name or "").strip()
        if not cleaned:
            raise ServiceValidationError("Name is required")
        return cleaned

    @staticmethod
    def _validate_price(price) -> Decimal:
        if price is None:
            raise ServiceValidationError("Price is required")
        value = Decimal(str(price))
        if value.is_nan():
            raise ServiceValidationError("Price must be a number")
        if value <= 0:
            raise ServiceValidationError("Price must be greater than 0")
        if value > MAX_MONEY:
            raise ServiceValidationError("Price is too large")
        return value

    @staticmethod
    def create_entry(
        db: Session,
        kind: CatalogKind,
        actor: AppUser,
        name: Optional[str],
        price=None,
    ):
        """
        Create a catalog entry with the next sequential display id.

        Raises:
            ServiceValidationError: empty name, or missing/non-positive price
                for a food item
            ConflictError: another entry already uses the name (ignoring case)
        """
        repo = _repository_for(db, kind)
        label = _LABELS[kind]
        cleaned = CatalogService._validate_name(name)
        fields = {"name": cleaned, "created_by": actor.user_id}
        if kind == CatalogKind.FOOD_ITEM:
            fields["price"] = CatalogService._validate_price(price)

        if repo.find_by_name(cleaned):
            raise ConflictError(f"{label} with this name already exists")

        entry = _model_for(kind)(display_id=repo.next_display_id(), **fields)
        try:
            entry = repo.create(entry)
        except IntegrityError:
            db.rollback()
            logger.warning("catalog_create_conflict kind=%s name=%s", kind.value, cleaned)
            raise ConflictError(f"{label} could not be created, please retry")

        logger.info(
            "catalog_entry_created kind=%s id=%s display_id=%s by=%s",
            kind.value,
            entry.id,
            entry.display_id,
            actor.user_id,
        )
        return entry

    @staticmethod
    def update_entry(
        db: Session,
        kind: CatalogKind,
        entry_id: uuid.UUID,
        actor: AppUser,
        name: Optional[str] = None,
        price=None,
        available: Optional[bool] = None,
    ):
        """Partial update of name, price (food items only) and availability."""
        repo = _repository_for(db, kind)
        label = _LABELS[kind]
        entry = CatalogService.get_entry(db, kind, entry_id)

        if name is not None:
            cleaned = name.strip()
            if not cleaned:
                raise ServiceValidationError("Name cannot be empty")
            if repo.find_by_name(cleaned, exclude_id=entry.id):
                raise ConflictError(f"{label} with this name already exists")
            entry.name = cleaned

        if price is not None and kind == CatalogKind.FOOD_ITEM:
            entry.price = CatalogService._validate_price(price)

        if available is not None:
            entry.available = bool(available)

        entry = repo.update(entry)
        logger.info(
            "catalog_entry_updated kind=%s id=%s by=%s", kind.value, entry.id, actor.user_id
        )
        return entry

    @staticmethod
    def toggle_availability(
        db: Session, kind: CatalogKind, entry_id: uuid.UUID, actor: AppUser
    ):
        entry = CatalogService.get_entry(db, kind, entry_id)
        entry.available = not entry.available
        entry = _repository_for(db, kind).update(entry)
        logger.info(
            "catalog_availability_toggled kind=%s id=%s available=%s by=%s",
            kind.value,
            entry.id,
            entry.available,
            actor.user_id,
        )
        return entry

    @staticmethod
    def delete_entry(
        db: Session, kind: CatalogKind, entry_id: uuid.UUID, actor: AppUser
    ) -> dict:
        """Hard delete. Schedules that still list the entry skip it when read."""
        entry = CatalogService.get_entry(db, kind, entry_id)
        deleted = {"id": entry.id, "name": entry.name}
        _repository_for(db, kind).delete(entry.id)
        logger.info(
            "catalog_entry_deleted kind=%s id=%s by=%s", kind.value, entry_id, actor.user_id
        )
        return deleted
