"""
Catalog Repository - Data access for food items and curries.

Both catalogs share the same shape apart from ``price``, so one repository
class serves both, parameterised by model.
"""

from typing import List, Optional, Union
from uuid import UUID
from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.models import FoodItem, Curry

CatalogEntry = Union[FoodItem, Curry]


class CatalogRepository(BaseRepository[CatalogEntry]):
    """Repository for one catalog collection"""

    def get_by_id(self, entry_id: UUID) -> Optional[CatalogEntry]:
        return self.db.query(self.model).filter(self.model.id == entry_id).first()

    def list_entries(self, available: Optional[bool] = None) -> List[CatalogEntry]:
        """List entries, newest first, optionally filtered by availability"""
        query = self.db.query(self.model)
        if available is not None:
            query = query.filter(self.model.available.is_(available))
        return query.order_by(self.model.created_at.desc(), self.model.display_id.desc()).all()

    def find_available(self) -> List[CatalogEntry]:
        return self.list_entries(available=True)

    def find_available_by_ids(self, entry_ids: List[UUID]) -> List[CatalogEntry]:
        """Return the subset of ``entry_ids`` that exist and are available"""
        if not entry_ids:
            return []
        return (
            self.db.query(self.model)
            .filter(self.model.id.in_(entry_ids), self.model.available.is_(True))
            .all()
        )

    def get_many(self, entry_ids: List[UUID]) -> List[CatalogEntry]:
        if not entry_ids:
            return []
        return self.db.query(self.model).filter(self.model.id.in_(entry_ids)).all()

    def find_by_name(
        self, name: str, exclude_id: Optional[UUID] = None
    ) -> Optional[CatalogEntry]:
        """Case-insensitive exact name lookup"""
        query = self.db.query(self.model).filter(
            func.lower(self.model.name) == name.lower()
        )
        if exclude_id is not None:
            query = query.filter(self.model.id != exclude_id)
        return query.first()

    def display_id_taken(self, display_id: str) -> bool:
        return (
            self.db.query(self.model.id)
            .filter(self.model.display_id == display_id)
            .first()
            is not None
        )

    def next_display_id(self) -> str:
        """Sequential code such as ``CUR004`` derived from the entry count.

        After deletions the count-derived code may already be in use, so the
        sequence is advanced until a free code is found.
        """
        prefix = self.model.DISPLAY_PREFIX
        seq = self.count() + 1
        candidate = f"{prefix}{seq:03d}"
        while self.display_id_taken(candidate):
            seq += 1
            candidate = f"{prefix}{seq:03d}"
        return candidate


class FoodItemRepository(CatalogRepository):
    def __init__(self, db: Session):
        super().__init__(db, FoodItem)


class CurryRepository(CatalogRepository):
    def __init__(self, db: Session):
        super().__init__(db, Curry)
