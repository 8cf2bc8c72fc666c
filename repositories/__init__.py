"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.user_repository import UserRepository
from repositories.catalog_repository import (
    CatalogRepository,
    FoodItemRepository,
    CurryRepository,
)
from repositories.daily_meal_repository import DailyMealRepository
from repositories.order_repository import OrderRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "CatalogRepository",
    "FoodItemRepository",
    "CurryRepository",
    "DailyMealRepository",
    "OrderRepository",
]
