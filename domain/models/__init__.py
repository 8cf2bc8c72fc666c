"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    MAX_INTEGER,
    MAX_MONEY,
    engine,
    SessionLocal,
    init_database,
    drop_database,
    get_db_session,
)
from domain.models.user import AppUser
from domain.models.catalog import FoodItem, Curry
from domain.models.daily_meal import DailyMeal, empty_slot
from domain.models.order import Order, OrderItem

__all__ = [
    # Database
    "Base",
    "MAX_INTEGER",
    "MAX_MONEY",
    "engine",
    "SessionLocal",
    "init_database",
    "drop_database",
    "get_db_session",
    # Accounts
    "AppUser",
    # Catalog
    "FoodItem",
    "Curry",
    # Schedule
    "DailyMeal",
    "empty_slot",
    # Orders
    "Order",
    "OrderItem",
]
