"""Services package - Business logic layer"""

from services.catalog_service import CatalogService
from services.daily_meal_service import DailyMealService
from services.order_service import OrderService

__all__ = [
    "CatalogService",
    "DailyMealService",
    "OrderService",
]
