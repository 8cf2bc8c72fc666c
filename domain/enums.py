"""
Domain enums for the canteen application.
Contains all enumeration types used across the domain models.
"""

import enum


class UserRole(str, enum.Enum):
    """Account roles"""

    STUDENT = "student"
    ADMIN = "admin"


class MealType(str, enum.Enum):
    """Meal slots, used both by the daily schedule and by order lines"""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class OrderStatus(str, enum.Enum):
    """Order fulfillment lifecycle"""

    PENDING = "pending"
    PREPARING = "preparing"
    READY = "ready"
    COLLECTED = "collected"
    CANCELLED = "cancelled"


class CatalogKind(str, enum.Enum):
    """Catalog collections administered through the menu endpoints"""

    FOOD_ITEM = "food_item"
    CURRY = "curry"


MEAL_TYPE_VALUES = frozenset(m.value for m in MealType)
ORDER_STATUS_VALUES = frozenset(s.value for s in OrderStatus)
