"""API routes package"""

from . import daily_meals, orders, food_items, curries, health

__all__ = ["daily_meals", "orders", "food_items", "curries", "health"]
