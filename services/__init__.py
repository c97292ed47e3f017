"""
Services package - Business logic layer.
"""

from services.meal_service import MealService
from services.session_service import SessionResolver, ResolvedSession

__all__ = [
    "MealService",
    "SessionResolver",
    "ResolvedSession",
]
