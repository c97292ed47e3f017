"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealListResponse,
    MealDetailResponse,
    MealSummary,
    MealSummaryResponse,
)

__all__ = [
    "MealCreate",
    "MealUpdate",
    "MealResponse",
    "MealListResponse",
    "MealDetailResponse",
    "MealSummary",
    "MealSummaryResponse",
]
