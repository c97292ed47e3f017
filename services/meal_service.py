from typing import Iterable, List
from uuid import UUID
from sqlalchemy.orm import Session
import logging
import math

from domain.models import Meal
from domain.schemas.meal_schemas import MealCreate, MealUpdate, MealSummary
from repositories import MealRepository
from app.exceptions import NotFoundError

logger = logging.getLogger("dailydiet.meals")


def adherence_ratio(in_diet: int, total: int) -> int:
    """Share of in-diet meals rounded half up; 0 when there are no meals."""
    if total <= 0:
        return 0
    return int(math.floor(in_diet / total + 0.5))


def longest_diet_sequence(flags: Iterable[bool]) -> int:
    """Length of the longest run of consecutive in-diet meals"""
    best = current = 0
    for is_diet in flags:
        current = current + 1 if is_diet else 0
        best = max(best, current)
    return best


class MealService:
    """Business logic for session-scoped meal logging"""

    @staticmethod
    def create_meal(db: Session, session_id: str, payload: MealCreate) -> Meal:
        meal_repo = MealRepository(db)
        meal = meal_repo.create_meal(
            session_id=session_id,
            name=payload.name,
            description=payload.description,
            date=payload.date,
            is_diet=payload.is_diet,
        )
        logger.info(f"meal_created meal_id={meal.id} is_diet={meal.is_diet}")
        return meal

    @staticmethod
    def list_meals(db: Session, session_id: str) -> List[Meal]:
        return MealRepository(db).get_by_session(session_id)

    @staticmethod
    def get_meal(db: Session, session_id: str, meal_id: UUID) -> List[Meal]:
        """Meals matching the id within the session.

        A missing meal yields an empty list rather than an error.
        """
        return MealRepository(db).find_for_session(session_id, meal_id)

    @staticmethod
    def update_meal(
        db: Session, session_id: str, meal_id: UUID, payload: MealUpdate
    ) -> Meal:
        """
        Apply a partial update to a meal owned by the session.

        Fields absent from the payload keep their stored value; every supplied
        field overwrites, including empty strings and ``False``.

        Raises:
            NotFoundError: If the meal does not exist in this session
        """
        meal_repo = MealRepository(db)
        meal = meal_repo.get_for_session(session_id, meal_id)
        if not meal:
            logger.warning(f"meal_update_not_found meal_id={meal_id}")
            raise NotFoundError()

        changes = payload.changes()
        for field, value in changes.items():
            setattr(meal, field, value)

        if changes:
            meal = meal_repo.update(meal)
        logger.info(f"meal_updated meal_id={meal_id} fields={sorted(changes)}")
        return meal

    @staticmethod
    def delete_meal(db: Session, session_id: str, meal_id: UUID) -> None:
        """
        Delete a meal owned by the session.

        Raises:
            NotFoundError: If the meal does not exist in this session
        """
        meal_repo = MealRepository(db)
        if not meal_repo.get_for_session(session_id, meal_id):
            logger.warning(f"meal_delete_not_found meal_id={meal_id}")
            raise NotFoundError()

        meal_repo.delete(meal_id)
        logger.info(f"meal_deleted meal_id={meal_id}")

    @staticmethod
    def get_summary(db: Session, session_id: str) -> MealSummary:
        meal_repo = MealRepository(db)
        total = meal_repo.count_by_session(session_id)
        in_diet = meal_repo.count_by_session(session_id, is_diet=True)
        off_diet = meal_repo.count_by_session(session_id, is_diet=False)
        streak = longest_diet_sequence(meal_repo.get_diet_flags_chronological(session_id))

        return MealSummary(
            total_meals=total,
            total_meals_in_diet=in_diet,
            total_off_diet_meals=off_diet,
            adherence_ratio=adherence_ratio(in_diet, total),
            best_diet_sequence=streak,
        )
