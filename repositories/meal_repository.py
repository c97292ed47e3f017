"""
Meal Repository - Data access layer for session-scoped meal operations
"""

from typing import List, Optional
from uuid import UUID
from sqlalchemy.orm import Session
from sqlalchemy import and_

from repositories.base import BaseRepository
from domain.models import Meal


class MealRepository(BaseRepository[Meal]):
    """Repository for meal data access.

    Every lookup except ``get_by_id`` / ``delete`` is filtered by session_id.
    """

    def __init__(self, db: Session):
        super().__init__(db, Meal)

    def get_by_session(self, session_id: str) -> List[Meal]:
        """Get all meals for a session, in storage order"""
        return self.db.query(Meal).filter(Meal.session_id == session_id).all()

    def get_for_session(self, session_id: str, meal_id: UUID) -> Optional[Meal]:
        """Get a meal by id only if it belongs to the session"""
        return (
            self.db.query(Meal)
            .filter(and_(Meal.session_id == session_id, Meal.id == meal_id))
            .first()
        )

    def find_for_session(self, session_id: str, meal_id: UUID) -> List[Meal]:
        """All meals matching (session, id); zero or one row"""
        return (
            self.db.query(Meal)
            .filter(and_(Meal.session_id == session_id, Meal.id == meal_id))
            .all()
        )

    def create_meal(
        self,
        session_id: str,
        name: str,
        description: str,
        date,
        is_diet: bool,
    ) -> Meal:
        """Create a new meal in the session"""
        meal = Meal(
            name=name,
            description=description,
            date=date,
            is_diet=is_diet,
            session_id=session_id,
        )
        return self.create(meal)

    def count_by_session(self, session_id: str, is_diet: Optional[bool] = None) -> int:
        """Count meals in a session, optionally restricted by diet flag"""
        query = self.db.query(Meal).filter(Meal.session_id == session_id)
        if is_diet is not None:
            query = query.filter(Meal.is_diet == is_diet)
        return query.count()

    def get_diet_flags_chronological(self, session_id: str) -> List[bool]:
        """Diet flags of a session's meals ordered by meal date"""
        rows = (
            self.db.query(Meal.is_diet)
            .filter(Meal.session_id == session_id)
            .order_by(Meal.date.asc(), Meal.created_at.asc())
            .all()
        )
        return [bool(row.is_diet) for row in rows]
