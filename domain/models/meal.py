"""
Meal model - a logged meal owned by one anonymous session.
"""

from sqlalchemy import Column, Text, TIMESTAMP, Boolean, Uuid, Index
from sqlalchemy.sql import func
import uuid

from domain.models.database import Base


class Meal(Base):
    """A single logged meal with its diet-compliance flag"""

    __tablename__ = "meal"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    date = Column(TIMESTAMP(timezone=True), nullable=False)
    is_diet = Column(Boolean, nullable=False)
    session_id = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), server_default=func.now())
    updated_at = Column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (Index("ix_meal_session_id", "session_id"),)

    def __repr__(self) -> str:
        return f"<Meal id={self.id} session_id={self.session_id} is_diet={self.is_diet}>"
