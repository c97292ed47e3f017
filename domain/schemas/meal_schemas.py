from pydantic import (
    AwareDatetime,
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictStr,
    field_validator,
)
from pydantic.alias_generators import to_camel
from typing import Optional, List
from datetime import datetime, timezone
from uuid import UUID
import re

# YYYY-MM-DDTHH:MM:SS[.fraction] followed by Z or a +HH:MM / -HH:MM offset
ISO_DATETIME_WITH_OFFSET = re.compile(
    r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})"
)


def _require_iso_string(value):
    if not isinstance(value, str) or not ISO_DATETIME_WITH_OFFSET.fullmatch(value):
        raise ValueError("date must be an ISO-8601 string with a timezone offset")
    return value


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    # SQLite hands timestamps back without tzinfo; they are stored as UTC
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class MealCreate(BaseModel):
    """Schema for logging a new meal"""

    name: StrictStr = Field(..., min_length=1, description="Meal name")
    description: StrictStr = Field(..., description="Free-text description")
    date: AwareDatetime = Field(
        ..., description="When the meal was eaten, ISO-8601 with offset"
    )
    is_diet: StrictBool = Field(..., description="Whether the meal is within the diet")

    @field_validator("date", mode="before")
    @classmethod
    def validate_date_is_string(cls, v):
        return _require_iso_string(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return _as_utc(v)


class MealUpdate(BaseModel):
    """Schema for a partial meal update.

    Only the fields present in the request body are applied; a field that is
    sent overwrites the stored value even when it is ``""`` or ``false``.
    Explicit ``null`` is rejected.
    """

    name: Optional[StrictStr] = Field(None, min_length=1)
    description: Optional[StrictStr] = None
    date: Optional[AwareDatetime] = None
    is_diet: Optional[StrictBool] = None

    @field_validator("name", "description", "date", "is_diet", mode="before")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("field may be omitted but not null")
        return v

    @field_validator("date", mode="before")
    @classmethod
    def validate_date_is_string(cls, v):
        return _require_iso_string(v)

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)

    def changes(self) -> dict:
        """Fields explicitly supplied by the caller"""
        return self.model_dump(exclude_unset=True)


class MealResponse(BaseModel):
    """Schema for meal response"""

    id: UUID
    name: str
    description: str
    date: datetime
    is_diet: bool
    session_id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

    @field_validator("date", "created_at", "updated_at")
    @classmethod
    def ensure_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(v)


class MealListResponse(BaseModel):
    meals: List[MealResponse]


class MealDetailResponse(BaseModel):
    """A lookup by id; empty when the meal is not in the caller's session"""

    meal: List[MealResponse]


class MealSummary(BaseModel):
    """Per-session totals and diet adherence"""

    total_meals: int = Field(..., ge=0)
    total_meals_in_diet: int = Field(..., ge=0)
    total_off_diet_meals: int = Field(..., ge=0)
    adherence_ratio: int = Field(
        ..., ge=0, le=1, description="Rounded share of meals within the diet"
    )
    best_diet_sequence: int = Field(
        ..., ge=0, description="Longest run of consecutive meals within the diet"
    )

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MealSummaryResponse(BaseModel):
    summary: MealSummary
