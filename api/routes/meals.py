"""Session-scoped meal routes"""

from fastapi import APIRouter, Depends, Path, Response, status
from sqlalchemy.orm import Session
import logging
from uuid import UUID

from api.dependencies import get_db, ensure_session, require_session, get_session_resolver
from domain.schemas.meal_schemas import (
    MealCreate,
    MealUpdate,
    MealResponse,
    MealListResponse,
    MealDetailResponse,
    MealSummaryResponse,
)
from services.meal_service import MealService
from services.session_service import SessionResolver, ResolvedSession

router = APIRouter(tags=["Meals"])
logger = logging.getLogger("dailydiet.api.meals")

# Canonical 8-4-4-4-12 hex form only
MEAL_ID_PATTERN = r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$"


@router.post("/", status_code=status.HTTP_201_CREATED, response_class=Response)
def create_meal(
    payload: MealCreate,
    session: ResolvedSession = Depends(ensure_session),
    resolver: SessionResolver = Depends(get_session_resolver),
    db: Session = Depends(get_db),
):
    """Log a meal, starting a new session when the caller has none."""
    MealService.create_meal(db, session.session_id, payload)
    response = Response(status_code=status.HTTP_201_CREATED)
    if session.is_new:
        resolver.issue_cookie(response, session.session_id)
    return response


@router.get("/", response_model=MealListResponse)
def list_meals(session_id: str = Depends(require_session), db: Session = Depends(get_db)):
    meals = MealService.list_meals(db, session_id)
    return MealListResponse(meals=[MealResponse.model_validate(m) for m in meals])


# Registered before /{meal_id} so "summary" is not parsed as an id
@router.get("/summary", response_model=MealSummaryResponse)
def get_summary(session_id: str = Depends(require_session), db: Session = Depends(get_db)):
    """Totals and diet adherence for the caller's session"""
    return MealSummaryResponse(summary=MealService.get_summary(db, session_id))


@router.get("/{meal_id}", response_model=MealDetailResponse)
def get_meal(
    meal_id: str = Path(..., pattern=MEAL_ID_PATTERN),
    session_id: str = Depends(require_session),
    db: Session = Depends(get_db),
):
    """Look up a meal; an unknown id returns an empty list."""
    meals = MealService.get_meal(db, session_id, UUID(meal_id))
    return MealDetailResponse(meal=[MealResponse.model_validate(m) for m in meals])


@router.put("/{meal_id}", status_code=status.HTTP_202_ACCEPTED, response_class=Response)
def update_meal(
    payload: MealUpdate,
    meal_id: str = Path(..., pattern=MEAL_ID_PATTERN),
    session_id: str = Depends(require_session),
    db: Session = Depends(get_db),
):
    MealService.update_meal(db, session_id, UUID(meal_id), payload)
    return Response(status_code=status.HTTP_202_ACCEPTED)


@router.delete("/{meal_id}", status_code=status.HTTP_202_ACCEPTED, response_class=Response)
def delete_meal(
    meal_id: str = Path(..., pattern=MEAL_ID_PATTERN),
    session_id: str = Depends(require_session),
    db: Session = Depends(get_db),
):
    MealService.delete_meal(db, session_id, UUID(meal_id))
    return Response(status_code=status.HTTP_202_ACCEPTED)
