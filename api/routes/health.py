"""Health check routes"""

from fastapi import APIRouter, Depends, Request
from sqlalchemy import text
from sqlalchemy.orm import Session
import logging

from api.dependencies import get_db

router = APIRouter(tags=["Health"])
logger = logging.getLogger("dailydiet.api.health")


@router.get("/health-check")
def health_check(request: Request):
    """Basic health check endpoint"""
    return {"status": "ok", "service": request.app.state.settings.app_name}


@router.get("/health-check/db")
def database_health(db: Session = Depends(get_db)):
    """Run a trivial query against the configured database."""
    try:
        db.execute(text("SELECT 1"))
        return {"database": "ok"}
    except Exception as e:
        logger.exception("Database health check failed")
        return {"database": "unavailable", "error": str(e)}
