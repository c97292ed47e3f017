"""
API dependencies for dependency injection
"""

from typing import Generator
from fastapi import Depends, Request
from sqlalchemy.orm import Session

from domain.models import get_db_session
from services.session_service import SessionResolver, ResolvedSession


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session(request)


def get_session_resolver(request: Request) -> SessionResolver:
    """Session resolver configured for this application"""
    return request.app.state.session_resolver


def ensure_session(
    request: Request, resolver: SessionResolver = Depends(get_session_resolver)
) -> ResolvedSession:
    """Caller's session, minting a new one when the cookie is missing"""
    return resolver.ensure_session(request.cookies.get(resolver.cookie_name))


def require_session(
    request: Request, resolver: SessionResolver = Depends(get_session_resolver)
) -> str:
    """Caller's session id; raises UnauthorizedError without a cookie"""
    return resolver.require_session(request.cookies.get(resolver.cookie_name))
