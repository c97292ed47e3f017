"""
Session resolution for anonymous, cookie-scoped meal logs.

A session is nothing more than a random UUID the client keeps in a cookie and
sends back on every request; it is the partition key for that client's meals.
Anyone holding the token has full access to its meals, so the token must stay
secret. When a secret is configured, tokens are HMAC-signed and tokens that
fail verification are treated as absent.
"""

import hashlib
import hmac
import logging
import uuid
from typing import NamedTuple, Optional

from starlette.responses import Response

from app.config import Settings
from app.exceptions import UnauthorizedError

logger = logging.getLogger("dailydiet.session")


class ResolvedSession(NamedTuple):
    session_id: str
    is_new: bool


class SessionResolver:
    """Establishes or validates the caller's session identity"""

    def __init__(
        self,
        cookie_name: str = "session_id",
        max_age_seconds: int = 60 * 60 * 24 * 7,
        secure: bool = False,
        secret: Optional[str] = None,
    ):
        self.cookie_name = cookie_name
        self.max_age_seconds = max_age_seconds
        self.secure = secure
        self._secret = secret.encode("utf-8") if secret else None

    @classmethod
    def from_settings(cls, settings: Settings) -> "SessionResolver":
        return cls(
            cookie_name=settings.session_cookie_name,
            max_age_seconds=settings.session_max_age_seconds,
            secure=settings.session_cookie_secure,
            secret=settings.session_secret,
        )

    @property
    def signs_tokens(self) -> bool:
        return self._secret is not None

    def _signature(self, session_id: str) -> str:
        return hmac.new(self._secret, session_id.encode("utf-8"), hashlib.sha256).hexdigest()

    def encode(self, session_id: str) -> str:
        """Cookie value for ``session_id``"""
        if not self.signs_tokens:
            return session_id
        return f"{session_id}.{self._signature(session_id)}"

    def decode(self, token: Optional[str]) -> Optional[str]:
        """Session id carried by ``token``, or None when absent or unverifiable"""
        if not token:
            return None
        if not self.signs_tokens:
            return token
        session_id, sep, signature = token.rpartition(".")
        if not sep or not session_id:
            return None
        if not hmac.compare_digest(self._signature(session_id), signature):
            logger.warning("session_token_rejected reason=bad_signature")
            return None
        return session_id

    def ensure_session(self, token: Optional[str]) -> ResolvedSession:
        """Use the caller's session if present, otherwise mint a new one.

        An existing token is trusted as-is; no registry lookup happens.
        """
        session_id = self.decode(token)
        if session_id:
            return ResolvedSession(session_id, False)

        session_id = str(uuid.uuid4())
        logger.info("session_minted")
        return ResolvedSession(session_id, True)

    def require_session(self, token: Optional[str]) -> str:
        """Return the caller's session id or raise UnauthorizedError"""
        session_id = self.decode(token)
        if not session_id:
            raise UnauthorizedError()
        return session_id

    def issue_cookie(self, response: Response, session_id: str) -> None:
        """Persist the session token on the client"""
        response.set_cookie(
            self.cookie_name,
            self.encode(session_id),
            max_age=self.max_age_seconds,
            path="/",
            httponly=True,
            secure=self.secure,
            samesite="lax",
        )
