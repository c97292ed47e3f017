from typing import Any, Mapping, Optional


class NotFoundError(Exception):
    """Raised when a requested meal does not exist in the caller's session.

    Surfaced as a client error (400) rather than 404 to keep the public
    contract of the meals API.
    """

    http_status = 400

    def __init__(self, message: str = "meal not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message


class UnauthorizedError(Exception):
    """Raised when a session-scoped route is called without a session token.

    http_status is 400, matching the meals API contract.
    """

    http_status = 400

    def __init__(self, message: str = "session not found", details: Optional[Mapping[str, Any]] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.details = details
        self.code = code

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"error": self.message}
        if self.code:
            payload["code"] = self.code
        if self.details:
            payload["details"] = self.details
        return payload

    def __str__(self) -> str:
        return self.message
