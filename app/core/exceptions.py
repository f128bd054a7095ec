# ============================================================================
# FILE: app/core/exceptions.py
# ============================================================================
from typing import Any, Dict, Optional


class SyncVoteError(Exception):
    """Base error carrying the HTTP status and envelope message"""

    status_code: int = 500
    default_message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None, data: Any = None):
        self.message = message or self.default_message
        self.data = data
        super().__init__(self.message)

    def to_envelope(self) -> Dict[str, Any]:
        envelope: Dict[str, Any] = {"status": self.status_code, "message": self.message}
        if self.data is not None:
            envelope["data"] = self.data
        return envelope


class BadRequestError(SyncVoteError):
    status_code = 400
    default_message = "Bad request."


class UnauthorizedError(SyncVoteError):
    status_code = 401
    default_message = "Unauthorized"


class ForbiddenError(SyncVoteError):
    status_code = 403
    default_message = "Forbidden"


class NotFoundError(SyncVoteError):
    status_code = 404
    default_message = "Not found"


class CacheUnavailableError(SyncVoteError):
    """Raised when a session operation needs Redis and no connection exists"""

    status_code = 500
    default_message = "Session cache unavailable"
