# ============================================================================
# FILE: app/schemas/common.py
# ============================================================================
from pydantic import BaseModel
from typing import Any, Optional

class Envelope(BaseModel):
    """Uniform response body of every endpoint"""
    status: int
    message: str
    data: Optional[Any] = None

_UNSET = object()

def envelope(status: int, message: str, data: Any = _UNSET) -> dict:
    """Build an envelope dict, leaving out data when none is given"""
    body = {"status": status, "message": message}
    if data is not _UNSET:
        body["data"] = data
    return body
