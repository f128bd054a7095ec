# ============================================================================
# FILE: app/api/responses.py
# ============================================================================
from fastapi.responses import JSONResponse
from fastapi.encoders import jsonable_encoder
from app.schemas.common import envelope
import logging

logger = logging.getLogger(__name__)

def send(result: dict) -> JSONResponse:
    """Forward a service envelope with its own status code"""
    return JSONResponse(status_code=result["status"], content=jsonable_encoder(result))

def internal_error(action: str, error: Exception) -> JSONResponse:
    """Log an unexpected failure and degrade to the generic 500 envelope"""
    logger.error(f"{action} error: {error}", exc_info=True)
    return send(envelope(500, "Internal server error", str(error)))
