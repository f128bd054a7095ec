# ============================================================================
# FILE: app/main.py
# ============================================================================
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from app.api.v1.router import api_router
from app.core.exceptions import SyncVoteError, BadRequestError
from app.core.logging import setup_logging
from app.config import settings
import logging
import time

# Setup logging
setup_logging()
logger = logging.getLogger(__name__)

# Create FastAPI app instance
app = FastAPI(
    title=settings.APP_NAME,
    description="Discussion and voting platform: users, posts, comments and votes",
    version="1.0.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization", "session"],
)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log method, path, status and duration of every request"""
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} - {elapsed_ms:.1f} ms")
    return response

# Include API router
app.include_router(api_router, prefix=settings.API_PREFIX)

@app.exception_handler(SyncVoteError)
async def syncvote_error_handler(request: Request, exc: SyncVoteError):
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_envelope()))

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    error = BadRequestError(data=exc.errors())
    return JSONResponse(status_code=error.status_code, content=jsonable_encoder(error.to_envelope()))

@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Route not found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": exc.status_code, "message": message},
        headers=getattr(exc, "headers", None),
    )

@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=500, content={"status": 500, "message": "Internal server error"})

@app.on_event("startup")
async def startup_event():
    """Initialize services on startup"""
    logger.info(f"Starting {settings.APP_NAME}")
    # Create the documents table if it does not exist yet
    from app.db.base import Base
    from app.db.session import engine
    from app.db.models import document  # noqa: F401
    Base.metadata.create_all(bind=engine)

@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown"""
    logger.info(f"Shutting down {settings.APP_NAME}")

@app.get("/health")
async def health_check():
    return {"status": "healthy"}
