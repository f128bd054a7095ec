# ============================================================================
# FILE: app/api/v1/router.py
# ============================================================================
from fastapi import APIRouter
from app.api.v1.endpoints import users, posts, comments

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(users.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
