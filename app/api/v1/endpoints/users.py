# ============================================================================
# FILE: app/api/v1/endpoints/users.py
# ============================================================================
from fastapi import APIRouter, Depends
from app.api.dependencies import get_store, verify_token, require_admin, require_logged_user
from app.api.responses import send, internal_error
from app.core.cache import RedisCache, get_cache
from app.core.document_store import DocumentStore
from app.core.permissions import Principal
from app.schemas.common import Envelope
from app.schemas.user import UserCreate, UserLogin, UserUpdate, ProfileUpdate, PasswordUpdate
from app.services.user_service import user_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

def _changes(payload) -> dict:
    return payload.model_dump(exclude_unset=True, exclude_none=True, mode="json")

@router.post("/users", response_model=Envelope, status_code=201, tags=["Users"])
def create_user(user_data: UserCreate, store: DocumentStore = Depends(get_store)):
    """
    Register a new account (role is always member)
    """
    try:
        return send(user_service.create_user(store, user_data))
    except Exception as e:
        return internal_error("Create user", e)

@router.get("/users", response_model=Envelope, tags=["Users"])
async def get_users(
    store: DocumentStore = Depends(get_store),
    cache: RedisCache = Depends(get_cache),
    principal: Principal = Depends(verify_token),
):
    """
    List all users, served from Redis when cached
    Requires authentication
    """
    try:
        return send(user_service.get_users(store, cache))
    except Exception as e:
        return internal_error("List users", e)

@router.get("/users/{id}", response_model=Envelope, tags=["Users"])
async def get_user(
    id: str,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(verify_token),
):
    try:
        return send(user_service.get_user_by_id(store, id))
    except Exception as e:
        return internal_error("Get user", e)

@router.put("/users/{id}", response_model=Envelope, tags=["Users"])
async def update_user(
    id: str,
    update_data: UserUpdate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_admin),
):
    """
    Update any account
    Requires admin role
    """
    try:
        return send(user_service.update_user(store, id, _changes(update_data)))
    except Exception as e:
        return internal_error("Update user", e)

@router.put("/user/me", response_model=Envelope, tags=["Users"])
async def update_logged_user(
    update_data: ProfileUpdate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_logged_user),
):
    """
    Update the caller's own profile
    Requires token and the matching session header
    """
    try:
        return send(user_service.update_user(store, principal.user_id, _changes(update_data)))
    except Exception as e:
        return internal_error("Update profile", e)

@router.patch("/user/password", response_model=Envelope, tags=["Users"])
def update_logged_password(
    update_data: PasswordUpdate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_logged_user),
):
    try:
        return send(user_service.update_user_pass(store, principal.user_id, update_data.password))
    except Exception as e:
        return internal_error("Update password", e)

@router.post("/auth/login", response_model=Envelope, tags=["Authentication"])
def login(
    credentials: UserLogin,
    store: DocumentStore = Depends(get_store),
    cache: RedisCache = Depends(get_cache),
):
    """
    Login with email and password
    Returns a JWT and a session id
    """
    try:
        return send(user_service.login(store, cache, credentials))
    except Exception as e:
        return internal_error("Login", e)

@router.delete("/users/{id}", response_model=Envelope, tags=["Users"])
async def delete_user(
    id: str,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_admin),
):
    try:
        return send(user_service.delete_user(store, id))
    except Exception as e:
        return internal_error("Delete user", e)
