# ============================================================================
# FILE: app/api/dependencies.py
# ============================================================================
from fastapi import Depends, Header, Path
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.core.cache import RedisCache, get_cache
from app.core.document_store import DocumentStore, Found, POSTS, COMMENTS
from app.core.exceptions import UnauthorizedError, ForbiddenError, NotFoundError
from app.core.permissions import Capability, Principal, Role, authorize
from app.core.security import InvalidTokenError, decode_access_token
from typing import Optional
import logging

logger = logging.getLogger(__name__)

def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    """Document store bound to the request's database session"""
    return DocumentStore(db)

def verify_token(
    authorization: Optional[str] = Header(None),
    session: Optional[str] = Header(None, description="Session ID returned by /auth/login"),
) -> Principal:
    """
    Verify the bearer token and return the caller.
    The header must be exactly "Bearer <jwt>". The optional session header
    is carried along for the logged-user check.
    """
    if not authorization:
        raise UnauthorizedError()

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise UnauthorizedError()

    try:
        payload = decode_access_token(parts[1])
    except InvalidTokenError as e:
        logger.info(f"Rejected token: {e}")
        raise UnauthorizedError()

    user_id = payload.get("id")
    if not isinstance(user_id, str) or not user_id:
        raise UnauthorizedError()
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise UnauthorizedError()

    return Principal(user_id=user_id, role=role, session_id=session or None)

def require_admin(principal: Principal = Depends(verify_token)) -> Principal:
    if not authorize(principal, Capability.MANAGE_USERS):
        raise ForbiddenError("Forbidden: Admins only")
    return principal

def require_logged_user(
    principal: Principal = Depends(verify_token),
    cache: RedisCache = Depends(get_cache),
) -> Principal:
    """
    The session sent with this request must belong to the token's user.
    """
    if not principal.session_id:
        raise UnauthorizedError()

    session_user = cache.get_session_user(principal.session_id)
    if session_user is None or session_user != principal.user_id:
        raise ForbiddenError("Forbidden: this is not your profile")
    return principal

def _owner_or_admin(collection: str, label: str):
    """Build a dependency guarding /<collection>/{id} for admins and the creator"""

    def dependency(
        id: str = Path(..., description=f"{label} ID"),
        principal: Principal = Depends(verify_token),
        store: DocumentStore = Depends(get_store),
    ) -> Principal:
        result = store.get(collection, id)
        if not isinstance(result, Found):
            raise NotFoundError(f"{label} not found")
        if not authorize(principal, Capability.MODIFY_CONTENT, result.document.data.get("createdBy")):
            raise ForbiddenError("Forbidden: Admins or owners only")
        return principal

    return dependency

require_post_owner_or_admin = _owner_or_admin(POSTS, "Post")
require_comment_owner_or_admin = _owner_or_admin(COMMENTS, "Comment")
