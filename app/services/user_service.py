# ============================================================================
# FILE: app/services/user_service.py
# ============================================================================
from typing import Any, Dict, List
from uuid import uuid4
from app.core.cache import RedisCache
from app.core.document_store import DocumentStore, Document, Found, USERS, utcnow_iso
from app.core.permissions import Role
from app.core.security import get_password_hash, verify_password, create_access_token
from app.config import settings
from app.schemas.common import envelope
from app.schemas.user import UserCreate, UserLogin
import logging

logger = logging.getLogger(__name__)

SENSITIVE_FIELDS = ("password",)

def format_user(document: Document) -> Dict[str, Any]:
    """Public view of a user document"""
    user = document.to_dict()
    for name in SENSITIVE_FIELDS:
        user.pop(name, None)
    return user

class UserService:
    """Service layer for user operations"""

    def create_user(self, store: DocumentStore, user_data: UserCreate) -> dict:
        """Register an account unless the email is already taken"""
        if store.where(USERS, "email", user_data.email):
            return envelope(409, "User already exists")

        now = utcnow_iso()
        document = store.add(USERS, {
            "email": user_data.email,
            "username": user_data.username,
            "password": get_password_hash(user_data.password),
            "role": Role.MEMBER.value,
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info(f"User created: {document.id}")
        return envelope(201, "User created successfully!")

    def login(self, store: DocumentStore, cache: RedisCache, credentials: UserLogin) -> dict:
        """
        Check credentials and issue both a JWT (id + role) and a session id.
        The session id is stored in Redis as session_id -> user_id.
        """
        matches = store.where(USERS, "email", credentials.email)
        if not matches:
            return envelope(401, "Unauthorized")

        document = matches[0]
        if not verify_password(credentials.password, document.data.get("password")):
            return envelope(401, "Unauthorized!")

        user = format_user(document)
        session_id = str(uuid4())
        cache.set_session(session_id, document.id, settings.SESSION_EXPIRE_SECONDS)
        token = create_access_token({"id": document.id, "role": user.get("role", Role.MEMBER.value)})
        logger.info(f"User logged in: {document.id}")

        return envelope(200, "User logged in successfully!", {
            "user": user,
            "token": token,
            "sessionId": session_id,
        })

    def get_users(self, store: DocumentStore, cache: RedisCache) -> dict:
        """
        Cache-aside listing. A cached list is returned as-is and may be up to
        CACHE_EXPIRE_SECONDS stale; writes never invalidate it.
        """
        cache_key = settings.USERS_CACHE_KEY

        cached_users = cache.get_cache(cache_key)
        if cached_users is not None:
            logger.info("Cache hit for user list")
            return envelope(200, "Users retrieved successfully!", cached_users)

        users: List[Dict[str, Any]] = [format_user(doc) for doc in store.stream(USERS)]
        cache.set_cache(cache_key, users, settings.CACHE_EXPIRE_SECONDS)
        return envelope(200, "Users retrieved successfully!", users)

    def get_user_by_id(self, store: DocumentStore, user_id: str) -> dict:
        result = store.get(USERS, user_id)
        if not isinstance(result, Found):
            return envelope(404, "User not found")
        return envelope(200, "User fetched successfully!", format_user(result.document))

    def update_user(self, store: DocumentStore, user_id: str, update_data: Dict[str, Any]) -> dict:
        """Merge fields into the account; last write wins"""
        result = store.update(USERS, user_id, {**update_data, "updatedAt": utcnow_iso()})
        if not isinstance(result, Found):
            return envelope(404, "User not found")
        logger.info(f"User updated: {user_id}")
        return envelope(200, "User updated successfully!", format_user(result.document))

    def update_user_pass(self, store: DocumentStore, user_id: str, password: str) -> dict:
        """Re-hash and store a new password"""
        return self.update_user(store, user_id, {"password": get_password_hash(password)})

    def delete_user(self, store: DocumentStore, user_id: str) -> dict:
        """Delete the account. Posts and comments it created are left in place."""
        if not store.delete(USERS, user_id):
            return envelope(404, "User not found")
        logger.info(f"User deleted: {user_id}")
        return envelope(200, "User deleted successfully!")

# Create singleton instance
user_service = UserService()
