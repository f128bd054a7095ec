# ============================================================================
# FILE: app/api/v1/endpoints/posts.py
# ============================================================================
from fastapi import APIRouter, Body, Depends, Query
from typing import Optional
from app.api.dependencies import get_store, verify_token, require_logged_user, require_post_owner_or_admin
from app.api.responses import send, internal_error
from app.core.document_store import DocumentStore
from app.core.permissions import Principal
from app.schemas.common import Envelope
from app.schemas.post import PostCreate, PostUpdate, VoteUpdate
from app.services.post_service import post_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("/posts", response_model=Envelope, status_code=201, tags=["Posts"])
async def create_post(
    post_data: PostCreate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(verify_token),
):
    """
    Create a post owned by the caller
    Requires authentication
    """
    try:
        return send(post_service.create_post(store, principal.user_id, post_data))
    except Exception as e:
        return internal_error("Create post", e)

@router.put("/posts/{id}/Vote", response_model=Envelope, tags=["Posts"])
async def add_vote_post(
    id: str,
    vote: Optional[VoteUpdate] = Body(None),
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_logged_user),
):
    """
    Up/down vote a post with {"voteCount": 1} or {"voteCount": -1}
    Other values are accepted and ignored
    """
    try:
        vote_count = vote.voteCount if vote else None
        return send(post_service.add_vote_post(store, id, vote_count))
    except Exception as e:
        return internal_error("Vote post", e)

@router.get("/posts", response_model=Envelope, tags=["Posts"])
async def get_posts(
    category: Optional[str] = Query(None, description="Only posts tagged with this category"),
    store: DocumentStore = Depends(get_store),
):
    try:
        if category is not None:
            return send(post_service.get_posts_by_cat(store, category))
        return send(post_service.get_posts(store))
    except Exception as e:
        return internal_error("List posts", e)

@router.get("/posts/{id}", response_model=Envelope, tags=["Posts"])
async def get_post(id: str, store: DocumentStore = Depends(get_store)):
    try:
        return send(post_service.get_post_by_id(store, id))
    except Exception as e:
        return internal_error("Get post", e)

@router.get("/PostUser/{id}/posts", response_model=Envelope, tags=["Posts"])
async def get_posts_by_user(id: str, store: DocumentStore = Depends(get_store)):
    try:
        return send(post_service.get_posts_by_user(store, id))
    except Exception as e:
        return internal_error("List user posts", e)

@router.put("/posts/{id}", response_model=Envelope, tags=["Posts"])
async def update_post(
    id: str,
    update_data: PostUpdate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_post_owner_or_admin),
):
    """
    Update title, description or categories
    Requires admin role or ownership
    """
    try:
        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
        return send(post_service.update_post(store, id, changes))
    except Exception as e:
        return internal_error("Update post", e)

@router.get("/categories", response_model=Envelope, tags=["Categories"])
async def get_categories():
    try:
        return send(post_service.get_categories())
    except Exception as e:
        return internal_error("List categories", e)

@router.delete("/posts/{id}", response_model=Envelope, tags=["Posts"])
async def delete_post(
    id: str,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_post_owner_or_admin),
):
    try:
        return send(post_service.delete_post(store, id))
    except Exception as e:
        return internal_error("Delete post", e)
