# ============================================================================
# FILE: app/api/v1/endpoints/comments.py
# ============================================================================
from fastapi import APIRouter, Body, Depends
from typing import Optional
from app.api.dependencies import get_store, require_logged_user, require_comment_owner_or_admin
from app.api.responses import send, internal_error
from app.core.document_store import DocumentStore
from app.core.permissions import Principal
from app.schemas.common import Envelope
from app.schemas.post import CommentCreate, CommentUpdate, VoteUpdate
from app.services.post_service import post_service
import logging

logger = logging.getLogger(__name__)
router = APIRouter(tags=["Comments"])

@router.post("/posts/{postId}/comments", response_model=Envelope, status_code=201)
async def add_comment_to_post(
    postId: str,
    comment_data: CommentCreate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_logged_user),
):
    """
    Comment on a post as the logged user
    Requires token and the matching session header
    """
    try:
        return send(post_service.add_comment_to_post(store, principal.user_id, postId, comment_data))
    except Exception as e:
        return internal_error("Add comment", e)

@router.put("/comments/{id}/Vote", response_model=Envelope)
async def add_vote_comment(
    id: str,
    vote: Optional[VoteUpdate] = Body(None),
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_logged_user),
):
    try:
        vote_count = vote.voteCount if vote else None
        return send(post_service.add_vote_comment(store, id, vote_count))
    except Exception as e:
        return internal_error("Vote comment", e)

@router.get("/comments/{id}", response_model=Envelope)
async def get_comment(id: str, store: DocumentStore = Depends(get_store)):
    try:
        return send(post_service.get_comment_by_id(store, id))
    except Exception as e:
        return internal_error("Get comment", e)

@router.get("/PostComments/{postId}/comments", response_model=Envelope)
async def get_comments_of_post(postId: str, store: DocumentStore = Depends(get_store)):
    try:
        return send(post_service.get_comments_of_post(store, postId))
    except Exception as e:
        return internal_error("List comments", e)

@router.put("/comments/{id}", response_model=Envelope)
async def update_comment(
    id: str,
    update_data: CommentUpdate,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_comment_owner_or_admin),
):
    """
    Update a comment's description
    Requires admin role or ownership
    """
    try:
        return send(post_service.update_comment(store, id, update_data.model_dump()))
    except Exception as e:
        return internal_error("Update comment", e)

@router.delete("/comments/{id}", response_model=Envelope)
async def delete_comment(
    id: str,
    store: DocumentStore = Depends(get_store),
    principal: Principal = Depends(require_comment_owner_or_admin),
):
    try:
        return send(post_service.delete_comment(store, id))
    except Exception as e:
        return internal_error("Delete comment", e)
