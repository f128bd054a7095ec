# ============================================================================
# FILE: app/schemas/post.py
# ============================================================================
from pydantic import BaseModel, Field
from typing import Any, List, Optional

class PostCreate(BaseModel):
    """Schema for creating a post"""
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    categories: List[str] = Field(..., min_length=1)

class PostUpdate(BaseModel):
    """Partial update; createdBy and voteCount are not writable here"""
    title: Optional[str] = None
    description: Optional[str] = None
    categories: Optional[List[str]] = None

class CommentCreate(BaseModel):
    description: str

class CommentUpdate(BaseModel):
    description: str

class VoteUpdate(BaseModel):
    """Only exactly 1 or -1 changes a counter, anything else is accepted and ignored"""
    voteCount: Any = None
