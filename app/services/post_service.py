# ============================================================================
# FILE: app/services/post_service.py
# ============================================================================
from typing import Any, Dict, Optional
from app.core.categories import CATEGORIES
from app.core.document_store import DocumentStore, Found, POSTS, COMMENTS, utcnow_iso
from app.schemas.common import envelope
from app.schemas.post import PostCreate, CommentCreate
import logging

logger = logging.getLogger(__name__)

VOTE_FIELD = "voteCount"

def vote_delta(value: Any) -> Optional[int]:
    """Return +1/-1 for an exact vote value, None for anything else (bools included)"""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if value == 1:
        return 1
    if value == -1:
        return -1
    return None

class PostService:
    """Service layer for posts and their comments"""

    # ---- posts ----

    def create_post(self, store: DocumentStore, user_id: str, post_data: PostCreate) -> dict:
        now = utcnow_iso()
        document = store.add(POSTS, {
            "title": post_data.title,
            "description": post_data.description,
            "categories": list(post_data.categories),
            "createdBy": user_id,
            VOTE_FIELD: 0,
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info(f"Post created: {document.id} by user {user_id}")
        return envelope(201, "Post created successfully!", {"id": document.id})

    def get_posts(self, store: DocumentStore) -> dict:
        posts = [doc.to_dict() for doc in store.stream(POSTS)]
        return envelope(200, "Posts retrieved successfully!", posts)

    def get_posts_by_cat(self, store: DocumentStore, category: str) -> dict:
        posts = [doc.to_dict() for doc in store.where(POSTS, "categories", category, op="array-contains")]
        return envelope(200, "Posts retrieved successfully!", posts)

    def get_post_by_id(self, store: DocumentStore, post_id: str) -> dict:
        result = store.get(POSTS, post_id)
        if not isinstance(result, Found):
            return envelope(404, "Post not found")
        return envelope(200, "Post fetched successfully!", result.document.to_dict())

    def get_posts_by_user(self, store: DocumentStore, user_id: str) -> dict:
        posts = [doc.to_dict() for doc in store.where(POSTS, "createdBy", user_id)]
        return envelope(200, "User posts fetched successfully!", {"id": user_id, "posts": posts})

    def get_categories(self) -> dict:
        return envelope(200, "Categories retrieved successfully!", CATEGORIES)

    def update_post(self, store: DocumentStore, post_id: str, update_data: Dict[str, Any]) -> dict:
        """
        Merge a partial update. The response is the snapshot read before the
        write merged with the patch.
        """
        before = store.get(POSTS, post_id)
        if not isinstance(before, Found):
            return envelope(404, "Post not found")

        patch = {**update_data, "updatedAt": utcnow_iso()}
        if not isinstance(store.update(POSTS, post_id, patch), Found):
            return envelope(404, "Post not found")
        logger.info(f"Post updated: {post_id}")
        return envelope(200, "Post updated successfully!", {**before.document.to_dict(), **patch})

    def delete_post(self, store: DocumentStore, post_id: str) -> dict:
        """Delete a post. Its comments are not removed."""
        if not store.delete(POSTS, post_id):
            return envelope(404, "Post not found")
        logger.info(f"Post deleted: {post_id}")
        return envelope(200, "Post deleted successfully!")

    def add_vote_post(self, store: DocumentStore, post_id: str, vote_count: Any) -> dict:
        return self._vote(store, POSTS, post_id, vote_count, "Post")

    # ---- comments ----

    def add_comment_to_post(self, store: DocumentStore, user_id: str, post_id: str,
                            comment_data: CommentCreate) -> dict:
        if not isinstance(store.get(POSTS, post_id), Found):
            return envelope(404, "Post not found")

        now = utcnow_iso()
        document = store.add(COMMENTS, {
            "description": comment_data.description,
            "postId": post_id,
            "createdBy": user_id,
            VOTE_FIELD: 0,
            "createdAt": now,
            "updatedAt": now,
        })
        logger.info(f"Comment {document.id} added to post {post_id}")
        return envelope(201, "Comment added successfully!", {"id": document.id})

    def get_comment_by_id(self, store: DocumentStore, comment_id: str) -> dict:
        result = store.get(COMMENTS, comment_id)
        if not isinstance(result, Found):
            return envelope(404, "Comment not found")
        return envelope(200, "Comment fetched successfully!", result.document.to_dict())

    def get_comments_of_post(self, store: DocumentStore, post_id: str) -> dict:
        comments = [doc.to_dict() for doc in store.where(COMMENTS, "postId", post_id)]
        return envelope(200, "Comments fetched successfully!", {"id": post_id, "comments": comments})

    def update_comment(self, store: DocumentStore, comment_id: str, update_data: Dict[str, Any]) -> dict:
        before = store.get(COMMENTS, comment_id)
        if not isinstance(before, Found):
            return envelope(404, "Comment not found")

        patch = {**update_data, "updatedAt": utcnow_iso()}
        if not isinstance(store.update(COMMENTS, comment_id, patch), Found):
            return envelope(404, "Comment not found")
        logger.info(f"Comment updated: {comment_id}")
        return envelope(200, "Comment updated successfully!", {**before.document.to_dict(), **patch})

    def add_vote_comment(self, store: DocumentStore, comment_id: str, vote_count: Any) -> dict:
        return self._vote(store, COMMENTS, comment_id, vote_count, "Comment")

    def delete_comment(self, store: DocumentStore, comment_id: str) -> dict:
        if not store.delete(COMMENTS, comment_id):
            return envelope(404, "Comment not found")
        logger.info(f"Comment deleted: {comment_id}")
        return envelope(200, "Comment deleted successfully!")

    # ---- shared ----

    def _vote(self, store: DocumentStore, collection: str, doc_id: str, vote_count: Any, label: str) -> dict:
        """
        Apply a +1/-1 vote with an atomic increment. Other values leave the
        counter alone but still succeed. Voters are not recorded.
        """
        delta = vote_delta(vote_count)
        if delta is None:
            result = store.get(collection, doc_id)
        else:
            result = store.increment(collection, doc_id, VOTE_FIELD, delta, {"updatedAt": utcnow_iso()})

        if not isinstance(result, Found):
            return envelope(404, f"{label} not found")
        if delta is not None:
            logger.info(f"Vote {delta:+d} on {collection}/{doc_id}")
        return envelope(200, f"{label} vote updated successfully!", result.document.to_dict())

# Create singleton instance
post_service = PostService()
