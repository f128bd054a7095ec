# ============================================================================
# FILE: app/db/models/document.py
# ============================================================================
from sqlalchemy import Column, String, Integer, DateTime, JSON
from datetime import datetime, timezone
from app.db.base import Base

def _utcnow():
    return datetime.now(timezone.utc)

class DocumentRecord(Base):
    """One schema-free document of a named collection (users, posts, comments)"""
    __tablename__ = "documents"

    collection = Column(String(64), primary_key=True)
    id = Column(String(64), primary_key=True)
    data = Column(JSON, nullable=False, default=dict)
    # Bumped on every write; guards read-modify-write against concurrent writers
    revision = Column(Integer, nullable=False, default=0)
    stored_at = Column(DateTime(timezone=True), default=_utcnow)
    modified_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
