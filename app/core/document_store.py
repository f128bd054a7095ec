# ============================================================================
# FILE: app/core/document_store.py
# ============================================================================
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Union
from uuid import uuid4
from sqlalchemy import update as sql_update
from sqlalchemy.orm import Session
from app.db.models.document import DocumentRecord
import logging

logger = logging.getLogger(__name__)

USERS = "users"
POSTS = "posts"
COMMENTS = "comments"

MAX_WRITE_ATTEMPTS = 10


def utcnow_iso() -> str:
    """Timestamp format stored in document bodies"""
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


@dataclass
class Document:
    id: str
    data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, **self.data}


@dataclass(frozen=True)
class Found:
    document: Document


@dataclass(frozen=True)
class NotFound:
    collection: str
    id: str


LookupResult = Union[Found, NotFound]


class DocumentStore:
    """
    Collection/document API on top of a SQLAlchemy session.

    Every write commits immediately. Failures are rolled back, logged and
    re-raised so the caller can turn them into a 500.
    """

    def __init__(self, db: Session):
        self.db = db

    def _query(self, collection: str):
        return self.db.query(DocumentRecord).filter(DocumentRecord.collection == collection)

    def _record(self, collection: str, doc_id: str):
        return self._query(collection).filter(DocumentRecord.id == doc_id).first()

    def _commit(self, action: str, collection: str, doc_id: str) -> None:
        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Error during {action} on {collection}/{doc_id}: {e}")
            raise

    def add(self, collection: str, data: Dict[str, Any]) -> Document:
        """Store data under a newly generated id"""
        doc_id = uuid4().hex
        self.db.add(DocumentRecord(collection=collection, id=doc_id, data=dict(data)))
        self._commit("add", collection, doc_id)
        return Document(id=doc_id, data=dict(data))

    def get(self, collection: str, doc_id: str) -> LookupResult:
        record = self._record(collection, doc_id)
        if record is None:
            return NotFound(collection, doc_id)
        return Found(Document(id=record.id, data=dict(record.data or {})))

    def _swap(self, action: str, collection: str, doc_id: str,
              change: Callable[[Dict[str, Any]], Dict[str, Any]]) -> LookupResult:
        """
        Read the document, compute its new body and write it back only if the
        row revision is still the one that was read. A concurrent writer makes
        the UPDATE match no row; the read is then repeated.
        """
        for _ in range(MAX_WRITE_ATTEMPTS):
            record = self._record(collection, doc_id)
            if record is None:
                self.db.rollback()
                return NotFound(collection, doc_id)

            revision = record.revision
            data = change(dict(record.data or {}))
            statement = (
                sql_update(DocumentRecord)
                .where(
                    DocumentRecord.collection == collection,
                    DocumentRecord.id == doc_id,
                    DocumentRecord.revision == revision,
                )
                .values(data=data, revision=revision + 1)
                .execution_options(synchronize_session=False)
            )
            try:
                matched = self.db.execute(statement).rowcount
            except Exception as e:
                self.db.rollback()
                logger.error(f"Error during {action} on {collection}/{doc_id}: {e}")
                raise

            if matched:
                self._commit(action, collection, doc_id)
                return Found(Document(id=doc_id, data=data))

            # Lost the race; rollback also expires the stale record
            self.db.rollback()
            logger.debug(f"Write conflict during {action} on {collection}/{doc_id}, retrying")

        raise RuntimeError(f"Gave up {action} on {collection}/{doc_id} after {MAX_WRITE_ATTEMPTS} conflicts")

    def update(self, collection: str, doc_id: str, fields: Dict[str, Any]) -> LookupResult:
        """Merge fields into an existing document; returns the post-write state"""
        return self._swap("update", collection, doc_id, lambda data: {**data, **fields})

    def increment(self, collection: str, doc_id: str, field_name: str, delta: int,
                  extra: Dict[str, Any] = None) -> LookupResult:
        """
        Add delta to a numeric field. Concurrent increments never overwrite
        each other. A missing field counts as 0.
        """
        def change(data):
            data[field_name] = (data.get(field_name) or 0) + delta
            if extra:
                data.update(extra)
            return data

        return self._swap("increment", collection, doc_id, change)

    def delete(self, collection: str, doc_id: str) -> bool:
        record = self._record(collection, doc_id)
        if record is None:
            return False
        self.db.delete(record)
        self._commit("delete", collection, doc_id)
        return True

    def stream(self, collection: str) -> List[Document]:
        """All documents of a collection in insertion order"""
        records = self._query(collection).order_by(DocumentRecord.stored_at).all()
        return [Document(id=r.id, data=dict(r.data or {})) for r in records]

    def where(self, collection: str, field_name: str, value: Any, op: str = "==") -> List[Document]:
        """
        Filter a collection on one field.

        Supported operators: ``==`` and ``array-contains``.
        """
        if op == "==":
            matches = lambda v: v == value
        elif op == "array-contains":
            matches = lambda v: isinstance(v, list) and value in v
        else:
            raise ValueError(f"Unsupported operator: {op}")
        return [doc for doc in self.stream(collection) if matches(doc.data.get(field_name))]
