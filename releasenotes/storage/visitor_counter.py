"""
Firestore-backed visitor counter.

A single document holds {count, lastUpdated}. Increments run inside a
Firestore transaction so concurrent callers never lose updates; Firestore
retries the transaction on contention.
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from google.cloud import firestore

from releasenotes.config import FIRESTORE_COLLECTION, FIRESTORE_DOCUMENT_ID, GOOGLE_CLOUD_PROJECT
from releasenotes.observability.logging import get_logger
from releasenotes.observability.telemetry import counter

logger = get_logger(__name__)


class VisitorCounterError(RuntimeError):
    """Reading or updating the counter document failed."""


def _count_from(snapshot: Any) -> int:
    if not snapshot.exists:
        return 0
    data = snapshot.to_dict() or {}
    return int(data.get("count") or 0)


async def apply_increment(transaction: Any, doc_ref: Any) -> int:
    """Read-modify-write of the counter inside transaction; returns the new count."""
    snapshot = await doc_ref.get(transaction=transaction)
    new_count = _count_from(snapshot) + 1
    transaction.set(doc_ref, {"count": new_count, "lastUpdated": datetime.now(UTC)})
    return new_count


increment_in_transaction = firestore.async_transactional(apply_increment)


class VisitorCounterStore:
    """Shared visitor count stored in one Firestore document."""

    def __init__(
        self,
        client: firestore.AsyncClient | None = None,
        collection: str = FIRESTORE_COLLECTION,
        document_id: str = FIRESTORE_DOCUMENT_ID,
    ) -> None:
        self.collection = collection
        self.document_id = document_id
        self._client = client

    @property
    def client(self) -> firestore.AsyncClient:
        """Lazy-load the Firestore client"""
        if self._client is None:
            self._client = firestore.AsyncClient(project=GOOGLE_CLOUD_PROJECT)
        return self._client

    def _document(self) -> Any:
        return self.client.collection(self.collection).document(self.document_id)

    async def increment(self) -> int:
        """Atomically add one to the counter and return the new value."""
        try:
            new_count = await increment_in_transaction(self.client.transaction(), self._document())
        except Exception as e:
            counter("visitor_counter.increment.error")
            logger.error(
                "Error incrementing visitor counter %s/%s: %s",
                self.collection,
                self.document_id,
                e,
            )
            raise VisitorCounterError("Failed to increment visitor counter") from e

        counter("visitor_counter.increment")
        logger.debug("Visitor counter incremented to %d", new_count)
        return new_count

    async def get(self) -> int:
        """Current count; 0 when the document does not exist yet."""
        try:
            snapshot = await self._document().get()
        except Exception as e:
            logger.error(
                "Error getting visitor counter %s/%s: %s", self.collection, self.document_id, e
            )
            raise VisitorCounterError("Failed to get visitor counter") from e
        return _count_from(snapshot)


_store: VisitorCounterStore | None = None


def get_visitor_counter_store() -> VisitorCounterStore:
    """Get global visitor counter store"""
    global _store
    if _store is None:
        _store = VisitorCounterStore()
    return _store
