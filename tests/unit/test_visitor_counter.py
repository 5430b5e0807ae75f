"""Unit tests for the Firestore visitor counter

Firestore is replaced by in-memory fakes. Store tests swap the transactional
wrapper for the plain read-modify-write function or a recording stand-in.
"""

from __future__ import annotations

import asyncio
from typing import Any

import pytest
from google.cloud.firestore_v1.async_transaction import _AsyncTransactional

from releasenotes.storage import visitor_counter
from releasenotes.storage.visitor_counter import (
    VisitorCounterError,
    VisitorCounterStore,
    apply_increment,
)


class FakeSnapshot:
    def __init__(self, data: dict[str, Any] | None):
        self._data = data

    @property
    def exists(self) -> bool:
        return self._data is not None

    def to_dict(self) -> dict[str, Any] | None:
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, data: dict[str, Any] | None = None, error: Exception | None = None):
        self.data = data
        self.error = error
        self.reads: list[Any] = []

    async def get(self, transaction: Any = None) -> FakeSnapshot:
        self.reads.append(transaction)
        if self.error is not None:
            raise self.error
        return FakeSnapshot(self.data)


class FakeTransaction:
    """Applies writes straight to the fake document"""

    def set(self, doc_ref: FakeDocument, data: dict[str, Any]) -> None:
        doc_ref.data = data


class FakeCollection:
    def __init__(self, document: FakeDocument):
        self._document = document
        self.requested: list[str] = []

    def document(self, document_id: str) -> FakeDocument:
        self.requested.append(document_id)
        return self._document


class FakeFirestore:
    def __init__(self, document: FakeDocument):
        self.collections: dict[str, FakeCollection] = {}
        self.transactions: list[FakeTransaction] = []
        self._document = document

    def collection(self, name: str) -> FakeCollection:
        return self.collections.setdefault(name, FakeCollection(self._document))

    def transaction(self) -> FakeTransaction:
        transaction = FakeTransaction()
        self.transactions.append(transaction)
        return transaction


@pytest.fixture
def plain_transactions(monkeypatch):
    """Run increments without Firestore's transaction retry wrapper"""
    monkeypatch.setattr(visitor_counter, "increment_in_transaction", apply_increment)


def test_apply_increment_creates_missing_document():
    document = FakeDocument()
    transaction = FakeTransaction()

    new_count = asyncio.run(apply_increment(transaction, document))

    assert new_count == 1
    assert document.data["count"] == 1
    assert document.data["lastUpdated"].tzinfo is not None
    assert document.reads == [transaction]


def test_sequential_increments_are_not_lost():
    document = FakeDocument({"count": 41})

    async def run_many(n: int) -> list[int]:
        return [await apply_increment(FakeTransaction(), document) for _ in range(n)]

    counts = asyncio.run(run_many(5))

    assert counts == [42, 43, 44, 45, 46]
    assert document.data["count"] == 46


def test_store_increment_returns_new_count(plain_transactions):
    document = FakeDocument({"count": 9})
    firestore_client = FakeFirestore(document)
    store = VisitorCounterStore(client=firestore_client, collection="counters", document_id="main")

    assert asyncio.run(store.increment()) == 10
    assert firestore_client.collections["counters"].requested == ["main"]


def test_increment_is_wrapped_in_a_firestore_transaction():
    wrapper = visitor_counter.increment_in_transaction

    assert isinstance(wrapper, _AsyncTransactional)
    assert wrapper.to_wrap is apply_increment


def test_increment_hands_transaction_and_document_to_wrapper(monkeypatch):
    calls: list[tuple[Any, Any]] = []

    async def recording_increment(transaction: Any, doc_ref: Any) -> int:
        calls.append((transaction, doc_ref))
        return 7

    monkeypatch.setattr(visitor_counter, "increment_in_transaction", recording_increment)
    document = FakeDocument({"count": 6})
    firestore_client = FakeFirestore(document)
    store = VisitorCounterStore(client=firestore_client)

    assert asyncio.run(store.increment()) == 7
    assert calls == [(firestore_client.transactions[0], document)]


def test_get_missing_document_is_zero():
    store = VisitorCounterStore(client=FakeFirestore(FakeDocument()))

    assert asyncio.run(store.get()) == 0


def test_get_returns_stored_count():
    store = VisitorCounterStore(client=FakeFirestore(FakeDocument({"count": 1234})))

    assert asyncio.run(store.get()) == 1234


def test_increment_failure_is_wrapped(plain_transactions):
    document = FakeDocument(error=RuntimeError("deadline exceeded"))
    store = VisitorCounterStore(client=FakeFirestore(document))

    with pytest.raises(VisitorCounterError, match="Failed to increment visitor counter"):
        asyncio.run(store.increment())


def test_get_failure_is_wrapped():
    document = FakeDocument(error=RuntimeError("permission denied"))
    store = VisitorCounterStore(client=FakeFirestore(document))

    with pytest.raises(VisitorCounterError, match="Failed to get visitor counter"):
        asyncio.run(store.get())
