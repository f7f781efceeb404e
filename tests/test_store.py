"""Tests for the in-memory receipt store."""

import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from receipt_processor.model.ScoreRecordModel import ScoreRecord
from receipt_processor.store.memory import ReceiptStore


@pytest.fixture
def store() -> ReceiptStore:
    return ReceiptStore()


class TestReceiptStore:
    def test_put_then_get(self, store: ReceiptStore):
        receipt_id = store.put(28)
        assert store.get(receipt_id) == ScoreRecord(id=receipt_id, points=28)
        assert receipt_id in store
        assert len(store) == 1

    def test_ids_are_canonical_uuids(self, store: ReceiptStore):
        receipt_id = store.put(0)
        assert str(uuid.UUID(receipt_id)) == receipt_id

    def test_unknown_id(self, store: ReceiptStore):
        store.put(5)
        never_issued = str(uuid.uuid4())
        assert store.get(never_issued) is None
        assert never_issued not in store

    def test_separate_stores_do_not_share_records(self, store: ReceiptStore):
        receipt_id = store.put(10)
        assert ReceiptStore().get(receipt_id) is None

    def test_same_points_get_distinct_ids(self, store: ReceiptStore):
        first = store.put(109)
        second = store.put(109)
        assert first != second
        assert store.get(first).points == store.get(second).points == 109

    def test_concurrent_puts(self, store: ReceiptStore):
        with ThreadPoolExecutor(max_workers=8) as pool:
            ids = list(pool.map(store.put, range(1000)))

        assert len(set(ids)) == 1000
        assert len(store) == 1000
        assert [store.get(receipt_id).points for receipt_id in ids] == list(range(1000))
