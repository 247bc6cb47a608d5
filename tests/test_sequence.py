"""Tests for the per-collection id generators."""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import mongomock
from pymongo import ReturnDocument

from app.storage.sequence import InMemorySequence, MongoSequence


class TestInMemorySequence:
    def test_starts_at_one_and_increments(self):
        seq = InMemorySequence()

        assert [seq.next_id("products") for _ in range(3)] == [1, 2, 3]

    def test_collections_are_independent(self):
        seq = InMemorySequence()
        seq.next_id("products")
        seq.next_id("products")

        assert seq.next_id("orders") == 1
        assert seq.next_id("products") == 3

    def test_concurrent_callers_get_distinct_values(self):
        seq = InMemorySequence()

        with ThreadPoolExecutor(max_workers=16) as pool:
            ids = list(pool.map(lambda _: seq.next_id("cart_items"), range(500)))

        assert sorted(ids) == list(range(1, 501))


class TestMongoSequence:
    def _sequence(self):
        db = mongomock.MongoClient()["ecommerce"]
        return MongoSequence(db["counters"]), db

    def test_starts_at_one_and_increments(self):
        seq, _ = self._sequence()

        assert [seq.next_id("users") for _ in range(3)] == [1, 2, 3]

    def test_collections_are_independent(self):
        seq, _ = self._sequence()
        seq.next_id("users")

        assert seq.next_id("categories") == 1

    def test_counter_document_shape(self):
        seq, db = self._sequence()
        seq.next_id("orders")
        seq.next_id("orders")

        doc = db["counters"].find_one({"_id": "orders"})
        assert doc["sequence_value"] == 2

    def test_allocation_is_one_increment_and_fetch(self):
        counters = MagicMock(wraps=mongomock.MongoClient()["ecommerce"]["counters"])
        seq = MongoSequence(counters)

        assert seq.next_id("cart_items") == 1
        assert seq.next_id("cart_items") == 2

        # no find_one/update_one pair a concurrent caller could interleave with
        assert [name for name, _, _ in counters.method_calls] == [
            "find_one_and_update",
            "find_one_and_update",
        ]
        counters.find_one_and_update.assert_called_with(
            {"_id": "cart_items"},
            {"$inc": {"sequence_value": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
