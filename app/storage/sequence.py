# app/storage/sequence.py
"""
Per-collection integer id generators.

next_id(collection) returns 1, 2, 3, ... for each collection and never
hands out the same value twice, even after deletes. The relational
backend does not need one: its serial primary keys play this role.
"""
import threading

from pymongo import ReturnDocument
from pymongo.collection import Collection


class InMemorySequence:
    """Counters held in process memory, guarded by a lock."""

    def __init__(self):
        self._counters: dict[str, int] = {}
        self._lock = threading.Lock()

    def next_id(self, collection: str) -> int:
        with self._lock:
            value = self._counters.get(collection, 0) + 1
            self._counters[collection] = value
            return value


class MongoSequence:
    """
    Counters stored in a `counters` collection, one document per
    collection name:

        {"_id": "products", "sequence_value": 42}

    Allocation is a single find_one_and_update with $inc, so concurrent
    callers (threads or processes) never receive the same value.
    """

    def __init__(self, counters: Collection):
        self.counters = counters

    def next_id(self, collection: str) -> int:
        doc = self.counters.find_one_and_update(
            {"_id": collection},
            {"$inc": {"sequence_value": 1}},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return doc["sequence_value"]
