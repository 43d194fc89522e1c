"""Shared fixtures for the pantry tracker tests."""
import time

import pytest

from pantry_tracker.core.errors import StoreUnavailable
from pantry_tracker.services.inventory_sync import InventorySyncController
from pantry_tracker.services.memory_store import InMemoryDocumentStore


class FlakyStore(InMemoryDocumentStore):
    """In-memory store whose operations can be switched to fail."""

    def __init__(self, documents=None):
        super().__init__(documents)
        self.failing = set()

    def _check(self, operation):
        if operation in self.failing:
            raise StoreUnavailable(operation, "connection refused")

    def list_documents(self):
        self._check("list")
        return super().list_documents()

    def get_document(self, key):
        self._check("get")
        return super().get_document(key)

    def put_document(self, key, body):
        self._check("put")
        super().put_document(key, body)

    def delete_document(self, key):
        self._check("delete")
        super().delete_document(key)

    def ping(self):
        self._check("ping")


class SlowStore(InMemoryDocumentStore):
    """In-memory store with a delay between read and write, to widen races."""

    def __init__(self, documents=None, delay=0.05):
        super().__init__(documents)
        self.delay = delay

    def get_document(self, key):
        body = super().get_document(key)
        time.sleep(self.delay)
        return body


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def flaky_store():
    return FlakyStore()


@pytest.fixture
def controller(store):
    return InventorySyncController(store, refresh_after_mutation=True, serialize_mutations=True)
