"""Shared test doubles for the record store and the Firestore client."""

from datetime import datetime, timezone

import pytest
from google.cloud import firestore

from regbot.memory.store import MemoryStore

SERVER_TIME = datetime(2026, 1, 1, 12, 0, tzinfo=timezone.utc)


class FakeSnapshot:
    def __init__(self, key, data):
        self.id = key
        self._data = data

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return dict(self._data) if self._data is not None else None


class FakeDocument:
    def __init__(self, client, collection, key):
        self._client = client
        self._collection = collection
        self._key = key

    async def set(self, data):
        if self._client.fail:
            raise RuntimeError("firestore unavailable")
        stored = {k: (SERVER_TIME if v is firestore.SERVER_TIMESTAMP else v) for k, v in data.items()}
        self._client.docs.setdefault(self._collection, {})[self._key] = stored

    async def get(self):
        if self._client.fail:
            raise RuntimeError("firestore unavailable")
        return FakeSnapshot(self._key, self._client.docs.get(self._collection, {}).get(self._key))


class FakeCollection:
    def __init__(self, client, name):
        self._client = client
        self._name = name

    def document(self, key):
        return FakeDocument(self._client, self._name, key)

    async def stream(self):
        if self._client.fail:
            raise RuntimeError("firestore unavailable")
        for key, data in list(self._client.docs.get(self._name, {}).items()):
            yield FakeSnapshot(key, data)


class FakeFirestoreClient:
    """Minimal stand-in for google.cloud.firestore.AsyncClient."""

    def __init__(self):
        self.docs = {}
        self.fail = False

    def collection(self, name):
        return FakeCollection(self, name)


class CountingStore(MemoryStore):
    """MemoryStore that records calls and can be told to fail saves."""

    def __init__(self):
        super().__init__()
        self.calls = {"save": 0, "get": 0, "list_all": 0}
        self.fail_saves = False

    async def save(self, record):
        self.calls["save"] += 1
        if self.fail_saves:
            return False
        return await super().save(record)

    async def get(self, telegram_id):
        self.calls["get"] += 1
        return await super().get(telegram_id)

    async def list_all(self):
        self.calls["list_all"] += 1
        return await super().list_all()


@pytest.fixture
def fake_firestore() -> FakeFirestoreClient:
    return FakeFirestoreClient()


@pytest.fixture
def store() -> CountingStore:
    return CountingStore()
