"""
Shared pytest fixtures and configuration for all tests.
"""

import asyncio
import os
from collections.abc import Generator
from types import SimpleNamespace
from typing import Any
from unittest.mock import MagicMock

import pytest
import strawberry
from bson import ObjectId
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from employee_directory.database.connection import MongoPool
from employee_directory.performance import monitor


def _matches(doc: dict[str, Any], query: dict[str, Any] | None) -> bool:
    return all(doc.get(key) == value for key, value in (query or {}).items())


class FakeCursor:
    def __init__(self, docs: list[dict[str, Any]]):
        self._docs = docs

    async def to_list(self, length: int | None = None) -> list[dict[str, Any]]:
        docs = [dict(doc) for doc in self._docs]
        return docs if length is None else docs[:length]


class FakeCollection:
    """Just enough of AsyncCollection for the directory's queries."""

    def __init__(self, name: str):
        self.name = name
        self.docs: list[dict[str, Any]] = []
        self.indexes: list[tuple[str, bool]] = []

    def _check_unique(self, doc: dict[str, Any], ignore: dict[str, Any] | None = None) -> None:
        for field, unique in self.indexes:
            if not unique or field not in doc:
                continue
            for existing in self.docs:
                if existing is not ignore and existing.get(field) == doc[field]:
                    raise DuplicateKeyError(f"E11000 duplicate key error: {field}")

    def find(self, query: dict[str, Any] | None = None) -> FakeCursor:
        return FakeCursor([doc for doc in self.docs if _matches(doc, query)])

    async def find_one(self, query: dict[str, Any] | None = None) -> dict[str, Any] | None:
        for doc in self.docs:
            if _matches(doc, query):
                return dict(doc)
        return None

    async def insert_one(self, doc: dict[str, Any]) -> SimpleNamespace:
        self._check_unique(doc)
        doc.setdefault("_id", ObjectId())
        self.docs.append(dict(doc))
        return SimpleNamespace(inserted_id=doc["_id"])

    async def insert_many(self, docs: list[dict[str, Any]]) -> SimpleNamespace:
        ids = [(await self.insert_one(doc)).inserted_id for doc in docs]
        return SimpleNamespace(inserted_ids=ids)

    async def count_documents(self, query: dict[str, Any]) -> int:
        return sum(1 for doc in self.docs if _matches(doc, query))

    async def find_one_and_update(
        self,
        query: dict[str, Any],
        update: dict[str, Any],
        return_document: bool = ReturnDocument.BEFORE,
    ) -> dict[str, Any] | None:
        for doc in self.docs:
            if _matches(doc, query):
                before = dict(doc)
                updated = {**doc, **update.get("$set", {})}
                self._check_unique(updated, ignore=doc)
                doc.update(update.get("$set", {}))
                return dict(doc) if return_document == ReturnDocument.AFTER else before
        return None

    async def delete_one(self, query: dict[str, Any]) -> SimpleNamespace:
        for i, doc in enumerate(self.docs):
            if _matches(doc, query):
                del self.docs[i]
                return SimpleNamespace(deleted_count=1)
        return SimpleNamespace(deleted_count=0)

    async def delete_many(self, query: dict[str, Any]) -> SimpleNamespace:
        before = len(self.docs)
        self.docs = [doc for doc in self.docs if not _matches(doc, query)]
        return SimpleNamespace(deleted_count=before - len(self.docs))

    async def create_index(self, keys: list[tuple[str, int]], unique: bool = False) -> str:
        field = keys[0][0]
        if (field, unique) not in self.indexes:
            self.indexes.append((field, unique))
        return f"{field}_1"


class FakeDatabase:
    def __init__(self, name: str):
        self.name = name
        self.collections: dict[str, FakeCollection] = {}

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self.collections:
            self.collections[name] = FakeCollection(name)
        return self.collections[name]

    async def list_collection_names(self) -> list[str]:
        return list(self.collections)


class FakeAdmin:
    def __init__(self, client: "FakeMongoClient"):
        self._client = client

    async def command(self, name: str) -> dict[str, Any]:
        self._client.server.ping_count += 1
        if self._client.server.ping_delay:
            await asyncio.sleep(self._client.server.ping_delay)
        if self._client.closed or self._client.server.reject(self._client):
            raise ServerSelectionTimeoutError("localhost:27017: [Errno 111] Connection refused")
        return {"ok": 1.0}


class FakeMongoClient:
    def __init__(self, server: "FakeMongoServer", uri: str, options: dict[str, Any]):
        self.server = server
        self.uri = uri
        self.options = options
        self.closed = False
        self.admin = FakeAdmin(self)

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.server.database(name)

    async def close(self) -> None:
        self.closed = True


class FakeMongoServer:
    """In-memory stand-in for a MongoDB deployment.

    Used as the pool's ``client_factory``; data survives reconnects.
    """

    def __init__(self):
        self.databases: dict[str, FakeDatabase] = {}
        self.clients: list[FakeMongoClient] = []
        self.down = False
        self.failures_remaining = 0
        self.ping_count = 0
        self.ping_delay = 0.0

    def __call__(self, uri: str, **options: Any) -> FakeMongoClient:
        client = FakeMongoClient(self, uri, options)
        self.clients.append(client)
        return client

    def database(self, name: str) -> FakeDatabase:
        if name not in self.databases:
            self.databases[name] = FakeDatabase(name)
        return self.databases[name]

    def reject(self, client: FakeMongoClient) -> bool:
        if self.down:
            return True
        if self.failures_remaining > 0:
            self.failures_remaining -= 1
            return True
        return False


TEST_DB_NAME = "directory_test"


@pytest.fixture
def mongo_server() -> FakeMongoServer:
    return FakeMongoServer()


@pytest.fixture
def pool(mongo_server: FakeMongoServer) -> MongoPool:
    """A MongoPool wired to the in-memory server, with instant retries."""
    return MongoPool(
        "mongodb://localhost:27017",
        TEST_DB_NAME,
        retry_base_delay=0,
        retry_max_delay=0,
        client_factory=mongo_server,
    )


@pytest.fixture
def directory_db(mongo_server: FakeMongoServer) -> FakeDatabase:
    return mongo_server.database(TEST_DB_NAME)


@pytest.fixture
def mock_info(pool: MongoPool):
    """Create a mock GraphQL info object carrying the pool."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {"pool": pool}
    return info


@pytest.fixture(autouse=True)
def reset_monitor() -> Generator[None, None, None]:
    monitor.reset()
    yield
    monitor.reset()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)


# Test markers
def pytest_configure(config: Any) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")
