"""
Pytest configuration for the PetStore seeder.

Provides fixtures for:
- Settings override for tests
- An in-memory stand-in for a pymongo Database (unit tests)
- A live MongoDB database (integration tests, skipped when unreachable)
"""

from __future__ import annotations

import os
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Generator, Iterable, List, Mapping, Optional, Tuple

import pytest
from bson import ObjectId
from pymongo import MongoClient
from pymongo.errors import BulkWriteError, CollectionInvalid, OperationFailure
from pymongo.results import DeleteResult, InsertManyResult

from petstore_seed.config import Settings
from petstore_seed.domain.fixtures import FixtureSet, build_fixture_set, build_index_specs
from petstore_seed.domain.models import IndexSpec

FIXED_SHIP_DATE = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)


def _matches(document: Mapping[str, Any], filter: Mapping[str, Any]) -> bool:
    return all(document.get(key) == value for key, value in filter.items())


class FakeCollection:
    """
    Minimal in-memory collection covering the calls the seeder makes.

    Unique indexes are enforced on insert; violations raise the same
    exceptions pymongo does.
    """

    def __init__(self, database: "FakeDatabase", name: str) -> None:
        self.database = database
        self.name = name
        self.documents: List[Dict[str, Any]] = []
        self.indexes: Dict[str, Dict[str, Any]] = {"_id_": {"key": [("_id", 1)], "v": 2}}

    def _materialize(self) -> None:
        self.database.materialized.setdefault(self.name, self)

    def _unique_violation(self, document: Mapping[str, Any]) -> Optional[str]:
        for name, info in self.indexes.items():
            if not info.get("unique"):
                continue
            fields = [field for field, _ in info["key"]]
            values = [document.get(field) for field in fields]
            for existing in self.documents:
                if [existing.get(field) for field in fields] == values:
                    return name
        return None

    def insert_many(self, documents: Iterable[Dict[str, Any]], ordered: bool = True) -> InsertManyResult:
        self._materialize()
        self.database.calls.append(("insert_many", self.name))
        inserted: List[Any] = []
        for position, document in enumerate(documents):
            violated = self._unique_violation(document)
            if violated:
                raise BulkWriteError(
                    {
                        "writeErrors": [
                            {
                                "index": position,
                                "code": 11000,
                                "errmsg": (
                                    f"E11000 duplicate key error collection: "
                                    f"{self.database.name}.{self.name} index: {violated}"
                                ),
                            }
                        ],
                        "nInserted": len(inserted),
                    }
                )
            document.setdefault("_id", ObjectId())
            self.documents.append(document)
            inserted.append(document["_id"])
        return InsertManyResult(inserted, True)

    def create_index(self, keys: List[tuple], unique: bool = False) -> str:
        self._materialize()
        self.database.calls.append(("create_index", self.name))
        name = "_".join(f"{field}_{direction}" for field, direction in keys)
        if name in self.indexes:
            return name
        info: Dict[str, Any] = {"key": list(keys), "v": 2}
        if unique:
            fields = [field for field, _ in keys]
            seen = [tuple(doc.get(field) for field in fields) for doc in self.documents]
            if len(seen) != len(set(seen)):
                raise OperationFailure(f"E11000 duplicate key error index: {name}", code=11000)
            info["unique"] = True
        self.indexes[name] = info
        return name

    def index_information(self) -> Dict[str, Dict[str, Any]]:
        return {name: dict(info) for name, info in self.indexes.items()}

    def count_documents(self, filter: Mapping[str, Any]) -> int:
        return sum(1 for document in self.documents if _matches(document, filter))

    def find(self, filter: Optional[Mapping[str, Any]] = None, projection: Any = None):
        for document in self.documents:
            if _matches(document, filter or {}):
                result = dict(document)
                if projection and projection.get("_id") is False:
                    result.pop("_id", None)
                yield result

    def delete_many(self, filter: Mapping[str, Any]) -> DeleteResult:
        kept = [document for document in self.documents if not _matches(document, filter)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return DeleteResult({"n": deleted, "ok": 1.0}, True)


class FakeDatabase:
    """In-memory stand-in for `pymongo.database.Database`."""

    def __init__(self, name: str = "petstore_test") -> None:
        self.name = name
        self.materialized: Dict[str, FakeCollection] = {}
        self._handles: Dict[str, FakeCollection] = {}
        self.calls: List[tuple] = []

    def __getitem__(self, name: str) -> FakeCollection:
        if name not in self._handles:
            self._handles[name] = FakeCollection(self, name)
        return self._handles[name]

    def list_collection_names(self) -> List[str]:
        return list(self.materialized)

    def create_collection(self, name: str) -> FakeCollection:
        if name in self.materialized:
            raise CollectionInvalid(f"collection {name} already exists")
        self.calls.append(("create_collection", name))
        collection = self[name]
        collection._materialize()
        return collection

    def drop_collection(self, name: str) -> None:
        self.calls.append(("drop_collection", name))
        self.materialized.pop(name, None)
        self._handles.pop(name, None)


class FakeClient:
    def __init__(self) -> None:
        self.databases: Dict[str, FakeDatabase] = {}
        self.closed = False

    def __getitem__(self, name: str) -> FakeDatabase:
        return self.databases.setdefault(name, FakeDatabase(name))

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase("petstore_test")


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def fixture_set() -> FixtureSet:
    return build_fixture_set(ship_date=FIXED_SHIP_DATE)


@pytest.fixture
def index_specs() -> Tuple[IndexSpec, ...]:
    return build_index_specs()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """
    Settings fixture with test-specific overrides.

    Can be overridden via environment variables in CI or local testing.
    """
    return Settings(
        mongodb_url=os.getenv("MONGODB_URL", "mongodb://localhost:27017"),
        mongodb_database="petstore_test",
        mongodb_timeout_ms=2_000,
        mongodb_connect_retries=1,
        log_level="DEBUG",
    )


@pytest.fixture(scope="session")
def mongo_available(test_settings: Settings) -> bool:
    """
    Check if MongoDB is reachable.

    Used to conditionally skip integration tests when no server is running.
    """
    client: MongoClient = MongoClient(test_settings.mongodb_url, serverSelectionTimeoutMS=2_000)
    try:
        client.admin.command("ping")
        return True
    except Exception:
        return False
    finally:
        client.close()


@pytest.fixture
def live_db(test_settings: Settings, mongo_available: bool) -> Generator[Any, None, None]:
    """
    A freshly named database on the live server, dropped after the test.

    Skips tests if MongoDB is not available.
    """
    if not mongo_available:
        pytest.skip("MongoDB not available for integration tests")

    client: MongoClient = MongoClient(test_settings.mongodb_url, tz_aware=True)
    name = f"petstore_test_{uuid.uuid4().hex[:8]}"
    try:
        yield client[name]
    finally:
        client.drop_database(name)
        client.close()
