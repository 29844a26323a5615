"""
Read and maintenance helpers over the seeded collections.

Used by the `status` and `clear` commands and by test code that wants to
read fixtures back out of the store (e.g. pets by status).
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from pymongo.database import Database

from petstore_seed.config import get_settings
from petstore_seed.errors import translate_errors
from petstore_seed.utils.logging import get_logger

log = get_logger(__name__)


def find_documents(
    database: Database,
    collection: str,
    filter: Optional[Mapping[str, Any]] = None,
) -> List[Dict[str, Any]]:
    """Return all documents in `collection` matching `filter`, without `_id`."""
    with translate_errors("find", collection):
        documents = list(database[collection].find(dict(filter or {}), {"_id": False}))
    log.debug(
        f"Retrieved {len(documents)} documents from '{collection}'",
        extra={"collection": collection},
    )
    return documents


def find_pets_by_status(
    database: Database,
    status: str,
    collection: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Pets with the given status. Defaults to the configured pets collection."""
    collection = collection or get_settings().collection_names()["pets"]
    return find_documents(database, collection, {"status": status})


def count_documents(
    database: Database,
    collection: str,
    filter: Optional[Mapping[str, Any]] = None,
) -> int:
    with translate_errors("count", collection):
        return database[collection].count_documents(dict(filter or {}))


def index_names(database: Database, collection: str) -> Dict[str, bool]:
    """
    Index name -> unique flag for `collection`, excluding the `_id_` index.
    An absent collection has no indexes.
    """
    with translate_errors("list_indexes", collection):
        if collection not in database.list_collection_names():
            return {}
        info = database[collection].index_information()
    return {
        name: bool(details.get("unique", False))
        for name, details in info.items()
        if name != "_id_"
    }


def clear_collections(database: Database, collections: Iterable[str]) -> Dict[str, int]:
    """
    Delete every document from each collection, keeping the collection and
    its indexes. Returns the number deleted per collection.
    """
    deleted: Dict[str, int] = {}
    for name in collections:
        with translate_errors("clear", name):
            result = database[name].delete_many({})
        deleted[name] = result.deleted_count
        log.info(f"Cleared '{name}'", extra={"collection": name, "deleted": deleted[name]})
    return deleted


__all__ = [
    "clear_collections",
    "count_documents",
    "find_documents",
    "find_pets_by_status",
    "index_names",
]
