"""
Seeder pipeline: populate a MongoDB database with the PetStore fixtures.

Usage (example from CLI):
    from petstore_seed.domain.fixtures import build_fixture_set, build_index_specs
    from petstore_seed.seeder import run_seed

    summary = run_seed(database, build_fixture_set(), build_index_specs())
    print(summary.counts)

Steps run strictly in order: ensure collections -> insert fixtures ->
create indexes -> summarize. Inserts are not idempotent and nothing is rolled
back; a failure part-way leaves a partially seeded database and propagates
as a `DataAccessError`.
"""

from __future__ import annotations

import time
from typing import Dict, Iterable, List, Mapping, Optional, Sequence

from pymongo.database import Database

from petstore_seed.domain.fixtures import FixtureSet, collection_kinds
from petstore_seed.domain.models import IndexSpec, SeedSummary, thaw
from petstore_seed.errors import translate_errors
from petstore_seed.utils.logging import get_logger

log = get_logger(__name__)


def drop_collections(database: Database, names: Iterable[str]) -> List[str]:
    """Drop the named collections if present. Returns the names dropped."""
    with translate_errors("drop"):
        existing = set(database.list_collection_names())
    dropped: List[str] = []
    for name in names:
        if name not in existing:
            continue
        with translate_errors("drop", name):
            database.drop_collection(name)
        dropped.append(name)
    log.info("Dropped collections", extra={"collections": dropped})
    return dropped


def ensure_collections(database: Database, names: Iterable[str]) -> List[str]:
    """
    Create each named collection that does not exist yet.

    Collections are created explicitly rather than relying on creation by the
    first insert. Returns the names created by this call.
    """
    with translate_errors("ensure_collections"):
        existing = set(database.list_collection_names())
    created: List[str] = []
    for name in names:
        if name in existing:
            log.debug(f"Collection '{name}' already exists", extra={"collection": name})
            continue
        with translate_errors("ensure_collections", name):
            database.create_collection(name)
        existing.add(name)
        created.append(name)
    log.info("Collections ensured", extra={"new_collections": created})
    return created


def insert_fixtures(database: Database, fixture_set: FixtureSet) -> Dict[str, int]:
    """
    Bulk-insert each collection's documents in one ordered `insert_many`.

    Documents are thawed into fresh dicts and lists first, so the driver's
    `_id` assignment never reaches the read-only fixture set. Returns the
    number inserted per collection.
    """
    inserted: Dict[str, int] = {}
    for name, documents in fixture_set.items():
        if not documents:
            inserted[name] = 0
            continue
        batch = [thaw(document) for document in documents]
        with translate_errors("insert", name):
            result = database[name].insert_many(batch, ordered=True)
        inserted[name] = len(result.inserted_ids)
        log.info(
            f"Inserted {inserted[name]} documents into '{name}'",
            extra={"collection": name, "documents": inserted[name]},
        )
    return inserted


def create_indexes(database: Database, index_specs: Sequence[IndexSpec]) -> Dict[str, List[str]]:
    """
    Create each index. Re-creating an identical index is a no-op on the server.

    Returns the index names per collection, in creation order.
    """
    created: Dict[str, List[str]] = {}
    for spec in index_specs:
        with translate_errors("create_index", spec.collection):
            name = database[spec.collection].create_index(
                list(spec.keys),
                unique=spec.unique,
            )
        created.setdefault(spec.collection, []).append(name)
        log.debug(
            f"Index '{name}' ready on '{spec.collection}'",
            extra={"collection": spec.collection, "index": name, "unique": spec.unique},
        )
    log.info("Indexes created", extra={"indexes": sum(len(v) for v in created.values())})
    return created


def summarize(
    database: Database,
    collection_names: Sequence[str],
    indexes: Dict[str, List[str]] | None = None,
    duration_seconds: float = 0.0,
    kinds: Optional[Mapping[str, str]] = None,
) -> SeedSummary:
    """
    Report collections present and per-collection document counts.

    Counts come from `count_documents` so they reflect stored state. The
    given names are listed first, in order, followed by any other collections
    in the database.
    """
    with translate_errors("summarize"):
        existing = database.list_collection_names()
    ordered = [name for name in collection_names if name in existing]
    ordered += sorted(name for name in existing if name not in collection_names)

    counts: Dict[str, int] = {}
    for name in collection_names:
        with translate_errors("count", name):
            counts[name] = database[name].count_documents({})

    return SeedSummary(
        database=database.name,
        collections=ordered,
        counts=counts,
        indexes=dict(indexes or {}),
        kinds=dict(kinds or {}),
        duration_seconds=round(duration_seconds, 3),
    )


def run_seed(
    database: Database,
    fixture_set: FixtureSet,
    index_specs: Sequence[IndexSpec],
    *,
    reset: bool = False,
    collection_names: Optional[Mapping[str, str]] = None,
) -> SeedSummary:
    """
    Seed `database` with `fixture_set` and `index_specs`.

    Parameters
    ----------
    database : pymongo.database.Database
        Target database handle, already selected by name.
    fixture_set : FixtureSet
        Collection name -> ordered documents to insert.
    index_specs : Sequence[IndexSpec]
        Indexes to create after insertion.
    reset : bool
        Drop the fixture collections before seeding so a rerun starts clean.
    collection_names : Mapping[str, str] | None
        Fixture kind -> collection name, when the collections are renamed.
        Used to label the summary by kind.

    Returns
    -------
    SeedSummary
        Database name, collections, stored counts and index names.

    Raises
    ------
    DataAccessError
        On any driver failure; earlier steps are not rolled back.
    """
    names = list(fixture_set.keys())
    for spec in index_specs:
        if spec.collection not in names:
            names.append(spec.collection)

    log.info(f"[SEED START] {database.name}", extra={"database": database.name})
    start = time.perf_counter()

    if reset:
        drop_collections(database, names)
    ensure_collections(database, names)
    insert_fixtures(database, fixture_set)
    indexes = create_indexes(database, index_specs)
    summary = summarize(
        database,
        names,
        indexes=indexes,
        duration_seconds=time.perf_counter() - start,
        kinds=collection_kinds(collection_names),
    )

    log.info(
        f"[SEED COMPLETE] {database.name}",
        extra={"database": database.name, "counts": summary.counts},
    )
    return summary


__all__ = [
    "create_indexes",
    "drop_collections",
    "ensure_collections",
    "insert_fixtures",
    "run_seed",
    "summarize",
]
