"""
PetStore seed - MongoDB initialization for the PetStore test database.

Creates the `pets`, `users` and `orders` collections, inserts the sample
documents, builds the lookup and uniqueness indexes, and reports per-collection
counts. Run it with the `petstore-seed` CLI or call `run_seed` with a database
handle.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Public API exports
from petstore_seed.config import Settings, get_settings
from petstore_seed.domain.fixtures import FixtureSet, build_fixture_set, build_index_specs
from petstore_seed.domain.models import IndexSpec, SeedSummary
from petstore_seed.errors import (
    DataAccessError,
    DatabaseConnectionError,
    DocumentValidationError,
    DuplicateKeyError,
)
from petstore_seed.infrastructure.db_factory import get_database, mongo_client
from petstore_seed.seeder import run_seed
from petstore_seed.utils.logging import configure_logging, get_logger

__all__ = [
    "__version__",
    # Configuration
    "Settings",
    "get_settings",
    # Fixtures
    "FixtureSet",
    "IndexSpec",
    "build_fixture_set",
    "build_index_specs",
    # Seeding
    "SeedSummary",
    "run_seed",
    "get_database",
    "mongo_client",
    # Errors
    "DataAccessError",
    "DatabaseConnectionError",
    "DocumentValidationError",
    "DuplicateKeyError",
    # Logging
    "configure_logging",
    "get_logger",
]
