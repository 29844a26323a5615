"""
Infrastructure package for the PetStore seeder.

Centralizes MongoDB connectivity (client construction, reachability checks,
client lifetime). Keep this layer focused on I/O and resource management,
decoupled from the seeding steps.
"""

from petstore_seed.infrastructure.db_factory import (
    build_client,
    get_database,
    mongo_client,
    ping,
)

__all__ = [
    "build_client",
    "get_database",
    "mongo_client",
    "ping",
]
