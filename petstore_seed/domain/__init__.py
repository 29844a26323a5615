"""
Domain package for the PetStore seeder.

Exports the document models, index definitions and the fixture set.
Keep this package focused on data definitions; no database access here.
"""

from petstore_seed.domain.fixtures import FixtureSet, build_fixture_set, build_index_specs
from petstore_seed.domain.models import IndexSpec, Order, Pet, SeedSummary, Tag, User

__all__ = [
    "FixtureSet",
    "IndexSpec",
    "Order",
    "Pet",
    "SeedSummary",
    "Tag",
    "User",
    "build_fixture_set",
    "build_index_specs",
]
