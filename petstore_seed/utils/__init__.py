"""
Utilities package for the PetStore seeder.

Exports shared logging helpers. Keep this package free of domain logic.
"""

from petstore_seed.utils.logging import configure_logging, get_logger

__all__ = [
    "configure_logging",
    "get_logger",
]
