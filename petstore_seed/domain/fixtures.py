"""
Sample data and index definitions for the PetStore test database.

`build_fixture_set` returns a read-only mapping of collection name to an
ordered tuple of documents. Collection names default to the fixture kinds
(`pets`, `users`, `orders`) and can be remapped, e.g. from
`Settings.collection_names()`.
"""
from __future__ import annotations

from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from petstore_seed.domain.models import IndexSpec, Order, Pet, Tag, User, freeze, to_document

FixtureSet = Mapping[str, Sequence[Mapping[str, Any]]]

FIXTURE_KINDS: Tuple[str, ...] = ("pets", "users", "orders")

PETS: Tuple[Pet, ...] = (
    Pet(
        name="Fluffy",
        status="available",
        category="Cats",
        description="Friendly cat with long fur",
        photo_urls=("http://example.com/fluffy1.jpg", "http://example.com/fluffy2.jpg"),
        tags=(Tag(id=1, name="friendly"), Tag(id=2, name="playful")),
    ),
    Pet(
        name="Buddy",
        status="available",
        category="Dogs",
        description="Loyal golden retriever",
        photo_urls=("http://example.com/buddy1.jpg",),
        tags=(Tag(id=3, name="loyal"), Tag(id=4, name="trained")),
    ),
    Pet(
        name="Max",
        status="pending",
        category="Dogs",
        description="Energetic border collie",
        photo_urls=("http://example.com/max1.jpg",),
        tags=(Tag(id=5, name="energetic"), Tag(id=6, name="smart")),
    ),
    Pet(
        name="Luna",
        status="sold",
        category="Cats",
        description="Graceful siamese cat",
        photo_urls=("http://example.com/luna1.jpg",),
        tags=(Tag(id=7, name="graceful"), Tag(id=8, name="elegant")),
    ),
    Pet(
        name="Rex",
        status="available",
        category="Dogs",
        description="Strong german shepherd",
        photo_urls=("http://example.com/rex1.jpg",),
        tags=(Tag(id=9, name="strong"), Tag(id=10, name="protective")),
    ),
)

USERS: Tuple[User, ...] = (
    User(
        username="testuser1",
        email="user1@example.com",
        first_name="John",
        last_name="Doe",
        phone="+1234567890",
        user_status=1,
    ),
    User(
        username="testuser2",
        email="user2@example.com",
        first_name="Jane",
        last_name="Smith",
        phone="+0987654321",
        user_status=1,
    ),
    User(
        username="testuser3",
        email="user3@example.com",
        first_name="Bob",
        last_name="Johnson",
        phone="+1122334455",
        user_status=0,
    ),
)

# (orderId, petId, quantity, status, complete); shipDate is set per build.
_ORDER_ROWS: Tuple[Tuple[int, int, int, str, bool], ...] = (
    (1, 1, 1, "placed", False),
    (2, 2, 2, "delivered", True),
    (3, 3, 1, "pending", False),
)


def build_orders(ship_date: datetime) -> Tuple[Order, ...]:
    return tuple(
        Order(
            order_id=order_id,
            pet_id=pet_id,
            quantity=quantity,
            ship_date=ship_date,
            status=status,
            complete=complete,
        )
        for order_id, pet_id, quantity, status, complete in _ORDER_ROWS
    )


def _resolve(kind: str, collection_names: Optional[Mapping[str, str]]) -> str:
    if collection_names is None:
        return kind
    return collection_names.get(kind, kind)


def collection_kinds(collection_names: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Collection name -> fixture kind, the inverse of `collection_names`."""
    return {_resolve(kind, collection_names): kind for kind in FIXTURE_KINDS}


def build_fixture_set(
    ship_date: Optional[datetime] = None,
    collection_names: Optional[Mapping[str, str]] = None,
) -> FixtureSet:
    """
    Build the read-only fixture set.

    Parameters
    ----------
    ship_date : datetime | None
        Timestamp stored as every order's `shipDate`. Defaults to now (UTC).
    collection_names : Mapping[str, str] | None
        Optional mapping of fixture kind to collection name.

    Returns
    -------
    FixtureSet
        Collection name -> ordered tuple of documents, in `FIXTURE_KINDS` order.
    """
    ship_date = ship_date or datetime.now(timezone.utc)
    documents: Dict[str, Tuple[Mapping[str, Any], ...]] = {
        _resolve("pets", collection_names): tuple(
            freeze(to_document(pet)) for pet in PETS
        ),
        _resolve("users", collection_names): tuple(
            freeze(to_document(user)) for user in USERS
        ),
        _resolve("orders", collection_names): tuple(
            freeze(to_document(order)) for order in build_orders(ship_date)
        ),
    }
    return MappingProxyType(documents)


def build_index_specs(
    collection_names: Optional[Mapping[str, str]] = None,
) -> Tuple[IndexSpec, ...]:
    """Index definitions for the fixture collections, in creation order."""
    pets = _resolve("pets", collection_names)
    users = _resolve("users", collection_names)
    orders = _resolve("orders", collection_names)
    return (
        IndexSpec(collection=pets, keys=(("name", 1),)),
        IndexSpec(collection=pets, keys=(("status", 1),)),
        IndexSpec(collection=pets, keys=(("category", 1),)),
        IndexSpec(collection=users, keys=(("username", 1),), unique=True),
        IndexSpec(collection=users, keys=(("email", 1),)),
        IndexSpec(collection=orders, keys=(("orderId", 1),), unique=True),
        IndexSpec(collection=orders, keys=(("petId", 1),)),
        IndexSpec(collection=orders, keys=(("status", 1),)),
    )


__all__ = [
    "FIXTURE_KINDS",
    "FixtureSet",
    "PETS",
    "USERS",
    "build_fixture_set",
    "build_index_specs",
    "build_orders",
    "collection_kinds",
]
