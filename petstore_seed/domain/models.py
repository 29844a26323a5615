"""
Domain models for the PetStore seeder.

Defines the sample record schemas stored in the `pets`, `users` and `orders`
collections, the index definitions applied to them, and the summary returned
by a seeding run. Field aliases match the stored (camelCase) document keys.
"""
from __future__ import annotations

from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

_DOCUMENT_CONFIG = ConfigDict(frozen=True, populate_by_name=True, use_enum_values=True)


class PetStatus(str, Enum):
    AVAILABLE = "available"
    PENDING = "pending"
    SOLD = "sold"


class OrderStatus(str, Enum):
    PLACED = "placed"
    APPROVED = "approved"
    PENDING = "pending"
    DELIVERED = "delivered"


class Tag(BaseModel):
    id: int = Field(..., description="Tag identifier.")
    name: str = Field(..., description="Tag label.")

    model_config = _DOCUMENT_CONFIG


class Pet(BaseModel):
    """
    A document in the `pets` collection.
    """

    name: str = Field(..., description="Pet name.")
    status: PetStatus = Field(..., description="Store availability.")
    category: str = Field(..., description="Category label, e.g. Cats or Dogs.")
    description: str = Field("", description="Free-text description.")
    photo_urls: Tuple[str, ...] = Field((), alias="photoUrls")
    tags: Tuple[Tag, ...] = Field(())

    model_config = _DOCUMENT_CONFIG


class User(BaseModel):
    """
    A document in the `users` collection. `username` is unique.
    """

    username: str
    email: str
    first_name: str = Field(..., alias="firstName")
    last_name: str = Field(..., alias="lastName")
    phone: str
    user_status: int = Field(0, alias="userStatus")

    model_config = _DOCUMENT_CONFIG


class Order(BaseModel):
    """
    A document in the `orders` collection. `orderId` is unique; `petId`
    references a pet but is not enforced by the store.
    """

    order_id: int = Field(..., alias="orderId")
    pet_id: int = Field(..., alias="petId")
    quantity: int = Field(1, ge=1)
    ship_date: datetime = Field(..., alias="shipDate")
    status: OrderStatus
    complete: bool = False

    model_config = _DOCUMENT_CONFIG


def to_document(model: BaseModel) -> Dict[str, Any]:
    """Render a model as a plain document keyed by stored field names."""
    return thaw(model.model_dump(by_alias=True))


def freeze(value: Any) -> Any:
    """Recursively convert dicts to read-only mappings and lists to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """
    Inverse of `freeze`: fresh dicts and lists, safe to hand to the driver.
    BSON has no tuple type, and pymongo only encodes real mappings.
    """
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [thaw(item) for item in value]
    return value


class IndexSpec(BaseModel):
    """
    An index to create on a collection.

    `keys` is an ordered sequence of (field, direction) pairs, direction being
    1 (ascending) or -1 (descending), as accepted by pymongo's `create_index`.
    """

    collection: str
    keys: Tuple[Tuple[str, int], ...]
    unique: bool = False

    model_config = ConfigDict(frozen=True)

    @field_validator("keys")
    @classmethod
    def _check_keys(cls, keys: Tuple[Tuple[str, int], ...]) -> Tuple[Tuple[str, int], ...]:
        if not keys:
            raise ValueError("index keys must not be empty")
        for field, direction in keys:
            if direction not in (1, -1):
                raise ValueError(f"invalid direction {direction!r} for field '{field}'")
        return keys

    @property
    def name(self) -> str:
        """Default MongoDB index name, e.g. `username_1`."""
        return "_".join(f"{field}_{direction}" for field, direction in self.keys)


class SeedSummary(BaseModel):
    """
    Outcome of a seeding run. Counts are queried from the store after
    insertion, so they reflect stored state rather than fixture lengths.
    """

    database: str
    collections: List[str] = Field(default_factory=list)
    counts: Dict[str, int] = Field(default_factory=dict)
    indexes: Dict[str, List[str]] = Field(default_factory=dict)
    # collection name -> fixture kind (pets, users, orders)
    kinds: Dict[str, str] = Field(default_factory=dict)
    duration_seconds: float = 0.0

    model_config = ConfigDict(frozen=True)


__all__ = [
    "IndexSpec",
    "Order",
    "OrderStatus",
    "Pet",
    "PetStatus",
    "SeedSummary",
    "Tag",
    "User",
    "freeze",
    "thaw",
    "to_document",
]
