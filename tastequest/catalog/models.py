from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel


class SnapshotModel(BaseModel):
    """Immutable model persisted and served with camelCase keys."""

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


def price_to_range(price: float) -> int:
    """Map a raw price to its 1-4 price range."""
    if price <= 10:
        return 1
    if price <= 25:
        return 2
    if price <= 50:
        return 3
    return 4


class Location(SnapshotModel):
    latitude: float
    longitude: float


class Item(SnapshotModel):
    id: str = Field(..., min_length=1)
    name: str = ""
    cuisine: str
    tags: list[str] = Field(default_factory=list)
    price_range: int
    price: float | None = None
    popularity: float = Field(default=50.0, ge=0.0, le=100.0)
    mood: float = Field(default=50.0, ge=0.0, le=100.0)
    is_treasure: bool = False
    location: Location
    is_unlocked: bool = False

    @model_validator(mode="before")
    @classmethod
    def _derive_price_range(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        if data.get("price_range", data.get("priceRange")) is not None:
            return data
        price = data.get("price")
        if price is None:
            raise ValueError("item needs either a price range or a raw price")
        data = {k: v for k, v in data.items() if k not in ("price_range", "priceRange")}
        data["price_range"] = price_to_range(float(price))
        return data

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, tags: list[str]) -> list[str]:
        # Keep first occurrence order
        return list(dict.fromkeys(tags))


class RankedItem(SnapshotModel):
    item: Item
    distance: float
    compatibility: int | None = None
