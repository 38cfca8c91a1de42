from __future__ import annotations

from enum import Enum

from pydantic import Field

from ..catalog.models import Item, Location, RankedItem, SnapshotModel
from ..profile.models import PreferenceProfile


class SessionStats(SnapshotModel):
    energy: float = Field(default=100.0, ge=0.0, le=100.0)
    total_decisions: int = Field(default=0, ge=0)
    treasures_found: int = Field(default=0, ge=0)
    favorite_ids: list[str] = Field(default_factory=list)
    wishlist_ids: list[str] = Field(default_factory=list)

    @property
    def is_exhausted(self) -> bool:
        return self.energy <= 0


class UnlockRegistry(SnapshotModel):
    unlocked_ids: list[str] = Field(default_factory=list)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self.unlocked_ids

    def with_id(self, item_id: str) -> UnlockRegistry:
        """Return a registry that also contains *item_id*."""
        if item_id in self.unlocked_ids:
            return self
        return self.model_copy(update={"unlocked_ids": [*self.unlocked_ids, item_id]})

    def union(self, item_ids: list[str]) -> UnlockRegistry:
        merged = list(dict.fromkeys([*self.unlocked_ids, *item_ids]))
        return self.model_copy(update={"unlocked_ids": merged})


class DecisionStatus(str, Enum):
    accepted = "accepted"
    resource_exhausted = "resource_exhausted"


class UnlockStatus(str, Enum):
    unlocked = "unlocked"
    already_unlocked = "already_unlocked"
    too_far = "too_far"


class DecisionResult(SnapshotModel):
    status: DecisionStatus
    profile: PreferenceProfile
    stats: SessionStats
    item: Item


class UnlockResult(SnapshotModel):
    status: UnlockStatus
    registry: UnlockRegistry
    stats: SessionStats
    item: Item
    distance: float
    energy_bonus: float = 0.0


class MapView(SnapshotModel):
    location: Location
    items: list[RankedItem]
    stats: SessionStats


class DeckView(SnapshotModel):
    location: Location
    items: list[RankedItem]
    stats: SessionStats
