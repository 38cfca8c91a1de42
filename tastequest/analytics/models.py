from __future__ import annotations

from pydantic import Field

from ..catalog.models import SnapshotModel


class PreferenceEntry(SnapshotModel):
    name: str
    score: float


class ProfileSummary(SnapshotModel):
    spice_preference: float
    budget_preference: float
    top_cuisines: list[PreferenceEntry] = Field(default_factory=list)
    top_tags: list[PreferenceEntry] = Field(default_factory=list)
    energy: float
    total_decisions: int
    treasures_found: int
    favorites: int
    wishlist: int
    like_rate: int
    achievements: list[str] = Field(default_factory=list)
