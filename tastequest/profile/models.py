from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import Field, field_validator

from ..catalog.models import Item, SnapshotModel

NEUTRAL_SCORE = 50.0
MIN_SCORE = 0.0
MAX_SCORE = 100.0


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DecisionType(str, Enum):
    like = "like"
    reject = "reject"
    wishlist = "wishlist"
    skip = "skip"


class Decision(SnapshotModel):
    type: DecisionType
    item: Item
    timestamp: datetime = Field(default_factory=utcnow)


class PreferenceProfile(SnapshotModel):
    spice_preference: float = NEUTRAL_SCORE
    budget_preference: float = NEUTRAL_SCORE
    cuisine_preferences: dict[str, float] = Field(default_factory=dict)
    tag_preferences: dict[str, float] = Field(default_factory=dict)
    last_updated: datetime = Field(default_factory=utcnow)

    @field_validator("spice_preference", "budget_preference")
    @classmethod
    def _clamp_score(cls, value: float) -> float:
        return max(MIN_SCORE, min(MAX_SCORE, value))

    @field_validator("cuisine_preferences", "tag_preferences")
    @classmethod
    def _clamp_scores(cls, scores: dict[str, float]) -> dict[str, float]:
        return {k: max(MIN_SCORE, min(MAX_SCORE, v)) for k, v in scores.items()}

    def cuisine_score(self, cuisine: str) -> float:
        return self.cuisine_preferences.get(cuisine, NEUTRAL_SCORE)

    def tag_score(self, tag: str) -> float:
        return self.tag_preferences.get(tag, NEUTRAL_SCORE)
