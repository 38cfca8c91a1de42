from __future__ import annotations

import math
from datetime import datetime

from ..catalog.models import Item
from .models import (
    MAX_SCORE,
    MIN_SCORE,
    NEUTRAL_SCORE,
    Decision,
    DecisionType,
    PreferenceProfile,
    utcnow,
)

ACTION_WEIGHTS: dict[DecisionType, float] = {
    DecisionType.like: 1.0,
    DecisionType.reject: -1.0,
    DecisionType.wishlist: 1.5,
    DecisionType.skip: -0.3,
}

CUISINE_STEP = 10.0
TAG_STEP = 8.0
SPICE_STEP = 15.0
CHEAP_LIKE_BUDGET_STEP = 5.0
PRICEY_REJECT_BUDGET_STEP = 8.0

SPICY_TAG = "spicy"


def action_weight(decision_type: DecisionType) -> float:
    return ACTION_WEIGHTS.get(decision_type, 0.0)


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def effective_price_range(item: Item) -> int:
    """Clamp the item's price range into 1-4 before it is scored."""
    return max(1, min(4, item.price_range))


def update_profile(
    profile: PreferenceProfile,
    decision: Decision,
    now: datetime | None = None,
) -> PreferenceProfile:
    """Return a new profile with *decision* folded in.

    The input profile is never modified. Every touched score is clamped to
    [0, 100]; unseen cuisines and tags start from the neutral 50.
    """
    item = decision.item
    weight = action_weight(decision.type)

    cuisines = dict(profile.cuisine_preferences)
    cuisines[item.cuisine] = clamp_score(
        cuisines.get(item.cuisine, NEUTRAL_SCORE) + weight * CUISINE_STEP
    )

    tags = dict(profile.tag_preferences)
    for tag in item.tags:
        tags[tag] = clamp_score(tags.get(tag, NEUTRAL_SCORE) + weight * TAG_STEP)

    spice = profile.spice_preference
    if SPICY_TAG in item.tags:
        spice = clamp_score(spice + weight * SPICE_STEP)

    # Only cheap likes and pricey rejects move the budget, both upwards
    budget = profile.budget_preference
    price_range = effective_price_range(item)
    if decision.type is DecisionType.like and price_range <= 2:
        budget = clamp_score(budget + CHEAP_LIKE_BUDGET_STEP)
    elif decision.type is DecisionType.reject and price_range >= 3:
        budget = clamp_score(budget + PRICEY_REJECT_BUDGET_STEP)

    return profile.model_copy(update={
        "cuisine_preferences": cuisines,
        "tag_preferences": tags,
        "spice_preference": spice,
        "budget_preference": budget,
        "last_updated": now or utcnow(),
    })


def compatibility(profile: PreferenceProfile, item: Item) -> int:
    """Estimate in [0, 100] how much the profile owner will like *item*."""
    score = NEUTRAL_SCORE

    score += (profile.cuisine_score(item.cuisine) - NEUTRAL_SCORE) * 0.3

    if item.tags:
        tag_delta = sum(profile.tag_score(tag) - NEUTRAL_SCORE for tag in item.tags)
        score += (tag_delta / len(item.tags)) * 0.4

    if SPICY_TAG in item.tags:
        score += (profile.spice_preference - NEUTRAL_SCORE) * 0.2

    price_range = effective_price_range(item)
    budget = profile.budget_preference
    if (price_range <= 2 and budget > 60) or (price_range >= 3 and budget < 40):
        score += 10

    # Half-up rounding
    return int(clamp_score(math.floor(score + 0.5)))


def top_preferences(scores: dict[str, float], limit: int = 5) -> list[tuple[str, float]]:
    return sorted(scores.items(), key=lambda kv: kv[1], reverse=True)[:limit]
