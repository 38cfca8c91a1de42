from __future__ import annotations

import math
from typing import Any

from ..profile.engine import top_preferences
from ..profile.models import PreferenceProfile
from ..session.models import SessionStats


def compute_achievements(stats: SessionStats) -> list[str]:
    achievements: list[str] = []
    if stats.total_decisions >= 50:
        achievements.append("Swipe Master")
    if stats.treasures_found >= 5:
        achievements.append("Treasure Hunter")
    if len(stats.favorite_ids) >= 10:
        achievements.append("Food Lover")
    if len(stats.wishlist_ids) >= 15:
        achievements.append("Wishlist Collector")
    if stats.total_decisions >= 100:
        achievements.append("Swipe Legend")
    return achievements


def compute_like_rate(stats: SessionStats) -> int:
    """Favorites as a percentage of decisions, halves rounded up."""
    if stats.total_decisions == 0:
        return 0
    return math.floor(len(stats.favorite_ids) / stats.total_decisions * 100 + 0.5)


def compute_summary(
    profile: PreferenceProfile, stats: SessionStats, limit: int = 5,
) -> dict[str, Any]:
    top_cuisines = [
        {"name": n, "score": s}
        for n, s in top_preferences(profile.cuisine_preferences, limit)
    ]
    top_tags = [
        {"name": n, "score": s}
        for n, s in top_preferences(profile.tag_preferences, limit)
    ]

    return {
        "spice_preference": profile.spice_preference,
        "budget_preference": profile.budget_preference,
        "top_cuisines": top_cuisines,
        "top_tags": top_tags,
        "energy": stats.energy,
        "total_decisions": stats.total_decisions,
        "treasures_found": stats.treasures_found,
        "favorites": len(stats.favorite_ids),
        "wishlist": len(stats.wishlist_ids),
        "like_rate": compute_like_rate(stats),
        "achievements": compute_achievements(stats),
    }
