from __future__ import annotations

import logging

from ..catalog.models import Item
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..profile.models import DecisionType
from .models import SessionStats

logger = logging.getLogger(__name__)


def _append_unique(ids: list[str], item_id: str) -> list[str]:
    return ids if item_id in ids else [*ids, item_id]


def is_exhausted(stats: SessionStats) -> bool:
    return stats.is_exhausted


def decision_cost(
    decision_type: DecisionType, config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> float:
    if decision_type is DecisionType.skip:
        return config.skip_cost
    return config.decision_cost


def unlock_grant(item: Item, config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> float:
    return config.treasure_unlock_grant if item.is_treasure else config.unlock_grant


def spend(stats: SessionStats, cost: float) -> SessionStats:
    """Subtract *cost* from the pool, never going below zero."""
    return stats.model_copy(update={"energy": max(0.0, stats.energy - cost)})


def grant(
    stats: SessionStats, amount: float, config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> SessionStats:
    """Add *amount* to the pool, capped at the configured maximum."""
    return stats.model_copy(
        update={"energy": min(config.max_energy, stats.energy + amount)}
    )


def add_favorite(stats: SessionStats, item_id: str) -> SessionStats:
    return stats.model_copy(
        update={"favorite_ids": _append_unique(stats.favorite_ids, item_id)}
    )


def add_wishlist(stats: SessionStats, item_id: str) -> SessionStats:
    return stats.model_copy(
        update={"wishlist_ids": _append_unique(stats.wishlist_ids, item_id)}
    )


def apply_decision(
    stats: SessionStats,
    item: Item,
    decision_type: DecisionType,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> SessionStats:
    """Charge an accepted decision against the pool and update the counters.

    The caller is responsible for rejecting decisions made while the pool is
    exhausted; this function assumes the decision was accepted.
    """
    updated = spend(stats, decision_cost(decision_type, config))
    updated = updated.model_copy(update={"total_decisions": stats.total_decisions + 1})

    if decision_type is DecisionType.like:
        updated = add_favorite(updated, item.id)
        if item.is_treasure:
            updated = updated.model_copy(
                update={"treasures_found": updated.treasures_found + 1}
            )
            updated = grant(updated, config.treasure_like_bonus, config)
            logger.debug("Treasure %s liked, +%s energy", item.id, config.treasure_like_bonus)
    elif decision_type is DecisionType.wishlist:
        updated = add_wishlist(updated, item.id)

    return updated
