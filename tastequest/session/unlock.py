from __future__ import annotations

import logging

from ..catalog.models import Item
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .energy import grant, unlock_grant
from .models import SessionStats, UnlockRegistry, UnlockResult, UnlockStatus

logger = logging.getLogger(__name__)


def is_unlocked(item: Item, registry: UnlockRegistry) -> bool:
    return item.is_unlocked or item.id in registry


def merge_registry(items: list[Item], registry: UnlockRegistry) -> list[Item]:
    """Flag every item the registry knows as unlocked.

    Source-side ``is_unlocked`` flags are kept as they are, so the result is
    the union of both views.
    """
    return [
        item.model_copy(update={"is_unlocked": True})
        if not item.is_unlocked and item.id in registry
        else item
        for item in items
    ]


def attempt_unlock(
    registry: UnlockRegistry,
    stats: SessionStats,
    item: Item,
    distance: float,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> UnlockResult:
    """Try to unlock *item* from *distance* meters away.

    Unlocking is one-way and idempotent: an item that is already unlocked
    yields ``already_unlocked`` with the registry and stats untouched.
    """
    if is_unlocked(item, registry):
        return UnlockResult(
            status=UnlockStatus.already_unlocked,
            registry=registry,
            stats=stats,
            item=item.model_copy(update={"is_unlocked": True}),
            distance=distance,
        )

    if distance > config.unlock_radius_m:
        logger.debug(
            "Item %s is %.0fm away, outside the %.0fm unlock radius",
            item.id, distance, config.unlock_radius_m,
        )
        return UnlockResult(
            status=UnlockStatus.too_far,
            registry=registry,
            stats=stats,
            item=item,
            distance=distance,
        )

    bonus = unlock_grant(item, config)
    updated = grant(stats, bonus, config)
    if item.is_treasure:
        updated = updated.model_copy(update={"treasures_found": updated.treasures_found + 1})

    return UnlockResult(
        status=UnlockStatus.unlocked,
        registry=registry.with_id(item.id),
        stats=updated,
        item=item.model_copy(update={"is_unlocked": True}),
        distance=distance,
        energy_bonus=bonus,
    )
