"""
Session service.

Each public coroutine runs one read, compute, persist cycle against the
gateway it is given, awaiting every write before it returns so the next call
observes it. There is no module-level state: callers own the gateway and the
collaborators.
"""
from __future__ import annotations

import logging
from datetime import datetime

from ..catalog.location import LocationProvider, resolve_location
from ..catalog.models import Item, Location
from ..catalog.ranking import distance_to, rank_by_distance
from ..catalog.source import ItemSource, fetch_items
from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..profile.engine import clamp_score, compatibility, update_profile
from ..profile.models import Decision, DecisionType, PreferenceProfile, utcnow
from ..storage import repository
from ..storage.gateway import PersistenceGateway
from . import energy
from .models import (
    DecisionResult,
    DecisionStatus,
    DeckView,
    MapView,
    SessionStats,
    UnlockResult,
    UnlockStatus,
)
from .unlock import attempt_unlock, merge_registry

logger = logging.getLogger(__name__)

POPULARITY_SHIFT: dict[DecisionType, float] = {
    DecisionType.like: 2.0,
    DecisionType.wishlist: 3.0,
    DecisionType.reject: -1.0,
    DecisionType.skip: -0.5,
}


def shift_popularity(item: Item, decision_type: DecisionType) -> Item:
    popularity = clamp_score(item.popularity + POPULARITY_SHIFT.get(decision_type, 0.0))
    return item.model_copy(update={"popularity": popularity})


async def record_decision(
    gateway: PersistenceGateway,
    item: Item,
    decision_type: DecisionType,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
    now: datetime | None = None,
) -> DecisionResult:
    profile = await repository.load_profile(gateway)
    stats = await repository.load_stats(gateway)

    if energy.is_exhausted(stats):
        logger.info("Decision on %s rejected: energy exhausted", item.id)
        return DecisionResult(
            status=DecisionStatus.resource_exhausted,
            profile=profile,
            stats=stats,
            item=item,
        )

    decision = Decision(type=decision_type, item=item, timestamp=now or utcnow())
    updated_profile = update_profile(profile, decision, now=decision.timestamp)
    updated_stats = energy.apply_decision(stats, item, decision_type, config)

    # Both snapshots are computed before either is written
    await repository.save_profile(gateway, updated_profile)
    await repository.save_stats(gateway, updated_stats)

    logger.debug(
        "Recorded %s on %s, energy %.1f -> %.1f",
        decision_type.value, item.id, stats.energy, updated_stats.energy,
    )
    return DecisionResult(
        status=DecisionStatus.accepted,
        profile=updated_profile,
        stats=updated_stats,
        item=shift_popularity(item, decision_type),
    )


async def unlock_item(
    gateway: PersistenceGateway,
    item: Item,
    location: Location,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> UnlockResult:
    registry = await repository.load_registry(gateway)
    stats = await repository.load_stats(gateway)

    result = attempt_unlock(registry, stats, item, distance_to(location, item), config)

    if result.status is UnlockStatus.unlocked:
        await repository.save_registry(gateway, result.registry)
        await repository.save_stats(gateway, result.stats)
        logger.debug("Unlocked %s, +%s energy", item.id, result.energy_bonus)

    return result


async def add_to_favorites(gateway: PersistenceGateway, item_id: str) -> SessionStats:
    stats = energy.add_favorite(await repository.load_stats(gateway), item_id)
    await repository.save_stats(gateway, stats)
    return stats


async def reset_profile(
    gateway: PersistenceGateway, now: datetime | None = None,
) -> PreferenceProfile:
    profile = PreferenceProfile(last_updated=now or utcnow())
    await repository.save_profile(gateway, profile)
    return profile


async def reset_stats(gateway: PersistenceGateway) -> SessionStats:
    stats = SessionStats()
    await repository.save_stats(gateway, stats)
    return stats


async def load_map(
    gateway: PersistenceGateway,
    source: ItemSource,
    provider: LocationProvider,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> MapView:
    """Every nearby item, nearest first, with registry unlocks merged in."""
    location = await resolve_location(provider, config)
    items = await fetch_items(source, location, config.map_radius_km)
    registry = await repository.load_registry(gateway)
    stats = await repository.load_stats(gateway)

    return MapView(
        location=location,
        items=rank_by_distance(merge_registry(items, registry), location),
        stats=stats,
    )


async def load_deck(
    gateway: PersistenceGateway,
    source: ItemSource,
    provider: LocationProvider,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> DeckView:
    """Unlocked items only, nearest first, each with its compatibility score."""
    location = await resolve_location(provider, config)
    items = await fetch_items(source, location, config.deck_radius_km)
    registry = await repository.load_registry(gateway)
    profile = await repository.load_profile(gateway)
    stats = await repository.load_stats(gateway)

    unlocked = [item for item in merge_registry(items, registry) if item.is_unlocked]
    ranked = [
        entry.model_copy(update={"compatibility": compatibility(profile, entry.item)})
        for entry in rank_by_distance(unlocked, location)
    ]
    return DeckView(location=location, items=ranked, stats=stats)
