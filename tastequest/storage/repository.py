from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, TypeVar

from pydantic import ValidationError

from ..catalog.models import SnapshotModel
from ..profile.models import PreferenceProfile, utcnow
from ..session.models import SessionStats, UnlockRegistry
from .gateway import PersistenceGateway

logger = logging.getLogger(__name__)

TASTE_PROFILE_KEY = "taste_profile"
USER_STATS_KEY = "user_stats"
UNLOCKED_KEY = "unlocked_restaurants"
# Reserved: written and read here, never consumed by the engines
LAST_MOOD_RESET_KEY = "last_mood_reset"
LAST_QUEST_DATE_KEY = "last_quest_date"

ModelT = TypeVar("ModelT", bound=SnapshotModel)


async def _read(gateway: PersistenceGateway, key: str) -> Any | None:
    try:
        return await gateway.get(key)
    except Exception:
        logger.warning("Could not read %r, falling back to default", key, exc_info=True)
        return None


async def _load_model(gateway: PersistenceGateway, key: str, model: type[ModelT]) -> ModelT:
    data = await _read(gateway, key)
    if data is None:
        return model()
    try:
        return model.model_validate(data)
    except ValidationError:
        logger.warning("Stored %r is malformed, falling back to default", key, exc_info=True)
        return model()


async def load_profile(gateway: PersistenceGateway) -> PreferenceProfile:
    return await _load_model(gateway, TASTE_PROFILE_KEY, PreferenceProfile)


async def save_profile(gateway: PersistenceGateway, profile: PreferenceProfile) -> None:
    await gateway.set(TASTE_PROFILE_KEY, profile.model_dump(mode="json", by_alias=True))


async def load_stats(gateway: PersistenceGateway) -> SessionStats:
    return await _load_model(gateway, USER_STATS_KEY, SessionStats)


async def save_stats(gateway: PersistenceGateway, stats: SessionStats) -> None:
    await gateway.set(USER_STATS_KEY, stats.model_dump(mode="json", by_alias=True))


async def load_registry(gateway: PersistenceGateway) -> UnlockRegistry:
    """Unlocked ids are stored as a bare JSON list."""
    data = await _read(gateway, UNLOCKED_KEY)
    if not isinstance(data, list):
        if data is not None:
            logger.warning("Stored %r is not a list, ignoring it", UNLOCKED_KEY)
        return UnlockRegistry()
    return UnlockRegistry().union([str(item_id) for item_id in data])


async def save_registry(gateway: PersistenceGateway, registry: UnlockRegistry) -> None:
    await gateway.set(UNLOCKED_KEY, list(registry.unlocked_ids))


async def get_last_mood_reset(gateway: PersistenceGateway) -> str | None:
    data = await _read(gateway, LAST_MOOD_RESET_KEY)
    return data if isinstance(data, str) else None


async def mark_mood_reset(gateway: PersistenceGateway, now: datetime | None = None) -> None:
    await gateway.set(LAST_MOOD_RESET_KEY, (now or utcnow()).isoformat())


async def get_last_quest_date(gateway: PersistenceGateway) -> str | None:
    data = await _read(gateway, LAST_QUEST_DATE_KEY)
    return data if isinstance(data, str) else None


async def set_last_quest_date(gateway: PersistenceGateway, date: str) -> None:
    await gateway.set(LAST_QUEST_DATE_KEY, date)
