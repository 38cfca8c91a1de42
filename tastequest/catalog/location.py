from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from ..config import DEFAULT_ENGINE_CONFIG, EngineConfig
from ..errors import PermissionDenied
from .models import Location

logger = logging.getLogger(__name__)


class LocationProvider(Protocol):
    async def current(self) -> Location:
        """Return the device position or raise ``PermissionDenied``."""
        ...


class FixedLocationProvider:
    """Provider pinned to a single coordinate (tests, explicit client position)."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self._location = Location(latitude=latitude, longitude=longitude)

    async def current(self) -> Location:
        return self._location


def fallback_location(config: EngineConfig = DEFAULT_ENGINE_CONFIG) -> Location:
    return Location(latitude=config.fallback_latitude, longitude=config.fallback_longitude)


async def resolve_location(
    provider: LocationProvider,
    config: EngineConfig = DEFAULT_ENGINE_CONFIG,
) -> Location:
    """
    Ask *provider* for the current position once.

    Returns the fallback coordinate on permission denial, timeout or any
    provider error.
    """
    try:
        return await asyncio.wait_for(provider.current(), timeout=config.location_timeout)
    except PermissionDenied:
        logger.info("Location permission denied, using fallback coordinate")
    except Exception:
        logger.warning("Location lookup failed, using fallback coordinate", exc_info=True)
    return fallback_location(config)
