from __future__ import annotations

import numpy as np

from .models import Item, Location, RankedItem

# Meters per degree, applied to the longitude delta only
METERS_PER_DEGREE = 111000


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Cheap planar distance in meters.

    The latitude delta is added unscaled. Not geodesic; stored rankings and
    the unlock radius depend on this exact formula.
    """
    return abs(lat1 - lat2) + abs(lon1 - lon2) * METERS_PER_DEGREE


def distance_to(origin: Location, item: Item) -> float:
    return calculate_distance(
        origin.latitude, origin.longitude,
        item.location.latitude, item.location.longitude,
    )


def rank_by_distance(items: list[Item], origin: Location) -> list[RankedItem]:
    """Return *items* sorted nearest first; ties keep their input order."""
    if not items:
        return []

    lats = np.array([item.location.latitude for item in items], dtype=float)
    lons = np.array([item.location.longitude for item in items], dtype=float)
    distances = (
        np.abs(origin.latitude - lats)
        + np.abs(origin.longitude - lons) * METERS_PER_DEGREE
    )
    order = np.argsort(distances, kind="stable")

    return [RankedItem(item=items[i], distance=float(distances[i])) for i in order]
