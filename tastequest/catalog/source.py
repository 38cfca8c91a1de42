from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Protocol

import pandas as pd

from .models import Item, Location
from .ranking import METERS_PER_DEGREE

logger = logging.getLogger(__name__)


class ItemSource(Protocol):
    async def nearby(self, latitude: float, longitude: float, radius_km: float) -> list[Item]:
        ...


# (id, name, cuisine, price_range, tags, lat offset, lon offset, popularity, mood, treasure)
_SAMPLE_ROWS: list[tuple[str, str, str, int, list[str], float, float, float, float, bool]] = [
    ("1", "McDonald's", "Fast Food", 1, ["burgers", "fast-food"], 0.001, 0.001, 85, 75, False),
    ("2", "Starbucks", "Coffee", 2, ["coffee", "casual"], -0.001, 0.002, 90, 80, False),
    ("3", "Pizza Hut", "Italian", 2, ["pizza", "italian"], 0.002, -0.001, 78, 85, True),
    ("4", "KFC", "Fast Food", 1, ["chicken", "fast-food"], -0.002, -0.002, 82, 70, False),
    ("5", "Subway", "Fast Food", 1, ["sandwiches", "healthy"], 0.003, 0.003, 75, 65, False),
]


class SampleItemSource:
    """Stand-in catalog: five chains placed around the requested coordinate."""

    async def nearby(self, latitude: float, longitude: float, radius_km: float) -> list[Item]:
        return [
            Item(
                id=item_id,
                name=name,
                cuisine=cuisine,
                price_range=price_range,
                tags=tags,
                location=Location(latitude=latitude + dlat, longitude=longitude + dlon),
                popularity=popularity,
                mood=mood,
                is_treasure=treasure,
                is_unlocked=True,
            )
            for item_id, name, cuisine, price_range, tags, dlat, dlon, popularity, mood, treasure
            in _SAMPLE_ROWS
        ]


def _optional(value: Any) -> Any | None:
    return value if pd.notna(value) else None


def _number(value: Any, default: float) -> float:
    return float(value) if pd.notna(value) else default


def _flag(value: Any) -> bool:
    if not pd.notna(value):
        return False
    if isinstance(value, str):
        return value.strip().lower() in ("1", "true", "yes")
    return bool(value)


class CsvItemSource:
    """
    Catalog read from a processed CSV file.

    Expected columns: id, name, cuisine, tags (comma separated), price_range
    and/or price, popularity, mood, is_treasure, is_unlocked, latitude,
    longitude. The file is loaded on first use.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._df: pd.DataFrame | None = None

    def _load(self) -> pd.DataFrame:
        df = pd.read_csv(self._path, dtype={"id": str})

        df["tags_list"] = (
            df.get("tags", pd.Series("", index=df.index))
            .fillna("")
            .apply(lambda s: [t.strip().lower() for t in str(s).split(",") if t.strip()])
        )
        return df

    def get_dataframe(self) -> pd.DataFrame:
        if self._df is None:
            self._df = self._load()
        return self._df

    def _row_to_item(self, row: pd.Series) -> Item:
        return Item(
            id=str(row["id"]),
            name=str(_optional(row.get("name")) or ""),
            cuisine=str(row["cuisine"]),
            tags=row["tags_list"],
            price_range=_optional(row.get("price_range")),
            price=_optional(row.get("price")),
            popularity=_number(row.get("popularity"), 50.0),
            mood=_number(row.get("mood"), 50.0),
            is_treasure=_flag(row.get("is_treasure")),
            is_unlocked=_flag(row.get("is_unlocked")),
            location=Location(latitude=float(row["latitude"]), longitude=float(row["longitude"])),
        )

    async def nearby(self, latitude: float, longitude: float, radius_km: float) -> list[Item]:
        df = self.get_dataframe()
        distance = (
            (df["latitude"] - latitude).abs()
            + (df["longitude"] - longitude).abs() * METERS_PER_DEGREE
        )
        candidates = df.loc[distance <= radius_km * 1000]
        return [self._row_to_item(row) for _, row in candidates.iterrows()]


async def fetch_items(source: ItemSource, location: Location, radius_km: float) -> list[Item]:
    """Fetch the catalog around *location* once; an empty list on failure."""
    try:
        return await source.nearby(location.latitude, location.longitude, radius_km)
    except Exception:
        logger.warning("Item source failed, continuing with an empty catalog", exc_info=True)
        return []
