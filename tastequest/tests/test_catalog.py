from __future__ import annotations

import asyncio
from pathlib import Path

import pytest
from pydantic import ValidationError

from tastequest.catalog.location import (
    FixedLocationProvider,
    fallback_location,
    resolve_location,
)
from tastequest.catalog.models import Item, Location, price_to_range
from tastequest.catalog.source import CsvItemSource, SampleItemSource, fetch_items
from tastequest.config import EngineConfig
from tastequest.errors import PermissionDenied

SF = Location(latitude=37.7749, longitude=-122.4194)

CSV_TEXT = """id,name,cuisine,tags,price_range,price,popularity,mood,is_treasure,is_unlocked,latitude,longitude
a,Taco Spot,Mexican,"Spicy, tacos",,8,60,70,true,false,37.7749,-122.4194
b,Chez Loin,French,fine-dining,4,,0,50,false,true,37.7749,-122.3
"""


# ── Item model ───────────────────────────────────────────────────────────


class TestItemModel:
    @pytest.mark.parametrize(
        "price, expected",
        [(0, 1), (10, 1), (10.5, 2), (25, 2), (26, 3), (50, 3), (50.01, 4), (200, 4)],
    )
    def test_price_to_range(self, price, expected):
        assert price_to_range(price) == expected

    def test_price_range_derived_from_price(self):
        item = Item(id="1", cuisine="Cafe", price=18.0, location=SF)
        assert item.price_range == 2

    def test_explicit_price_range_wins(self):
        item = Item(id="1", cuisine="Cafe", price=80.0, price_range=1, location=SF)
        assert item.price_range == 1

    def test_camel_case_payload(self):
        item = Item.model_validate({
            "id": "1",
            "cuisine": "Cafe",
            "priceRange": 3,
            "isTreasure": True,
            "location": {"latitude": 1.0, "longitude": 2.0},
        })
        assert item.price_range == 3
        assert item.is_treasure is True
        assert item.model_dump(by_alias=True)["isUnlocked"] is False

    def test_missing_price_information_is_invalid(self):
        with pytest.raises(ValidationError):
            Item(id="1", cuisine="Cafe", location=SF)

    def test_popularity_bounds(self):
        with pytest.raises(ValidationError):
            Item(id="1", cuisine="Cafe", price_range=1, popularity=101, location=SF)

    def test_duplicate_tags_collapse(self):
        item = Item(id="1", cuisine="Cafe", price_range=1, tags=["a", "b", "a"], location=SF)
        assert item.tags == ["a", "b"]

    def test_items_are_immutable(self):
        item = Item(id="1", cuisine="Cafe", price_range=1, location=SF)
        with pytest.raises(ValidationError):
            item.popularity = 10


# ── Item sources ─────────────────────────────────────────────────────────


def test_sample_source_places_items_around_location():
    items = asyncio.run(SampleItemSource().nearby(SF.latitude, SF.longitude, 5))
    assert [i.id for i in items] == ["1", "2", "3", "4", "5"]
    assert all(i.is_unlocked for i in items)
    assert [i.id for i in items if i.is_treasure] == ["3"]
    assert items[0].location.latitude == pytest.approx(SF.latitude + 0.001)


def _write_csv(tmp_path: Path) -> Path:
    path = tmp_path / "catalog.csv"
    path.write_text(CSV_TEXT, encoding="utf-8")
    return path


def test_csv_source_filters_by_radius(tmp_path: Path):
    source = CsvItemSource(_write_csv(tmp_path))
    items = asyncio.run(source.nearby(SF.latitude, SF.longitude, 1))
    assert [i.id for i in items] == ["a"]

    taco = items[0]
    assert taco.tags == ["spicy", "tacos"]
    assert taco.price_range == 1
    assert taco.is_treasure is True
    assert taco.is_unlocked is False
    assert taco.popularity == 60.0


def test_csv_source_reads_every_column(tmp_path: Path):
    source = CsvItemSource(_write_csv(tmp_path))
    items = asyncio.run(source.nearby(SF.latitude, SF.longitude, 20))
    assert [i.id for i in items] == ["a", "b"]

    far = items[1]
    assert far.name == "Chez Loin"
    assert far.price_range == 4
    assert far.price is None
    assert far.popularity == 0.0
    assert far.is_unlocked is True


class _BrokenSource:
    async def nearby(self, latitude, longitude, radius_km):
        raise RuntimeError("catalog offline")


def test_fetch_items_degrades_to_empty():
    assert asyncio.run(fetch_items(_BrokenSource(), SF, 5)) == []


def test_fetch_items_passes_through():
    items = asyncio.run(fetch_items(SampleItemSource(), SF, 5))
    assert len(items) == 5


# ── Location provider ────────────────────────────────────────────────────


class _DeniedProvider:
    async def current(self) -> Location:
        raise PermissionDenied()


class _FailingProvider:
    async def current(self) -> Location:
        raise OSError("gps unavailable")


class _SlowProvider:
    async def current(self) -> Location:
        await asyncio.sleep(5)
        return Location(latitude=1.0, longitude=1.0)


class TestResolveLocation:
    def test_provider_location_is_used(self):
        location = asyncio.run(resolve_location(FixedLocationProvider(40.7, -74.0)))
        assert location == Location(latitude=40.7, longitude=-74.0)

    def test_permission_denied_falls_back(self):
        assert asyncio.run(resolve_location(_DeniedProvider())) == SF

    def test_provider_error_falls_back(self):
        assert asyncio.run(resolve_location(_FailingProvider())) == SF

    def test_timeout_falls_back(self):
        config = EngineConfig(location_timeout=0.01)
        assert asyncio.run(resolve_location(_SlowProvider(), config)) == SF

    def test_configured_fallback(self):
        config = EngineConfig(fallback_latitude=1.5, fallback_longitude=2.5)
        assert fallback_location(config) == Location(latitude=1.5, longitude=2.5)
        assert asyncio.run(resolve_location(_DeniedProvider(), config)) == Location(
            latitude=1.5, longitude=2.5,
        )
