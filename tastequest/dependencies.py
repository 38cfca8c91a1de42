from __future__ import annotations

from fastapi import Request

from .catalog.location import FixedLocationProvider, LocationProvider
from .catalog.source import CsvItemSource, ItemSource, SampleItemSource
from .config import EngineConfig
from .storage.gateway import InMemoryGateway, JsonFileGateway, PersistenceGateway


def build_gateway(config: EngineConfig) -> PersistenceGateway:
    """JSON files under ``store_path`` when configured, memory otherwise."""
    if config.store_path:
        return JsonFileGateway(config.store_path)
    return InMemoryGateway()


def build_item_source(config: EngineConfig) -> ItemSource:
    if config.catalog_csv:
        return CsvItemSource(config.catalog_csv)
    return SampleItemSource()


def get_config(request: Request) -> EngineConfig:
    return request.app.state.config


def get_gateway(request: Request) -> PersistenceGateway:
    return request.app.state.gateway


def get_item_source(request: Request) -> ItemSource:
    return request.app.state.item_source


def get_location_provider(
    request: Request,
    lat: float | None = None,
    lon: float | None = None,
) -> LocationProvider:
    """Use the client-reported position when both coordinates are given."""
    if lat is not None and lon is not None:
        return FixedLocationProvider(lat, lon)
    return request.app.state.location_provider
