from __future__ import annotations

from fastapi import Depends, FastAPI
from pydantic import BaseModel, Field

from .analytics.aggregator import compute_summary
from .analytics.models import ProfileSummary
from .catalog.location import FixedLocationProvider, LocationProvider, resolve_location
from .catalog.models import Item, SnapshotModel
from .catalog.source import ItemSource
from .config import DEFAULT_ENGINE_CONFIG, EngineConfig
from .dependencies import (
    build_gateway,
    build_item_source,
    get_config,
    get_gateway,
    get_item_source,
    get_location_provider,
)
from .profile.models import DecisionType, PreferenceProfile
from .session import service
from .session.models import DecisionResult, DeckView, MapView, SessionStats, UnlockResult
from .storage import repository
from .storage.gateway import PersistenceGateway

app = FastAPI(title="TasteQuest API", version="1.0.0")
app.state.config = DEFAULT_ENGINE_CONFIG
app.state.gateway = build_gateway(DEFAULT_ENGINE_CONFIG)
app.state.item_source = build_item_source(DEFAULT_ENGINE_CONFIG)
app.state.location_provider = FixedLocationProvider(
    DEFAULT_ENGINE_CONFIG.fallback_latitude, DEFAULT_ENGINE_CONFIG.fallback_longitude,
)


class DecisionRequest(BaseModel):
    type: DecisionType
    item: Item


class UnlockRequest(BaseModel):
    item: Item


class FavoriteRequest(SnapshotModel):
    item_id: str = Field(..., min_length=1)


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Profile & stats ──────────────────────────────────────────────────────


@app.get("/profile", response_model=PreferenceProfile)
async def get_profile(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> PreferenceProfile:
    return await repository.load_profile(gateway)


@app.post("/profile/reset", response_model=PreferenceProfile)
async def reset_profile(
    gateway: PersistenceGateway = Depends(get_gateway),
) -> PreferenceProfile:
    return await service.reset_profile(gateway)


@app.get("/stats", response_model=SessionStats)
async def get_stats(gateway: PersistenceGateway = Depends(get_gateway)) -> SessionStats:
    return await repository.load_stats(gateway)


@app.post("/stats/reset", response_model=SessionStats)
async def reset_stats(gateway: PersistenceGateway = Depends(get_gateway)) -> SessionStats:
    return await service.reset_stats(gateway)


@app.get("/summary", response_model=ProfileSummary)
async def summary(gateway: PersistenceGateway = Depends(get_gateway)) -> ProfileSummary:
    profile = await repository.load_profile(gateway)
    stats = await repository.load_stats(gateway)
    return ProfileSummary.model_validate(compute_summary(profile, stats))


# ── Map & deck ───────────────────────────────────────────────────────────


@app.get("/map", response_model=MapView)
async def map_view(
    gateway: PersistenceGateway = Depends(get_gateway),
    source: ItemSource = Depends(get_item_source),
    provider: LocationProvider = Depends(get_location_provider),
    config: EngineConfig = Depends(get_config),
) -> MapView:
    return await service.load_map(gateway, source, provider, config)


@app.get("/deck", response_model=DeckView)
async def deck_view(
    gateway: PersistenceGateway = Depends(get_gateway),
    source: ItemSource = Depends(get_item_source),
    provider: LocationProvider = Depends(get_location_provider),
    config: EngineConfig = Depends(get_config),
) -> DeckView:
    return await service.load_deck(gateway, source, provider, config)


# ── Actions ──────────────────────────────────────────────────────────────


@app.post("/decisions", response_model=DecisionResult)
async def decide(
    body: DecisionRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
    config: EngineConfig = Depends(get_config),
) -> DecisionResult:
    # Exhaustion is reported in the body status, not as an HTTP error
    return await service.record_decision(gateway, body.item, body.type, config)


@app.post("/unlock", response_model=UnlockResult)
async def unlock(
    body: UnlockRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
    provider: LocationProvider = Depends(get_location_provider),
    config: EngineConfig = Depends(get_config),
) -> UnlockResult:
    location = await resolve_location(provider, config)
    return await service.unlock_item(gateway, body.item, location, config)


@app.post("/favorites", response_model=SessionStats)
async def favorites(
    body: FavoriteRequest,
    gateway: PersistenceGateway = Depends(get_gateway),
) -> SessionStats:
    return await service.add_to_favorites(gateway, body.item_id)
