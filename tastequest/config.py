from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class EngineConfig:
    unlock_radius_m: float = 500.0
    max_energy: float = 100.0
    decision_cost: float = 1.0
    skip_cost: float = 0.5
    unlock_grant: float = 10.0
    treasure_unlock_grant: float = 15.0
    treasure_like_bonus: float = 5.0
    fallback_latitude: float = 37.7749
    fallback_longitude: float = -122.4194
    location_timeout: float = float(os.getenv("TASTEQUEST_LOCATION_TIMEOUT", "5.0"))
    map_radius_km: float = 10.0
    deck_radius_km: float = 5.0
    store_path: str = os.getenv("TASTEQUEST_STORE_PATH", "")
    catalog_csv: str = os.getenv("TASTEQUEST_CATALOG_CSV", "")

    def __post_init__(self) -> None:
        # Persisted stats only accept energy in [0, 100]
        if not 0 < self.max_energy <= 100:
            raise ValueError(f"max_energy must be in (0, 100], got {self.max_energy}")


DEFAULT_ENGINE_CONFIG = EngineConfig()
