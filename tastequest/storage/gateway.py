from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any, Protocol

from ..errors import StorageReadFailure


class PersistenceGateway(Protocol):
    async def get(self, key: str) -> Any | None:
        """Return the JSON value stored under *key*, or ``None`` if absent."""
        ...

    async def set(self, key: str, value: Any) -> None:
        ...


def _decode(key: str, raw: str) -> Any:
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise StorageReadFailure(key, str(exc)) from exc


class InMemoryGateway:
    """Process-local store; values are kept JSON-encoded like on disk."""

    def __init__(self) -> None:
        self._store: dict[str, str] = {}

    async def get(self, key: str) -> Any | None:
        raw = self._store.get(key)
        if raw is None:
            return None
        return _decode(key, raw)

    async def set(self, key: str, value: Any) -> None:
        self._store[key] = json.dumps(value)

    def raw(self, key: str) -> str | None:
        """Encoded value under *key*, for inspecting what was persisted."""
        return self._store.get(key)

    def put_raw(self, key: str, raw: str) -> None:
        """Store *raw* verbatim, bypassing encoding (e.g. to plant a corrupt blob)."""
        self._store[key] = raw


class JsonFileGateway:
    """One ``<key>.json`` file per key under *directory*."""

    def __init__(self, directory: str | Path) -> None:
        self._directory = Path(directory)

    def _path(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def _read(self, key: str) -> Any | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageReadFailure(key, str(exc)) from exc
        return _decode(key, raw)

    def _write(self, key: str, value: Any) -> None:
        self._directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(value), encoding="utf-8")
        tmp.replace(path)

    async def get(self, key: str) -> Any | None:
        return await asyncio.to_thread(self._read, key)

    async def set(self, key: str, value: Any) -> None:
        await asyncio.to_thread(self._write, key, value)
