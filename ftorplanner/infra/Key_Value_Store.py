"""Key-value persistence: raw string backends plus the JSON-typed adapter.

Backends only move strings around and may raise whatever their I/O layer
raises. StoreAdapter is the boundary the repositories talk to: it encodes and
decodes JSON and turns every backend failure into a StorageError.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import shutil
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from ftorplanner.utilities.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Asynchronous string key-value store (AsyncStorage-like contract)."""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]: ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None: ...

    @abstractmethod
    async def remove(self, key: str) -> None: ...

    @abstractmethod
    async def multi_remove(self, keys: Iterable[str]) -> None: ...


class MemoryStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    async def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> None:
        self._data.pop(key, None)

    async def multi_remove(self, keys: Iterable[str]) -> None:
        for key in keys:
            self._data.pop(key, None)

    def snapshot(self) -> Dict[str, str]:
        return dict(self._data)


class JsonFileStore(KeyValueStore):
    """Whole store kept in a single JSON object file ({key: string value}).

    Each operation reads the file, and writes go through a temp file that is
    moved over the original. Blocking file I/O runs in a worker thread.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    # --- sync helpers (run in a thread) ------------------------------------
    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, 'r', encoding='utf-8') as f:
            data = json.load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Store file {self.path} does not contain a JSON object")
        return data

    def _write_all(self, data: Dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=str(self.path.parent), prefix=".store_", suffix=".json")
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as tmp:
                json.dump(data, tmp, indent=2, ensure_ascii=False)
            shutil.move(tmp_path, self.path)
        finally:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def _set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def _remove_many(self, keys: List[str]) -> None:
        data = self._read_all()
        changed = False
        for key in keys:
            if key in data:
                del data[key]
                changed = True
        if changed:
            self._write_all(data)

    # --- async contract -----------------------------------------------------
    async def get(self, key: str) -> Optional[str]:
        data = await asyncio.to_thread(self._read_all)
        return data.get(key)

    async def set(self, key: str, value: str) -> None:
        await asyncio.to_thread(self._set, key, value)

    async def remove(self, key: str) -> None:
        await asyncio.to_thread(self._remove_many, [key])

    async def multi_remove(self, keys: Iterable[str]) -> None:
        await asyncio.to_thread(self._remove_many, list(keys))


class StoreAdapter:
    """Typed JSON access over a KeyValueStore.

    Missing keys never raise: get_list() yields [] and get_json() the default.
    Any backend or serialization failure surfaces as StorageError with the
    original exception chained as __cause__.
    """

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    async def get_raw(self, key: str) -> Optional[str]:
        try:
            return await self.backend.get(key)
        except Exception as e:
            logger.error(f"Error reading key '{key}': {e}")
            raise StorageError(f"Could not read '{key}'", key=key) from e

    async def set_raw(self, key: str, value: str) -> None:
        try:
            await self.backend.set(key, value)
        except Exception as e:
            logger.error(f"Error writing key '{key}': {e}")
            raise StorageError(f"Could not write '{key}'", key=key) from e

    async def get_json(self, key: str, default: Any = None) -> Any:
        raw = await self.get_raw(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.error(f"Invalid JSON stored under '{key}': {e}")
            raise StorageError(f"Corrupted value for '{key}'", key=key) from e

    async def get_list(self, key: str) -> List[Any]:
        value = await self.get_json(key, default=[])
        if not isinstance(value, list):
            raise StorageError(f"Expected a list under '{key}', got {type(value).__name__}", key=key)
        return value

    async def set_json(self, key: str, value: Any) -> None:
        try:
            encoded = json.dumps(value, ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(f"Value for '{key}' is not JSON serializable: {e}")
            raise StorageError(f"Could not serialize '{key}'", key=key) from e
        await self.set_raw(key, encoded)

    async def remove(self, key: str) -> None:
        try:
            await self.backend.remove(key)
        except Exception as e:
            logger.error(f"Error removing key '{key}': {e}")
            raise StorageError(f"Could not remove '{key}'", key=key) from e

    async def multi_remove(self, keys: Iterable[str]) -> None:
        keys = list(keys)
        try:
            await self.backend.multi_remove(keys)
        except Exception as e:
            logger.error(f"Error removing keys {keys}: {e}")
            raise StorageError(f"Could not remove keys {keys}") from e


__all__ = ['KeyValueStore', 'MemoryStore', 'JsonFileStore', 'StoreAdapter']
