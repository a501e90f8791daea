"""Base repository for entity collections stored as one JSON array per key.

Every mutation loads the full collection, changes it in memory and writes
the full collection back.

Single-writer contract: nothing here serializes overlapping mutations. Two
saves on the same collection that are in flight at the same time can lose
one of the updates (last write wins). Callers issue one mutation per
collection at a time; different collections use different keys and never
interfere with each other.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Callable, Generic, Iterable, List, Optional, TypeVar

from ftorplanner.infra.Key_Value_Store import StoreAdapter
from ftorplanner.utilities.errors import NotFoundError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def millis_clock() -> int:
    return int(time.time() * 1000)


def next_id(existing_ids: Iterable[Optional[str]], clock: Callable[[], int] = millis_clock,
            floor: int = 0) -> str:
    """Timestamp-derived id strictly greater than every numeric id seen so far and than floor."""
    highest = floor
    for value in existing_ids:
        if isinstance(value, str) and value.isdigit():
            highest = max(highest, int(value))
    return str(max(clock(), highest + 1))


class CollectionRepository(Generic[T]):
    key: str = ""
    entity_name: str = "item"

    def __init__(self, store: StoreAdapter, clock: Callable[[], int] = millis_clock,
                 now: Callable[[], str] = utc_now_iso):
        self.store = store
        self.clock = clock
        self.now = now
        # highest id issued here; new ids stay above it even after deletes
        self._last_issued = 0

    # --- hooks for subclasses ---------------------------------------------------
    def _from_dict(self, data) -> T:
        raise NotImplementedError

    def _to_dict(self, entity: T) -> dict:
        return entity.to_dict()

    def _coerce(self, value) -> T:
        """Fresh entity built from a dict or from another entity; never the object passed in."""
        if isinstance(value, dict):
            return self._from_dict(value)
        return self._from_dict(self._to_dict(value))

    # --- persistence --------------------------------------------------------------
    async def _load(self) -> List[T]:
        return [self._from_dict(entry) for entry in await self.store.get_list(self.key)]

    async def _write(self, entities: List[T]) -> None:
        await self.store.set_json(self.key, [self._to_dict(e) for e in entities])

    # --- public API -----------------------------------------------------------------
    async def list(self) -> List[T]:
        return await self._load()

    async def get(self, entity_id: str) -> Optional[T]:
        for entity in await self._load():
            if entity.id == entity_id:
                return entity
        return None

    async def save(self, partial) -> T:
        """Insert when the entity has no id, otherwise replace the entity with that id.

        createdAt is stamped on insert and carried over on replace. The stored
        entity is returned; the object passed in is never modified, so after a
        failed write it can be saved again as is.
        """
        entity = self._coerce(partial)
        entities = await self._load()
        issued = None
        if not entity.id:
            entity.id = next_id((e.id for e in entities), self.clock, floor=self._last_issued)
            issued = int(entity.id)
            entity.created_at = self.now()
            self._before_insert(entity)
            entities.append(entity)
        else:
            for index, existing in enumerate(entities):
                if existing.id == entity.id:
                    entity.created_at = existing.created_at
                    self._before_replace(entity, existing)
                    entities[index] = entity
                    break
            else:
                raise NotFoundError(f"{self.entity_name.capitalize()} not found: {entity.id}", field="id")
        await self._write(entities)
        if issued is not None:
            logger.info(f"Created {self.entity_name} {entity.id}")
            self._last_issued = issued
        else:
            logger.info(f"Updated {self.entity_name} {entity.id}")
        return entity

    def _before_insert(self, entity: T) -> None:
        pass

    def _before_replace(self, entity: T, existing: T) -> None:
        pass

    async def remove(self, entity_id: str) -> None:
        """Delete by id; deleting an id that is not present changes nothing."""
        entities = await self._load()
        remaining = [e for e in entities if e.id != entity_id]
        if len(remaining) == len(entities):
            logger.debug(f"{self.entity_name} {entity_id} not found, nothing to delete")
            return
        await self._write(remaining)
        logger.info(f"Deleted {self.entity_name} {entity_id}")


__all__ = ['CollectionRepository', 'next_id', 'utc_now_iso', 'millis_clock']
