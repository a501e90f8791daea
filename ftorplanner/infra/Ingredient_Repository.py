"""User ingredient set: canonical ingredient keys the user currently owns."""
import logging
from typing import List

from ftorplanner.infra.Key_Value_Store import StoreAdapter
from ftorplanner.utilities.constants import USER_INGREDIENTS_KEY, COMMON_INGREDIENTS
from ftorplanner.utilities.errors import ValidationError

logger = logging.getLogger(__name__)


def normalize_key(key: str) -> str:
    return (key or "").strip().lower()


def search_catalog(query: str = "") -> List[str]:
    """Common ingredient keys containing the query (all of them for an empty query)."""
    q = normalize_key(query)
    if not q:
        return list(COMMON_INGREDIENTS)
    return [k for k in COMMON_INGREDIENTS if q in k]


class UserIngredientRepository:
    def __init__(self, store: StoreAdapter):
        self.store = store

    async def list(self) -> List[str]:
        return [str(k) for k in await self.store.get_list(USER_INGREDIENTS_KEY)]

    async def toggle(self, key: str) -> List[str]:
        """Add the key when absent, remove it when present; returns the new set."""
        normalized = normalize_key(key)
        if not normalized:
            raise ValidationError("Ingredient key is required", field="key")
        owned = await self.list()
        if normalized in owned:
            owned = [k for k in owned if k != normalized]
            logger.info(f"Removed owned ingredient '{normalized}'")
        else:
            owned.append(normalized)
            logger.info(f"Added owned ingredient '{normalized}'")
        await self.store.set_json(USER_INGREDIENTS_KEY, owned)
        return owned

    async def clear(self) -> None:
        await self.store.remove(USER_INGREDIENTS_KEY)


__all__ = ['UserIngredientRepository', 'search_catalog', 'normalize_key']
