"""Shopping list repository persisted under the 'shoppingList' key."""
import logging
from typing import List

from ftorplanner.domain.ShoppingItem import ShoppingItem
from ftorplanner.infra.Collection_Repository import CollectionRepository
from ftorplanner.utilities.constants import SHOPPING_LIST_KEY
from ftorplanner.utilities.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def display_order(items: List[ShoppingItem]) -> List[ShoppingItem]:
    """Incomplete items first, newest first within each group."""
    by_newest = sorted(items, key=lambda i: i.created_at or "", reverse=True)
    return sorted(by_newest, key=lambda i: i.completed)


class ShoppingListRepository(CollectionRepository[ShoppingItem]):
    key = SHOPPING_LIST_KEY
    entity_name = "shopping item"

    def _from_dict(self, data) -> ShoppingItem:
        return ShoppingItem.from_dict(data)

    async def save(self, partial) -> ShoppingItem:
        item = self._coerce(partial)
        item.text = (item.text or "").strip()
        if not item.text:
            raise ValidationError("Item text is required", field="text")
        return await super().save(item)

    async def add(self, text: str) -> ShoppingItem:
        return await self.save(ShoppingItem(text=text))

    async def _require(self, item_id: str) -> ShoppingItem:
        item = await self.get(item_id)
        if item is None:
            raise NotFoundError(f"Shopping item not found: {item_id}", field="id")
        return item

    async def toggle(self, item_id: str) -> ShoppingItem:
        item = await self._require(item_id)
        return await self.save(item.toggle())

    async def update_text(self, item_id: str, text: str) -> ShoppingItem:
        item = await self._require(item_id)
        item.text = text
        return await self.save(item)

    async def clear_completed(self) -> int:
        """Drop every completed item; returns how many were removed."""
        items = await self.list()
        remaining = [i for i in items if not i.completed]
        removed = len(items) - len(remaining)
        if removed:
            await self._write(remaining)
            logger.info(f"Cleared {removed} completed shopping items")
        return removed

    async def list_sorted(self) -> List[ShoppingItem]:
        return display_order(await self.list())


__all__ = ['ShoppingListRepository', 'display_order']
