import logging
from typing import List

from ftorplanner.domain.Recipe import Recipe
from ftorplanner.infra.Collection_Repository import CollectionRepository
from ftorplanner.utilities.constants import RECIPES_KEY
from ftorplanner.utilities.errors import ValidationError

logger = logging.getLogger(__name__)


class RecipeRepository(CollectionRepository[Recipe]):
    key = RECIPES_KEY
    entity_name = "recipe"

    def _from_dict(self, data) -> Recipe:
        return Recipe.from_dict(data)

    def _before_insert(self, entity: Recipe) -> None:
        entity.updated_at = entity.created_at

    def _before_replace(self, entity: Recipe, existing: Recipe) -> None:
        entity.updated_at = self.now()

    async def save(self, partial) -> Recipe:
        recipe = self._coerce(partial)
        recipe.title = (recipe.title or "").strip()
        if not recipe.title:
            raise ValidationError("Recipe title is required", field="title")
        return await super().save(recipe)

    async def search(self, query: str) -> List[Recipe]:
        """Recipes whose title, description or ingredients contain the query."""
        return [r for r in await self.list() if r.matches_query(query)]

    async def titles(self) -> List[str]:
        return [r.title for r in await self.list() if r.title]

    async def suggest_titles(self, text: str) -> List[str]:
        """Recipe titles containing the typed text (meal-name autocomplete)."""
        fragment = (text or "").strip().lower()
        if not fragment:
            return []
        return [t for t in await self.titles() if fragment in t.lower()]
