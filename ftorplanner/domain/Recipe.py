"""Recipe domain entity: title, description, ingredients, instructions, timings.

Ingredients come in two persisted shapes. Older records hold one free-text
blob (one ingredient per line), newer ones a list of canonical ingredient
keys. Both are modelled explicitly so callers branch on the type instead of
sniffing the raw value.
"""
from typing import List, Optional, Union


class FreeTextIngredients:
    kind = "free_text"

    def __init__(self, text: str = ""):
        self.text = text or ""

    def searchable_text(self) -> str:
        return self.text

    def to_raw(self):
        return self.text

    def __eq__(self, other):
        return isinstance(other, FreeTextIngredients) and other.text == self.text

    def __repr__(self) -> str:
        return f"FreeTextIngredients({self.text!r})"


class CanonicalIngredientList:
    kind = "canonical"

    def __init__(self, keys: Optional[List[str]] = None):
        self.keys = [str(k) for k in keys] if keys else []

    def searchable_text(self) -> str:
        return "\n".join(self.keys)

    def to_raw(self):
        return list(self.keys)

    def __eq__(self, other):
        return isinstance(other, CanonicalIngredientList) and other.keys == self.keys

    def __repr__(self) -> str:
        return f"CanonicalIngredientList({self.keys!r})"


RecipeIngredients = Union[FreeTextIngredients, CanonicalIngredientList]


def ingredients_from_raw(value) -> RecipeIngredients:
    '''Map a stored ingredients value (string or list) onto its tagged type.'''
    if isinstance(value, (FreeTextIngredients, CanonicalIngredientList)):
        return value
    if isinstance(value, list):
        return CanonicalIngredientList(value)
    if value is None:
        return FreeTextIngredients("")
    return FreeTextIngredients(str(value))


class Recipe:
    def __init__(self, id: Optional[str] = None, title: str = "", description: str = "",
                 ingredients: Optional[RecipeIngredients] = None, instructions: str = "",
                 prep_time: str = "", cook_time: str = "", servings: str = "", category: str = "",
                 created_at: Optional[str] = None, updated_at: Optional[str] = None):
        self.id = id
        self.title = title
        self.description = description
        self.ingredients = ingredients if ingredients is not None else FreeTextIngredients("")
        self.instructions = instructions
        self.prep_time = prep_time
        self.cook_time = cook_time
        self.servings = servings
        self.category = category
        self.created_at = created_at
        self.updated_at = updated_at

    def __str__(self) -> str:
        return f"{self.title} - {self.category or 'uncategorized'} - Servings: {self.servings}"

    __repr__ = __str__

    def __eq__(self, other):
        if not isinstance(other, Recipe):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return Recipe(
            id=d.get("id"),
            title=d.get("title", "") or "",
            description=d.get("description", "") or "",
            ingredients=ingredients_from_raw(d.get("ingredients")),
            instructions=d.get("instructions", "") or "",
            prep_time=d.get("prepTime", "") or "",
            cook_time=d.get("cookTime", "") or "",
            servings=d.get("servings", "") or "",
            category=d.get("category", "") or "",
            created_at=d.get("createdAt"),
            updated_at=d.get("updatedAt"),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": self.ingredients.to_raw(),
            "instructions": self.instructions,
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "category": self.category,
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def matches_query(self, query: str) -> bool:
        """Case-insensitive search over title, description and ingredient text."""
        q = (query or "").strip().lower()
        if not q:
            return True
        return (q in self.title.lower()
                or q in self.description.lower()
                or q in self.ingredients.searchable_text().lower())
