"""Recipe suggestions from the ingredients a user owns.

match_recipes(recipes, owned) scores every recipe against the owned keys:

  match_count   = owned keys found in the recipe
                  (substring of the free text, or membership in the key list)
  missing_count = required tokens of the recipe not covered by any owned key
                  (a token is covered when an owned key is a substring of it)

Required tokens of a free-text recipe are the first word of each non-blank
line; a canonical recipe's tokens are its keys. Everything is compared
lower-cased. Recipes with no match are dropped; the rest are ordered by
match_count descending, then missing_count ascending, original order kept
for ties.

Containment is deliberately loose, so "pepper" also matches "peppers" or
"peppermint".
"""
from __future__ import annotations

from typing import Iterable, List, Sequence

from ftorplanner.domain.Recipe import Recipe, FreeTextIngredients, CanonicalIngredientList

__all__ = ["RecipeMatch", "normalize_owned", "required_tokens", "score_recipe", "match_recipes", "suggest"]


class RecipeMatch:
    def __init__(self, recipe: Recipe, matched: List[str], missing: List[str]):
        self.recipe = recipe
        self.matched = matched
        self.missing = missing

    @property
    def match_count(self) -> int:
        return len(self.matched)

    @property
    def missing_count(self) -> int:
        return len(self.missing)

    def to_dict(self):
        return {
            'recipe': self.recipe.to_dict(),
            'matchCount': self.match_count,
            'missingCount': self.missing_count,
            'matched': list(self.matched),
            'missing': list(self.missing),
        }

    def __repr__(self) -> str:
        return f"RecipeMatch({self.recipe.title!r}, match={self.match_count}, missing={self.missing_count})"


def _unique(values: Iterable[str]) -> List[str]:
    seen = set()
    out: List[str] = []
    for v in values:
        if v and v not in seen:
            seen.add(v)
            out.append(v)
    return out


def normalize_owned(owned: Iterable[str]) -> List[str]:
    """Lower-case, strip and de-duplicate owned keys, keeping first occurrence order."""
    return _unique((k or '').strip().lower() for k in owned)


def required_tokens(recipe: Recipe) -> List[str]:
    ingredients = recipe.ingredients
    if isinstance(ingredients, CanonicalIngredientList):
        return _unique(k.strip().lower() for k in ingredients.keys)
    if isinstance(ingredients, FreeTextIngredients):
        tokens = []
        for line in ingredients.text.lower().splitlines():
            words = line.split()
            if words:
                tokens.append(words[0])
        return _unique(tokens)
    raise TypeError(f"Unsupported ingredients type: {type(ingredients).__name__}")


def _matched_keys(recipe: Recipe, owned: Sequence[str]) -> List[str]:
    ingredients = recipe.ingredients
    if isinstance(ingredients, CanonicalIngredientList):
        keys = {k.strip().lower() for k in ingredients.keys}
        return [k for k in owned if k in keys]
    if isinstance(ingredients, FreeTextIngredients):
        text = ingredients.text.lower()
        return [k for k in owned if k in text]
    raise TypeError(f"Unsupported ingredients type: {type(ingredients).__name__}")


def score_recipe(recipe: Recipe, owned: Iterable[str]) -> RecipeMatch:
    owned_keys = normalize_owned(owned)
    matched = _matched_keys(recipe, owned_keys)
    missing = [token for token in required_tokens(recipe)
               if not any(k in token for k in owned_keys)]
    return RecipeMatch(recipe, matched, missing)


def match_recipes(recipes: Iterable[Recipe], owned: Iterable[str]) -> List[RecipeMatch]:
    """Rank recipes by how well the owned ingredients cover them."""
    owned_keys = normalize_owned(owned)
    if not owned_keys:
        return []
    scored = [score_recipe(r, owned_keys) for r in recipes]
    hits = [m for m in scored if m.match_count > 0]
    # sorted() is stable, equal scores keep collection order
    return sorted(hits, key=lambda m: (-m.match_count, m.missing_count))


async def suggest(recipe_repo, ingredient_repo) -> List[RecipeMatch]:
    """Load the recipe collection and the user's ingredient set, then rank."""
    recipes = await recipe_repo.list()
    owned = await ingredient_repo.list()
    return match_recipes(recipes, owned)
