import unittest
import pytest

from ftorplanner.domain.Recipe import Recipe, FreeTextIngredients, CanonicalIngredientList
from ftorplanner.infra.Ingredient_Repository import UserIngredientRepository
from ftorplanner.infra.Key_Value_Store import MemoryStore, StoreAdapter
from ftorplanner.infra.Recipe_Repository import RecipeRepository
from ftorplanner.logic.matching.suggest import (
    match_recipes, score_recipe, required_tokens, normalize_owned, suggest
)


def free(title, text):
    return Recipe(id=title, title=title, ingredients=FreeTextIngredients(text))


def canonical(title, keys):
    return Recipe(id=title, title=title, ingredients=CanonicalIngredientList(keys))


class TestScoring(unittest.TestCase):

    def test_free_text_example(self):
        match = score_recipe(free("Salsa", "tomatoes\nonions\ngarlic"), ["tomato", "garlic"])
        self.assertEqual(match.match_count, 2)
        self.assertEqual(match.missing_count, 1)
        self.assertEqual(match.missing, ["onions"])

    def test_first_word_per_line_is_the_token(self):
        recipe = free("Soup", "Carrots, diced\n\n  Onions 2 pcs\ncarrots, sliced\n")
        self.assertEqual(required_tokens(recipe), ["carrots,", "onions"])

    def test_canonical_keys_use_membership(self):
        recipe = canonical("Salad", ["Lettuce", "cucumber", "olive_oil"])
        match = score_recipe(recipe, ["lettuce", "olive"])
        # "olive" is not a key of the recipe, but it covers the "olive_oil" token
        self.assertEqual(match.matched, ["lettuce"])
        self.assertEqual(match.missing, ["cucumber"])

    def test_owned_keys_are_normalized(self):
        self.assertEqual(normalize_owned([" Garlic", "garlic", "", "RICE"]), ["garlic", "rice"])
        match = score_recipe(free("Rice", "Rice\nGarlic"), ["GARLIC", "garlic"])
        self.assertEqual(match.match_count, 1)

    def test_loose_containment_is_kept(self):
        match = score_recipe(free("Tea", "peppermint leaves"), ["pepper"])
        self.assertEqual(match.match_count, 1)
        self.assertEqual(match.missing_count, 0)


class TestRanking(unittest.TestCase):

    def setUp(self):
        self.recipes = [
            free("Omelette", "eggs\ncheese\nbutter"),
            free("Pancakes", "flour\nmilk\neggs\nsugar"),
            canonical("Fried rice", ["rice", "eggs", "onions"]),
            free("Steak", "beef\nsalt"),
            free("Cheese toast", "bread\ncheese"),
        ]

    def test_empty_recipe_list(self):
        self.assertEqual(match_recipes([], ["eggs"]), [])

    def test_no_owned_ingredients(self):
        self.assertEqual(match_recipes(self.recipes, []), [])

    def test_excludes_recipes_without_match(self):
        titles = [m.recipe.title for m in match_recipes(self.recipes, ["eggs"])]
        self.assertNotIn("Steak", titles)
        self.assertNotIn("Cheese toast", titles)

    def test_sorted_by_matches_then_missing(self):
        ranked = match_recipes(self.recipes, ["eggs", "cheese", "bread"])
        self.assertEqual([m.recipe.title for m in ranked],
                         ["Cheese toast", "Omelette", "Fried rice", "Pancakes"])
        for earlier, later in zip(ranked, ranked[1:]):
            self.assertGreaterEqual((earlier.match_count, -earlier.missing_count),
                                    (later.match_count, -later.missing_count))

    def test_ties_keep_collection_order(self):
        recipes = [free("B", "eggs\nham"), free("A", "eggs\nspam"), free("C", "eggs\njam")]
        ranked = match_recipes(recipes, ["eggs"])
        self.assertEqual([m.recipe.title for m in ranked], ["B", "A", "C"])

    def test_ranking_is_deterministic(self):
        owned = ["eggs", "cheese", "milk", "rice"]
        first = [m.to_dict() for m in match_recipes(self.recipes, owned)]
        for _ in range(5):
            self.assertEqual([m.to_dict() for m in match_recipes(self.recipes, owned)], first)


@pytest.mark.asyncio
async def test_suggest_reads_repositories():
    store = StoreAdapter(MemoryStore())
    recipes = RecipeRepository(store)
    ingredients = UserIngredientRepository(store)
    await recipes.save(Recipe(title="Salsa", ingredients=FreeTextIngredients("tomatoes\nonions\ngarlic")))
    await recipes.save(Recipe(title="Bread", ingredients=FreeTextIngredients("flour\nwater")))
    await ingredients.toggle("tomato")
    await ingredients.toggle("Garlic")

    matches = await suggest(recipes, ingredients)
    assert [m.recipe.title for m in matches] == ["Salsa"]
    assert matches[0].to_dict()["matchCount"] == 2
    assert matches[0].to_dict()["missingCount"] == 1
