from typing import Optional
from fastapi import APIRouter, Depends, Query

from ftorplanner.api.services import AppServices, get_services
from ftorplanner.domain.Recipe import Recipe, ingredients_from_raw
from ftorplanner.utilities.validators import RecipeInput

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def _to_recipe(payload: RecipeInput, recipe_id: Optional[str] = None) -> Recipe:
    return Recipe(
        id=recipe_id,
        title=payload.title,
        description=payload.description,
        ingredients=ingredients_from_raw(payload.ingredients),
        instructions=payload.instructions,
        prep_time=payload.prepTime,
        cook_time=payload.cookTime,
        servings=payload.servings,
        category=payload.category,
    )


@router.get("")
async def list_recipes(q: Optional[str] = Query(default=None), services: AppServices = Depends(get_services)):
    """All recipes, or those whose title/description/ingredients contain q."""
    recipes = await services.recipes.search(q) if q else await services.recipes.list()
    return {"recipes": [r.to_dict() for r in recipes], "count": len(recipes)}


@router.get("/titles")
async def recipe_titles(q: Optional[str] = Query(default=None), services: AppServices = Depends(get_services)):
    """Recipe titles for meal-name autocomplete."""
    titles = await services.recipes.suggest_titles(q) if q else await services.recipes.titles()
    return {"titles": titles}


@router.post("", status_code=201)
async def create_recipe(payload: RecipeInput, services: AppServices = Depends(get_services)):
    recipe = await services.recipes.save(_to_recipe(payload))
    return recipe.to_dict()


@router.put("/{recipe_id}")
async def update_recipe(recipe_id: str, payload: RecipeInput, services: AppServices = Depends(get_services)):
    recipe = await services.recipes.save(_to_recipe(payload, recipe_id))
    return recipe.to_dict()


@router.delete("/{recipe_id}")
async def delete_recipe(recipe_id: str, services: AppServices = Depends(get_services)):
    await services.recipes.remove(recipe_id)
    return {"status": "deleted", "id": recipe_id}
