from typing import Optional
from fastapi import APIRouter, Depends, Query

from ftorplanner.api.services import AppServices, get_services
from ftorplanner.infra.Ingredient_Repository import search_catalog
from ftorplanner.logic.matching.suggest import suggest
from ftorplanner.utilities.validators import IngredientToggleInput

router = APIRouter(prefix="/api/ingredients", tags=["ingredients"])


@router.get("")
async def owned_ingredients(services: AppServices = Depends(get_services)):
    return {"ingredients": await services.ingredients.list()}


@router.post("/toggle")
async def toggle_ingredient(payload: IngredientToggleInput, services: AppServices = Depends(get_services)):
    return {"ingredients": await services.ingredients.toggle(payload.key)}


@router.get("/catalog")
def ingredient_catalog(q: Optional[str] = Query(default=None)):
    """Common ingredient keys for the picker, filtered by q."""
    return {"ingredients": search_catalog(q or "")}


@router.get("/suggestions")
async def recipe_suggestions(services: AppServices = Depends(get_services)):
    """Recipes ranked by how many owned ingredients they use."""
    matches = await suggest(services.recipes, services.ingredients)
    return {"matches": [m.to_dict() for m in matches], "count": len(matches)}
