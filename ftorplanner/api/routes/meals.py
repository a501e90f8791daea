from typing import Optional
from fastapi import APIRouter, Depends, Query, Response

from ftorplanner.api.services import AppServices, get_services
from ftorplanner.domain.Meal import Meal
from ftorplanner.infra.pdf_utils import generate_pdf_for_week
from ftorplanner.utilities.validators import MealInput

router = APIRouter(prefix="/api/meals", tags=["meals"])


def _to_meal(payload: MealInput, meal_id: Optional[str] = None) -> Meal:
    return Meal(id=meal_id, day=payload.day, meal=payload.meal, notes=payload.notes, meal_type=payload.type)


@router.get("")
async def list_meals(day: Optional[str] = Query(default=None), visible_only: bool = Query(default=False),
                     services: AppServices = Depends(get_services)):
    """Meals sorted by type; optionally for one day and/or only enabled meal types."""
    if visible_only:
        meals = await services.meals.list_visible()
        if day:
            meals = [m for m in meals if m.day == day]
    elif day:
        meals = await services.meals.list_for_day(day)
    else:
        meals = await services.meals.list_sorted()
    return {"meals": [m.to_dict() for m in meals], "count": len(meals)}


@router.post("", status_code=201)
async def create_meal(payload: MealInput, services: AppServices = Depends(get_services)):
    meal = await services.meals.save(_to_meal(payload))
    return meal.to_dict()


@router.get("/week")
async def week_view(services: AppServices = Depends(get_services)):
    week = await services.meals.week_view()
    return {day: [m.to_dict() for m in meals] for day, meals in week.items()}


@router.get("/week.pdf")
async def week_pdf(services: AppServices = Depends(get_services)):
    week = await services.meals.week_view()
    enabled = await services.settings.enabled_meal_types()
    pdf = generate_pdf_for_week(week, enabled)
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": 'attachment; filename="meal_plan.pdf"'})


@router.put("/{meal_id}")
async def update_meal(meal_id: str, payload: MealInput, services: AppServices = Depends(get_services)):
    meal = await services.meals.save(_to_meal(payload, meal_id))
    return meal.to_dict()


@router.delete("/{meal_id}")
async def delete_meal(meal_id: str, services: AppServices = Depends(get_services)):
    await services.meals.remove(meal_id)
    return {"status": "deleted", "id": meal_id}
