"""Meal repository: weekly meal schedule persisted under the 'meals' key."""
from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from ftorplanner.domain.Meal import Meal
from ftorplanner.infra.Collection_Repository import CollectionRepository
from ftorplanner.logic.settings.aggregator import SettingsService
from ftorplanner.utilities.constants import (
    MEALS_KEY, DAYS, MEAL_TYPES, OTHER_MEAL_TYPE, TOGGLEABLE_MEAL_TYPES,
)
from ftorplanner.utilities.errors import ValidationError

logger = logging.getLogger(__name__)


def ordered_days(week_starts_on: str = "monday") -> List[str]:
    """Weekday names starting from the configured first day of the week."""
    if week_starts_on == "sunday":
        return [DAYS[-1]] + list(DAYS[:-1])
    return list(DAYS)


def sort_by_type(meals: Iterable[Meal]) -> List[Meal]:
    """breakfast, lunch, dinner, snack, then the rest; insertion order kept for ties."""
    return sorted(meals, key=lambda m: m.type_rank())


class MealRepository(CollectionRepository[Meal]):
    key = MEALS_KEY
    entity_name = "meal"

    def __init__(self, store, settings: Optional[SettingsService] = None, **kwargs):
        super().__init__(store, **kwargs)
        self.settings = settings

    def _from_dict(self, data) -> Meal:
        return Meal.from_dict(data)

    @staticmethod
    def _validate(meal: Meal) -> None:
        meal.meal = (meal.meal or "").strip()
        meal.notes = (meal.notes or "").strip()
        if not meal.meal:
            raise ValidationError("Meal name is required", field="meal")
        if meal.day not in DAYS:
            raise ValidationError(f"Invalid day: {meal.day!r}", field="day")
        if meal.meal_type is not None and meal.meal_type not in MEAL_TYPES:
            raise ValidationError(f"Invalid meal type: {meal.meal_type!r}", field="type")

    async def _check_type_enabled(self, meal: Meal) -> None:
        if self.settings is None or meal.meal_type in (None, OTHER_MEAL_TYPE):
            return
        enabled = await self.settings.enabled_meal_types()
        if meal.meal_type not in enabled:
            raise ValidationError(f"Meal type '{meal.meal_type}' is disabled in settings", field="type")

    async def save(self, partial) -> Meal:
        meal = self._coerce(partial)
        self._validate(meal)
        if not meal.id:
            # only checked at creation; later setting changes hide meals, never invalidate them
            await self._check_type_enabled(meal)
        return await super().save(meal)

    async def list_sorted(self) -> List[Meal]:
        return sort_by_type(await self.list())

    async def list_for_day(self, day: str) -> List[Meal]:
        if day not in DAYS:
            raise ValidationError(f"Invalid day: {day!r}", field="day")
        return sort_by_type(m for m in await self.list() if m.day == day)

    async def list_visible(self, meal_types: Optional[Dict[str, bool]] = None) -> List[Meal]:
        """Meals whose type is enabled; disabled-type meals are hidden, not deleted."""
        if meal_types is None:
            if self.settings is not None:
                meal_types = (await self.settings.get()).meal_types
            else:
                meal_types = {t: True for t in TOGGLEABLE_MEAL_TYPES}
        return sort_by_type(
            m for m in await self.list()
            if m.meal_type not in TOGGLEABLE_MEAL_TYPES or meal_types.get(m.meal_type, False)
        )

    async def week_view(self, week_starts_on: Optional[str] = None) -> Dict[str, List[Meal]]:
        """Visible meals grouped per day, days ordered from the week start."""
        if week_starts_on is None:
            week_starts_on = (await self.settings.get()).week_starts_on if self.settings else "monday"
        visible = await self.list_visible()
        return {day: [m for m in visible if m.day == day] for day in ordered_days(week_starts_on)}


__all__ = ['MealRepository', 'ordered_days', 'sort_by_type']
