"""Composition root: one object that owns the store, the event bus and every service.

Routes receive it through FastAPI's dependency injection (see get_services below);
tests build their own around a MemoryStore.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from fastapi import Request

from ftorplanner.events.Event_Bus import EventBus
from ftorplanner.events.web_observers import RecentEvents
from ftorplanner.infra.Ingredient_Repository import UserIngredientRepository
from ftorplanner.infra.Key_Value_Store import KeyValueStore, StoreAdapter, JsonFileStore
from ftorplanner.infra.Meal_Repository import MealRepository
from ftorplanner.infra.Recipe_Repository import RecipeRepository
from ftorplanner.infra.Shopping_Repository import ShoppingListRepository
from ftorplanner.infra.paths import STORE_FILE, EXPORT_DIR
from ftorplanner.logic.settings.aggregator import SettingsService
from ftorplanner.utilities.export_import import DataExporter, DataImporter


class AppServices:
    def __init__(self, backend: Optional[KeyValueStore] = None, bus: Optional[EventBus] = None,
                 export_dir: Path = EXPORT_DIR):
        self.backend = backend if backend is not None else JsonFileStore(STORE_FILE)
        self.store = StoreAdapter(self.backend)
        self.bus = bus or EventBus()
        self.recent_events = RecentEvents().attach(self.bus)

        self.settings = SettingsService(self.store, self.bus)
        self.meals = MealRepository(self.store, settings=self.settings)
        self.recipes = RecipeRepository(self.store)
        self.shopping = ShoppingListRepository(self.store)
        self.ingredients = UserIngredientRepository(self.store)
        self.exporter = DataExporter(self.store, self.bus, export_dir=export_dir)
        self.importer = DataImporter(self.store, self.bus)


def get_services(request: Request) -> AppServices:
    """FastAPI dependency returning the services owned by the running app."""
    return request.app.state.services


__all__ = ['AppServices', 'get_services']
