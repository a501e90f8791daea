import json
import pytest

from ftorplanner.domain.Meal import Meal
from ftorplanner.domain.Recipe import Recipe, FreeTextIngredients, CanonicalIngredientList
from ftorplanner.events.Event_Bus import EventBus, BACKUP_IMPORTED
from ftorplanner.infra.Ingredient_Repository import UserIngredientRepository
from ftorplanner.infra.Key_Value_Store import MemoryStore, StoreAdapter
from ftorplanner.infra.Meal_Repository import MealRepository
from ftorplanner.infra.Recipe_Repository import RecipeRepository
from ftorplanner.infra.Shopping_Repository import ShoppingListRepository
from ftorplanner.infra.paths import BACKUP_FILE_PREFIX
from ftorplanner.logic.settings.aggregator import SettingsService
from ftorplanner.utilities.export_import import (
    DataExporter, DataImporter, validate_document, is_valid_backup_file
)
from ftorplanner.utilities.errors import ValidationError


async def populate(backend: MemoryStore) -> None:
    store = StoreAdapter(backend)
    settings = SettingsService(store)
    await settings.set({"isDarkMode": True, "language": "ar", "weekStartsOn": "sunday"})
    await settings.toggle_meal_type("snack", False)
    await MealRepository(store, settings=settings).save(
        Meal(day="Tuesday", meal="Harira", notes="for iftar", meal_type="dinner"))
    recipes = RecipeRepository(store)
    await recipes.save(Recipe(title="Msemen", ingredients=FreeTextIngredients("flour\nsemolina\nbutter")))
    await recipes.save(Recipe(title="Zaalouk", ingredients=CanonicalIngredientList(["eggplant", "tomato"])))
    shopping = ShoppingListRepository(store)
    await shopping.add("Dates")
    await UserIngredientRepository(store).toggle("tomato")


@pytest.mark.asyncio
async def test_export_then_import_restores_store_exactly():
    source = MemoryStore()
    await populate(source)

    document = await DataExporter(StoreAdapter(source)).export()
    assert document["version"] == "1.0"
    assert document["exportDate"].endswith("Z")
    assert document["data"]["isDarkMode"] == "true"
    assert document["data"]["mealTypes"]["snack"] is False

    target = MemoryStore({"meals": "[]", "isVegetarian": "true"})
    # documents travel as JSON text
    written = await DataImporter(StoreAdapter(target)).import_document(json.loads(json.dumps(document)))

    assert sorted(written) == sorted(document["data"].keys())
    assert target.snapshot() == source.snapshot()


@pytest.mark.asyncio
async def test_export_skips_absent_keys():
    backend = MemoryStore({"shoppingList": "[]"})
    document = await DataExporter(StoreAdapter(backend)).export()
    assert document["data"] == {"shoppingList": []}


@pytest.mark.asyncio
@pytest.mark.parametrize("document", [
    None,
    "not a backup",
    {"data": {"meals": []}},
    {"version": "", "data": {}},
    {"version": "1.0"},
    {"version": "1.0", "data": ["meals"]},
])
async def test_invalid_document_leaves_store_untouched(document):
    backend = MemoryStore()
    await populate(backend)
    before = backend.snapshot()

    with pytest.raises(ValidationError):
        await DataImporter(StoreAdapter(backend)).import_document(document)
    assert backend.snapshot() == before


@pytest.mark.asyncio
async def test_absent_keys_are_cleared_and_unknown_keys_ignored():
    backend = MemoryStore()
    await populate(backend)
    bus = EventBus()
    events = []
    bus.subscribe(BACKUP_IMPORTED, lambda name, payload: events.append(payload))

    written = await DataImporter(StoreAdapter(backend), bus).import_document({
        "version": "1.0",
        "data": {"meals": [], "language": "fr", "favouriteColour": "green"},
    })

    assert written == ["meals", "language"]
    assert backend.snapshot() == {"meals": "[]", "language": "fr"}
    assert events == [{"keys": ["meals", "language"]}]


@pytest.mark.asyncio
async def test_other_versions_are_accepted():
    backend = MemoryStore()
    await DataImporter(StoreAdapter(backend)).import_document(
        {"version": "0.9", "data": {"isVegetarian": "true"}})
    assert backend.snapshot() == {"isVegetarian": "true"}


@pytest.mark.asyncio
async def test_export_to_file(tmp_path):
    backend = MemoryStore()
    await populate(backend)
    exporter = DataExporter(StoreAdapter(backend), export_dir=tmp_path)

    path = await exporter.export_to_file()
    assert path.parent == tmp_path
    assert path.name.startswith(BACKUP_FILE_PREFIX)
    assert is_valid_backup_file(path)

    restored = MemoryStore()
    await DataImporter(StoreAdapter(restored)).import_from_file(path)
    assert restored.snapshot() == backend.snapshot()


@pytest.mark.asyncio
async def test_import_from_file_rejects_bad_json(tmp_path):
    bad = tmp_path / "broken.json"
    bad.write_text("{ not json", encoding="utf-8")
    backend = MemoryStore({"language": "en"})

    with pytest.raises(ValidationError):
        await DataImporter(StoreAdapter(backend)).import_from_file(bad)
    assert backend.snapshot() == {"language": "en"}
    assert not is_valid_backup_file(bad)


def test_backup_file_needs_export_date(tmp_path):
    path = tmp_path / "no_date.json"
    path.write_text(json.dumps({"version": "1.0", "data": {}}), encoding="utf-8")
    assert not is_valid_backup_file(path)
    assert not is_valid_backup_file(tmp_path / "missing.json")


def test_validate_document_returns_model():
    parsed = validate_document({"version": "1.0", "exportDate": "2024-05-01T08:00:00Z", "data": {}})
    assert parsed.version == "1.0"
    assert parsed.data == {}


@pytest.mark.asyncio
async def test_boolean_flags_export_as_stored_strings():
    backend = MemoryStore({"isDarkMode": "true", "mealReminders": "false"})
    document = await DataExporter(StoreAdapter(backend)).export()
    assert document["data"] == {"isDarkMode": "true", "mealReminders": "false"}


@pytest.mark.asyncio
@pytest.mark.parametrize("value, stored, expected", [
    ("true", "true", True),
    (True, "true", True),
    ("false", "false", False),
    (False, "false", False),
])
async def test_boolean_flags_import_as_store_strings(value, stored, expected):
    backend = MemoryStore()
    store = StoreAdapter(backend)
    await DataImporter(store).import_document({"version": "1.0", "data": {"isVegetarian": value}})

    assert backend.snapshot() == {"isVegetarian": stored}
    assert (await SettingsService(store).get()).is_vegetarian is expected


@pytest.mark.asyncio
@pytest.mark.parametrize("data", [
    {"meals": None},
    {"meals": {}},
    {"recipes": "Msemen"},
    {"userIngredients": {"tomato": True}},
    {"mealTypes": ["breakfast"]},
    {"isDarkMode": "yes"},
    {"notificationsEnabled": 1},
    {"language": None},
    {"weekStartsOn": ["sunday"]},
    {"shoppingList": [], "meals": None},
])
async def test_malformed_values_are_rejected_before_clearing(data):
    backend = MemoryStore()
    await populate(backend)
    before = backend.snapshot()

    with pytest.raises(ValidationError):
        await DataImporter(StoreAdapter(backend)).import_document({"version": "1.0", "data": data})
    assert backend.snapshot() == before
    # collections stay readable
    assert len(await MealRepository(StoreAdapter(backend)).list()) == 1
