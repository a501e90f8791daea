import json
import pytest

from ftorplanner.infra.Key_Value_Store import MemoryStore, JsonFileStore, StoreAdapter, KeyValueStore
from ftorplanner.utilities.errors import StorageError


class BrokenStore(KeyValueStore):
    """Backend whose every operation fails like an unavailable disk."""

    async def get(self, key):
        raise OSError("disk unavailable")

    async def set(self, key, value):
        raise OSError("disk unavailable")

    async def remove(self, key):
        raise OSError("disk unavailable")

    async def multi_remove(self, keys):
        raise OSError("disk unavailable")


@pytest.mark.asyncio
async def test_missing_keys_yield_empty_values():
    adapter = StoreAdapter(MemoryStore())
    assert await adapter.get_list("meals") == []
    assert await adapter.get_json("mealTypes") is None
    assert await adapter.get_raw("language") is None


@pytest.mark.asyncio
async def test_json_values_are_encoded_and_decoded():
    backend = MemoryStore()
    adapter = StoreAdapter(backend)
    await adapter.set_json("meals", [{"id": "1", "meal": "Crêpes"}])
    # stored as a JSON string, unicode kept as is
    assert backend.snapshot()["meals"] == '[{"id": "1", "meal": "Crêpes"}]'
    assert await adapter.get_list("meals") == [{"id": "1", "meal": "Crêpes"}]


@pytest.mark.asyncio
async def test_multi_remove_drops_only_given_keys():
    backend = MemoryStore({"a": "1", "b": "2", "c": "3"})
    adapter = StoreAdapter(backend)
    await adapter.multi_remove(["a", "c", "missing"])
    assert backend.snapshot() == {"b": "2"}


@pytest.mark.asyncio
async def test_corrupted_value_raises_storage_error():
    adapter = StoreAdapter(MemoryStore({"recipes": "{not json"}))
    with pytest.raises(StorageError) as info:
        await adapter.get_list("recipes")
    assert info.value.key == "recipes"
    assert isinstance(info.value.__cause__, json.JSONDecodeError)


@pytest.mark.asyncio
async def test_non_list_collection_raises_storage_error():
    adapter = StoreAdapter(MemoryStore({"meals": '{"id": "1"}'}))
    with pytest.raises(StorageError):
        await adapter.get_list("meals")


@pytest.mark.asyncio
async def test_backend_failures_are_wrapped_with_cause():
    adapter = StoreAdapter(BrokenStore())
    with pytest.raises(StorageError) as info:
        await adapter.get_raw("meals")
    assert isinstance(info.value.__cause__, OSError)
    with pytest.raises(StorageError):
        await adapter.set_json("meals", [])
    with pytest.raises(StorageError):
        await adapter.multi_remove(["meals"])


@pytest.mark.asyncio
async def test_json_file_store_persists_between_instances(tmp_path):
    path = tmp_path / "data" / "store.json"
    first = JsonFileStore(path)
    await first.set("language", "fr")
    await first.set("meals", "[]")
    assert path.exists()

    second = JsonFileStore(path)
    assert await second.get("language") == "fr"
    assert await second.get("meals") == "[]"

    await second.multi_remove(["language"])
    assert await first.get("language") is None
    assert await first.get("meals") == "[]"


@pytest.mark.asyncio
async def test_json_file_store_without_file_is_empty(tmp_path):
    store = JsonFileStore(tmp_path / "nothing.json")
    assert await store.get("meals") is None
    # removing from an empty store does not create the file
    await store.remove("meals")
    assert not (tmp_path / "nothing.json").exists()
