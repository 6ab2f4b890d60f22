"""Tests for the JSON document store."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from diet_tracker.adapters.json_document_store import JsonDocumentStore, empty_document
from diet_tracker.adapters.json_meal_log_repository import JsonMealLogRepository
from diet_tracker.domain.errors import PersistenceError


def test_read_missing_file_returns_empty_document(store: JsonDocumentStore) -> None:
    assert store.read() == empty_document()
    assert not store.path.exists()


def test_transaction_persists_changes(store: JsonDocumentStore) -> None:
    with store.transaction() as document:
        document["foodItems"]["abc"] = {"id": "abc", "name": "Oats"}

    reloaded = JsonDocumentStore(store.path).read()

    assert reloaded["foodItems"]["abc"]["name"] == "Oats"
    assert reloaded["meals"] == {}
    assert reloaded["userProfile"] is None


def test_failed_transaction_is_not_written(store: JsonDocumentStore) -> None:
    with pytest.raises(RuntimeError):
        with store.transaction() as document:
            document["foodItems"]["abc"] = {"id": "abc", "name": "Oats"}
            raise RuntimeError("boom")

    assert store.read()["foodItems"] == {}


def test_corrupt_file_raises_persistence_error(store: JsonDocumentStore) -> None:
    store.path.write_text("{not json", encoding="utf-8")

    with pytest.raises(PersistenceError):
        store.read()


def test_missing_collections_are_filled_in(store: JsonDocumentStore) -> None:
    store.path.write_text('{"foodItems": {}}', encoding="utf-8")

    document = store.read()

    assert document["meals"] == {}
    assert document["weightEntries"] == {}


def test_concurrent_appends_are_not_lost(store: JsonDocumentStore) -> None:
    repository = JsonMealLogRepository(store)

    def append(index: int) -> None:
        repository.append_entry("2024-03-01", "lunch", f"food-{index}", 100)

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(append, range(40)))

    log = repository.get_or_create("2024-03-01")

    assert len(log.lunch) == 40
    assert {entry.food_item_id for entry in log.lunch} == {
        f"food-{index}" for index in range(40)
    }
