"""Tests for the meal log service."""

import pytest

from diet_tracker.domain.errors import NotFoundError, ValidationError
from diet_tracker.domain.meals import MEAL_SLOTS
from tests.conftest import make_rice


def test_untouched_date_has_four_empty_slots(container) -> None:
    log = container.meal_log_service.get_or_create("2024-01-05")

    assert log.date == "2024-01-05"
    for slot in MEAL_SLOTS:
        assert log.entries(slot) == []
    assert "2024-01-05" in container.store.read()["meals"]


def test_refetch_includes_added_entries(container) -> None:
    rice = make_rice(container.food_service)
    container.meal_log_service.get_or_create("2024-01-05")

    entry = container.meal_log_service.add_entry("2024-01-05", "dinner", rice.id, 150)
    log = container.meal_log_service.get_or_create("2024-01-05")

    assert log.dinner == [entry]
    assert log.breakfast == []
    assert log.lunch == []
    assert log.snacks == []


def test_entries_append_in_insertion_order(container) -> None:
    rice = make_rice(container.food_service)
    service = container.meal_log_service

    first = service.add_entry("2024-01-05", "lunch", rice.id, 100)
    second = service.add_entry("2024-01-05", "lunch", rice.id, 50)

    assert [entry.id for entry in service.get_or_create("2024-01-05").lunch] == [
        first.id,
        second.id,
    ]


def test_quantity_defaults_to_one(container) -> None:
    rice = make_rice(container.food_service)

    entry = container.meal_log_service.add_entry("2024-01-05", "snacks", rice.id)

    assert entry.quantity == 1


@pytest.mark.parametrize("quantity", [0, -5])
def test_non_positive_quantity_is_rejected(container, quantity: float) -> None:
    rice = make_rice(container.food_service)

    with pytest.raises(ValidationError):
        container.meal_log_service.add_entry("2024-01-05", "lunch", rice.id, quantity)


def test_invalid_slot_and_date_are_rejected(container) -> None:
    rice = make_rice(container.food_service)

    with pytest.raises(ValidationError, match="Invalid meal type"):
        container.meal_log_service.add_entry("2024-01-05", "brunch", rice.id, 10)
    with pytest.raises(ValidationError):
        container.meal_log_service.get_or_create("05/01/2024")


def test_unknown_food_item_is_not_found(container) -> None:
    with pytest.raises(NotFoundError):
        container.meal_log_service.add_entry("2024-01-05", "lunch", "missing", 10)


def test_remove_missing_entry_leaves_slot_unchanged(container) -> None:
    rice = make_rice(container.food_service)
    entry = container.meal_log_service.add_entry("2024-01-05", "lunch", rice.id, 100)

    with pytest.raises(NotFoundError):
        container.meal_log_service.remove_entry("2024-01-05", "lunch", "nope")
    with pytest.raises(NotFoundError):
        container.meal_log_service.remove_entry("2024-01-05", "dinner", entry.id)

    assert container.meal_log_service.get_or_create("2024-01-05").lunch == [entry]


def test_remove_preserves_remaining_order(container) -> None:
    rice = make_rice(container.food_service)
    service = container.meal_log_service
    entries = [service.add_entry("2024-01-05", "lunch", rice.id, q) for q in (1, 2, 3)]

    service.remove_entry("2024-01-05", "lunch", entries[1].id)

    remaining = service.get_or_create("2024-01-05").lunch
    assert [entry.id for entry in remaining] == [entries[0].id, entries[2].id]


def test_copy_meal_recreates_entries(container) -> None:
    rice = make_rice(container.food_service)
    service = container.meal_log_service
    source = service.add_entry("2024-01-04", "dinner", rice.id, 150)

    result = service.copy_meal("2024-01-04", "dinner", "2024-01-05", "lunch")

    assert result.failed == []
    assert len(result.copied) == 1
    copied = result.copied[0]
    assert copied.id != source.id
    assert copied.food_item_id == rice.id
    assert copied.quantity == 150
    assert service.get_or_create("2024-01-05").lunch == [copied]
    assert service.get_or_create("2024-01-04").dinner == [source]


def test_copy_meal_keeps_partial_progress(container) -> None:
    rice = make_rice(container.food_service)
    oats = container.food_service.create_food({"name": "Oats", "calories": 389})
    service = container.meal_log_service
    service.add_entry("2024-01-04", "breakfast", rice.id, 100)
    doomed = service.add_entry("2024-01-04", "breakfast", oats.id, 40)
    service.add_entry("2024-01-04", "breakfast", rice.id, 50)
    container.food_service.delete_food(oats.id)

    result = service.copy_meal("2024-01-04", "breakfast", "2024-01-05", "breakfast")

    assert result.failed == [doomed.id]
    assert [entry.quantity for entry in result.copied] == [100, 50]
    assert len(service.get_or_create("2024-01-05").breakfast) == 2


def test_copy_empty_meal_is_rejected(container) -> None:
    with pytest.raises(ValidationError):
        container.meal_log_service.copy_meal(
            "2024-01-04", "lunch", "2024-01-05", "lunch"
        )


def test_copy_from_untouched_date_does_not_create_it(container) -> None:
    with pytest.raises(ValidationError):
        container.meal_log_service.copy_meal(
            "2024-01-04", "lunch", "2024-01-05", "lunch"
        )

    assert "2024-01-04" not in container.store.read()["meals"]
