"""Tests for the food item service."""

import pytest

from diet_tracker.domain.errors import ConflictError, NotFoundError, ValidationError
from tests.conftest import make_rice


def test_create_applies_defaults(container) -> None:
    food = container.food_service.create_food({"name": " Apple ", "calories": "52"})

    assert food.name == "Apple"
    assert food.calories == 52
    assert food.fat == 0
    assert food.proteins == 0
    assert food.unit == "grams"
    assert food.barcode is None
    assert food.updated_at is None


def test_create_requires_name_and_calories(container) -> None:
    with pytest.raises(ValidationError):
        container.food_service.create_food({"name": "", "calories": 10})
    with pytest.raises(ValidationError):
        container.food_service.create_food({"name": "Bread"})


def test_create_rejects_negative_macros(container) -> None:
    with pytest.raises(ValidationError):
        container.food_service.create_food({"name": "Odd", "calories": 10, "fat": -1})


def test_duplicate_barcode_on_create_conflicts(container) -> None:
    make_rice(container.food_service, barcode="111")

    with pytest.raises(ConflictError):
        container.food_service.create_food(
            {"name": "Other rice", "calories": 120, "barcode": "111"}
        )


def test_update_to_other_items_barcode_conflicts(container) -> None:
    make_rice(container.food_service, barcode="111")
    other = container.food_service.create_food(
        {"name": "Beans", "calories": 90, "barcode": "222"}
    )

    with pytest.raises(ConflictError):
        container.food_service.update_food(other.id, {"barcode": "111"})

    assert container.food_service.get_food(other.id).barcode == "222"


def test_update_to_own_barcode_succeeds(container) -> None:
    rice = make_rice(container.food_service, barcode="111")

    updated = container.food_service.update_food(
        rice.id, {"barcode": "111", "calories": 131}
    )

    assert updated.barcode == "111"
    assert updated.calories == 131


def test_blank_barcodes_never_conflict(container) -> None:
    make_rice(container.food_service, barcode="")
    second = container.food_service.create_food(
        {"name": "Pasta", "calories": 131, "barcode": "  "}
    )

    assert second.barcode is None


def test_partial_update_keeps_other_fields(container) -> None:
    rice = make_rice(container.food_service)

    updated = container.food_service.update_food(rice.id, {"name": "Brown rice"})

    assert updated.name == "Brown rice"
    assert updated.calories == rice.calories
    assert updated.proteins == rice.proteins
    assert updated.created_at == rice.created_at
    assert updated.updated_at is not None


def test_update_unknown_item_raises(container) -> None:
    with pytest.raises(NotFoundError):
        container.food_service.update_food("missing", {"name": "X"})


def test_search_is_case_insensitive_substring(container) -> None:
    make_rice(container.food_service)
    container.food_service.create_food({"name": "Rice cake", "calories": 387})
    container.food_service.create_food({"name": "Oats", "calories": 389})

    names = sorted(food.name for food in container.food_service.search("RICE"))

    assert names == ["Rice", "Rice cake"]


def test_barcode_lookup(container) -> None:
    rice = make_rice(container.food_service, barcode="111")

    assert container.food_service.get_by_barcode("111").id == rice.id
    with pytest.raises(NotFoundError):
        container.food_service.get_by_barcode("999")


def test_delete_food(container) -> None:
    rice = make_rice(container.food_service)

    container.food_service.delete_food(rice.id)

    assert container.food_service.list_foods() == []
    with pytest.raises(NotFoundError):
        container.food_service.delete_food(rice.id)


def test_non_finite_macros_are_rejected(container) -> None:
    rice = make_rice(container.food_service)

    with pytest.raises(ValidationError):
        container.food_service.create_food({"name": "Bad", "calories": float("inf")})
    with pytest.raises(ValidationError):
        container.food_service.update_food(rice.id, {"fat": float("nan")})

    assert container.food_service.get_food(rice.id).fat == rice.fat
