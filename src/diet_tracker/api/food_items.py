"""Food item endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Request, status

from diet_tracker.api.schemas import (
    BarcodeResolutionOut,
    FoodItemCreate,
    FoodItemOut,
    FoodItemUpdate,
    MessageOut,
)

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(prefix="/api/food-items", tags=["food-items"])


def _container(request: Request) -> AppContainer:
    return request.app.state.container


@router.get("")
async def list_food_items(request: Request) -> list[FoodItemOut]:
    """Return every food item."""
    foods = _container(request).food_service.list_foods()
    return [FoodItemOut.model_validate(food) for food in foods]


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_food_item(body: FoodItemCreate, request: Request) -> FoodItemOut:
    """Create a food item."""
    food = _container(request).food_service.create_food(body.model_dump())
    return FoodItemOut.model_validate(food)


@router.get("/search/{query}")
async def search_food_items(query: str, request: Request) -> list[FoodItemOut]:
    """Case-insensitive substring search on food names."""
    foods = _container(request).food_service.search(query)
    return [FoodItemOut.model_validate(food) for food in foods]


@router.get("/barcode/{barcode}")
async def get_food_item_by_barcode(barcode: str, request: Request) -> FoodItemOut:
    """Return the food item registered for a barcode."""
    food = _container(request).food_service.get_by_barcode(barcode)
    return FoodItemOut.model_validate(food)


@router.post("/barcode/{barcode}/resolve")
async def resolve_barcode(barcode: str, request: Request) -> BarcodeResolutionOut:
    """Find a barcode locally, falling back to OpenFoodFacts."""
    flow = await _container(request).barcode_resolver.resolve_manual(barcode)
    return BarcodeResolutionOut(
        state=flow.state.value,
        barcode=flow.barcode,
        food=FoodItemOut.model_validate(flow.food) if flow.food else None,
        message=flow.message,
    )


@router.get("/{food_id}")
async def get_food_item(food_id: str, request: Request) -> FoodItemOut:
    """Return a food item by id."""
    food = _container(request).food_service.get_food(food_id)
    return FoodItemOut.model_validate(food)


@router.put("/{food_id}")
async def update_food_item(
    food_id: str, body: FoodItemUpdate, request: Request
) -> FoodItemOut:
    """Update only the supplied fields of a food item."""
    food = _container(request).food_service.update_food(
        food_id, body.model_dump(exclude_unset=True)
    )
    return FoodItemOut.model_validate(food)


@router.delete("/{food_id}")
async def delete_food_item(food_id: str, request: Request) -> MessageOut:
    """Delete a food item; logged entries keep their reference."""
    _container(request).food_service.delete_food(food_id)
    return MessageOut(message="Food item deleted successfully")
