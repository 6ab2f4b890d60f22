"""Shared test fixtures."""

from dataclasses import dataclass, field

import pytest

from diet_tracker.adapters.json_document_store import JsonDocumentStore
from diet_tracker.adapters.json_food_repository import JsonFoodRepository
from diet_tracker.adapters.json_meal_log_repository import JsonMealLogRepository
from diet_tracker.adapters.json_profile_repository import JsonProfileRepository
from diet_tracker.adapters.json_weight_repository import JsonWeightRepository
from diet_tracker.adapters.openfoodfacts_client import ProductClient
from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.foods import FoodItem
from diet_tracker.services.barcode import BarcodeResolver
from diet_tracker.services.cache import InMemoryCache
from diet_tracker.services.export import ExportService
from diet_tracker.services.foods import FoodService
from diet_tracker.services.lookup import ProductLookupService
from diet_tracker.services.meals import MealLogService
from diet_tracker.services.nutrition import NutritionService
from diet_tracker.services.profile import ProfileService
from diet_tracker.services.weight import WeightService

NUTELLA_BARCODE = "3017620422003"


@dataclass
class FakeProductClient(ProductClient):
    """Fake OpenFoodFacts client serving products from a dict."""

    products: dict[str, dict[str, object]] = field(
        default_factory=lambda: {
            NUTELLA_BARCODE: {
                "product_name": "Nutella",
                "nutriments": {
                    "energy-kcal_100g": 539,
                    "proteins_100g": 6.3,
                    "carbohydrates_100g": 57.5,
                    "fat_100g": 30.9,
                },
            }
        }
    )
    calls: list[str] = field(default_factory=list)
    error: Exception | None = None

    async def get_product(self, barcode: str) -> dict[str, object]:
        self.calls.append(barcode)
        if self.error is not None:
            raise self.error
        product = self.products.get(barcode)
        if product is None:
            return {"status": 0}
        return {"status": 1, "product": product}


def make_rice(food_service: FoodService, **overrides: object) -> FoodItem:
    payload: dict[str, object] = {
        "name": "Rice",
        "calories": 130,
        "proteins": 2.7,
        "carbohydrates": 28,
        "fat": 0.3,
    }
    payload.update(overrides)
    return food_service.create_food(payload)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(data_file=tmp_path / "db.json", environment="test")


@pytest.fixture
def store(settings: Settings) -> JsonDocumentStore:
    return JsonDocumentStore(settings.data_file)


@pytest.fixture
def product_client() -> FakeProductClient:
    return FakeProductClient()


@pytest.fixture
def container(
    settings: Settings,
    store: JsonDocumentStore,
    product_client: FakeProductClient,
) -> AppContainer:
    food_service = FoodService(JsonFoodRepository(store))
    meal_log_service = MealLogService(
        repository=JsonMealLogRepository(store),
        food_service=food_service,
    )
    profile_service = ProfileService(JsonProfileRepository(store))
    weight_service = WeightService(JsonWeightRepository(store))
    lookup_service = ProductLookupService(
        client=product_client,
        cache=InMemoryCache(),
        retry_attempts=1,
        retry_delay_seconds=0,
    )

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        store=store,
        food_service=food_service,
        meal_log_service=meal_log_service,
        profile_service=profile_service,
        weight_service=weight_service,
        nutrition_service=NutritionService(
            meal_log_service=meal_log_service,
            food_service=food_service,
            profile_service=profile_service,
        ),
        lookup_service=lookup_service,
        barcode_resolver=BarcodeResolver(catalog=food_service, lookup=lookup_service),
        export_service=ExportService(
            meal_log_service=meal_log_service,
            food_service=food_service,
            weight_service=weight_service,
        ),
        close_resources=close_resources,
    )
