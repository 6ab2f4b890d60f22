"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from diet_tracker.adapters.json_document_store import JsonDocumentStore
from diet_tracker.adapters.json_food_repository import JsonFoodRepository
from diet_tracker.adapters.json_meal_log_repository import JsonMealLogRepository
from diet_tracker.adapters.json_profile_repository import JsonProfileRepository
from diet_tracker.adapters.json_weight_repository import JsonWeightRepository
from diet_tracker.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from diet_tracker.config import Settings
from diet_tracker.services.barcode import BarcodeResolver
from diet_tracker.services.cache import InMemoryCache
from diet_tracker.services.export import ExportService
from diet_tracker.services.foods import FoodService
from diet_tracker.services.lookup import ProductLookupService
from diet_tracker.services.meals import MealLogService
from diet_tracker.services.nutrition import NutritionService
from diet_tracker.services.profile import ProfileService
from diet_tracker.services.weight import WeightService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: JsonDocumentStore
    food_service: FoodService
    meal_log_service: MealLogService
    profile_service: ProfileService
    weight_service: WeightService
    nutrition_service: NutritionService
    lookup_service: ProductLookupService
    barcode_resolver: BarcodeResolver
    export_service: ExportService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = JsonDocumentStore(resolved_settings.data_file)
    food_service = FoodService(JsonFoodRepository(store))
    meal_log_service = MealLogService(
        repository=JsonMealLogRepository(store),
        food_service=food_service,
    )
    profile_service = ProfileService(JsonProfileRepository(store))
    weight_service = WeightService(JsonWeightRepository(store))
    nutrition_service = NutritionService(
        meal_log_service=meal_log_service,
        food_service=food_service,
        profile_service=profile_service,
    )
    product_client = HttpxOpenFoodFactsClient.create(
        base_url=resolved_settings.openfoodfacts_base_url,
        timeout_seconds=resolved_settings.lookup_timeout_seconds,
    )
    lookup_service = ProductLookupService(
        client=product_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.lookup_cache_ttl_seconds,
        retry_attempts=resolved_settings.lookup_retry_attempts,
        retry_delay_seconds=resolved_settings.lookup_retry_delay_seconds,
        debug=resolved_settings.environment == "local",
    )
    barcode_resolver = BarcodeResolver(catalog=food_service, lookup=lookup_service)
    export_service = ExportService(
        meal_log_service=meal_log_service,
        food_service=food_service,
        weight_service=weight_service,
    )

    async def close_resources() -> None:
        await product_client.close()

    return AppContainer(
        settings=resolved_settings,
        store=store,
        food_service=food_service,
        meal_log_service=meal_log_service,
        profile_service=profile_service,
        weight_service=weight_service,
        nutrition_service=nutrition_service,
        lookup_service=lookup_service,
        barcode_resolver=barcode_resolver,
        export_service=export_service,
        close_resources=close_resources,
    )
