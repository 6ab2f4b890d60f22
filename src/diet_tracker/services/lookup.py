"""Barcode nutrition lookup against OpenFoodFacts."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from diet_tracker.adapters.openfoodfacts_client import ProductClient
from diet_tracker.services.cache import Cache

_logger = logging.getLogger(__name__)

_NUTRIMENT_KEYS = {
    "calories": ("energy-kcal_100g", "energy-kcal"),
    "proteins": ("proteins_100g", "proteins"),
    "carbohydrates": ("carbohydrates_100g", "carbohydrates"),
    "fat": ("fat_100g", "fat"),
}


@dataclass(frozen=True)
class ProductNutrition:
    """Normalized per-100g nutrition for a scanned product."""

    barcode: str
    name: str
    calories: float
    proteins: float
    carbohydrates: float
    fat: float

    def as_food_payload(self) -> dict[str, object]:
        """Return fields for creating a food item."""
        return {
            "name": self.name,
            "calories": self.calories,
            "proteins": self.proteins,
            "carbohydrates": self.carbohydrates,
            "fat": self.fat,
            "barcode": self.barcode,
        }


@dataclass
class ProductLookupService:
    """Looks up products by barcode with caching and a short retry."""

    client: ProductClient
    cache: Cache
    ttl_seconds: int = 86400
    retry_attempts: int = 1
    retry_delay_seconds: float = 0.3
    debug: bool = False

    async def lookup(self, barcode: str) -> ProductNutrition | None:
        """Return normalized nutrition, or None when the product is unknown."""
        cache_key = f"off:product:{barcode}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, ProductNutrition):
            return cached

        payload = await self._call_with_retry(
            lambda: self.client.get_product(barcode),
            action=f"product:{barcode}",
        )
        product = parse_product(barcode, payload)
        if product is not None:
            self.cache.set(cache_key, product, ttl_seconds=self.ttl_seconds)
        if self.debug:
            _logger.info(
                "Product lookup: barcode=%s found=%s", barcode, product is not None
            )
        return product

    async def _call_with_retry(
        self, func: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> dict[str, object]:
        """Call an async function, retrying a fixed number of times."""
        attempt = 0
        while True:
            try:
                return await func()
            except Exception as exc:
                attempt += 1
                _logger.warning(
                    "Lookup %s failed (attempt %s/%s, status=%s): %s",
                    action,
                    attempt,
                    self.retry_attempts + 1,
                    _status_code_from_exception(exc),
                    exc,
                )
                if attempt > self.retry_attempts:
                    raise
                await asyncio.sleep(self.retry_delay_seconds * attempt)


def parse_product(barcode: str, payload: dict[str, object]) -> ProductNutrition | None:
    """Normalize an OpenFoodFacts product payload."""
    product = payload.get("product")
    if payload.get("status") != 1 or not isinstance(product, dict):
        return None
    nutriments = product.get("nutriments") or {}
    values = {
        field: _first_number(nutriments, keys) for field, keys in _NUTRIMENT_KEYS.items()
    }
    return ProductNutrition(
        barcode=barcode,
        name=str(product.get("product_name") or f"Product {barcode}"),
        **values,
    )


def _first_number(nutriments: dict[str, object], keys: tuple[str, ...]) -> float:
    for key in keys:
        value = nutriments.get(key)
        if value in (None, ""):
            continue
        try:
            number = float(value)
        except (TypeError, ValueError):
            continue
        if number:
            return number
    return 0.0


def _status_code_from_exception(exc: Exception) -> str:
    """Extract HTTP status code from an exception, if available."""
    response = getattr(exc, "response", None)
    status_code = getattr(response, "status_code", None)
    if isinstance(status_code, int):
        return str(status_code)
    return "n/a"
