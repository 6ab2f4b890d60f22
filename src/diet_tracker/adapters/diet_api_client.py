"""HTTP client for the diet tracker REST API.

This is the public entry point for programs that talk to a running server
instead of importing the services directly. Paths and payloads mirror the
routers in ``diet_tracker.api``.
"""

import asyncio
import logging
from dataclasses import dataclass

import httpx

_logger = logging.getLogger(__name__)


class DietApiError(RuntimeError):
    """Raised when the API answers with an error status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


@dataclass
class DietApiClient:
    """Async client with a bounded retry for transient failures.

    Responses below 500 are returned as they are; client errors are never
    retried. Transport errors and 5xx responses are retried after
    ``delay_seconds * attempt``, up to ``max_retries`` attempts in total.
    """

    base_url: str
    http_client: httpx.AsyncClient
    max_retries: int = 3
    delay_seconds: float = 1.0

    @classmethod
    def create(cls, base_url: str, **kwargs: object) -> "DietApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(timeout=15),
            **kwargs,
        )

    async def request_with_retry(
        self, method: str, path: str, json: object | None = None
    ) -> httpx.Response:
        """Send a request, retrying transport errors and server errors."""
        url = f"{self.base_url}{path}"
        for attempt in range(1, self.max_retries + 1):
            try:
                response = await self.http_client.request(method, url, json=json)
            except httpx.TransportError as exc:
                _logger.warning("API call attempt %s failed: %s", attempt, exc)
                if attempt == self.max_retries:
                    raise
            else:
                if response.status_code < httpx.codes.INTERNAL_SERVER_ERROR:
                    return response
                if attempt == self.max_retries:
                    return response
                _logger.warning(
                    "API call attempt %s returned %s", attempt, response.status_code
                )
            await asyncio.sleep(self.delay_seconds * attempt)
        raise RuntimeError("max_retries must be at least 1")

    async def _json(
        self, method: str, path: str, json: object | None = None
    ) -> object:
        response = await self.request_with_retry(method, path, json=json)
        if response.is_error:
            raise DietApiError(response.status_code, _error_message(response))
        return response.json()

    async def get_daily_log(self, log_date: str) -> dict[str, object]:
        """Fetch the meal log for a date."""
        return await self._json("GET", f"/api/meals/{log_date}")

    async def get_daily_summary(self, log_date: str) -> dict[str, object]:
        """Fetch nutrition totals for a date."""
        return await self._json("GET", f"/api/meals/{log_date}/summary")

    async def add_meal_entry(
        self, log_date: str, meal_type: str, food_item_id: str, quantity: float
    ) -> dict[str, object]:
        """Log a food item into a meal."""
        return await self._json(
            "POST",
            f"/api/meals/{log_date}/{meal_type}",
            json={"foodItemId": food_item_id, "quantity": quantity},
        )

    async def remove_meal_entry(
        self, log_date: str, meal_type: str, entry_id: str
    ) -> None:
        """Remove a logged entry."""
        await self._json("DELETE", f"/api/meals/{log_date}/{meal_type}/{entry_id}")

    async def list_food_items(self) -> list[dict[str, object]]:
        """Return all food items."""
        return await self._json("GET", "/api/food-items")

    async def get_food_item(self, food_id: str) -> dict[str, object]:
        """Return one food item."""
        return await self._json("GET", f"/api/food-items/{food_id}")

    async def find_by_barcode(self, barcode: str) -> dict[str, object] | None:
        """Return the food item for a barcode, or None on 404."""
        response = await self.request_with_retry(
            "GET", f"/api/food-items/barcode/{barcode}"
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return None
        if response.is_error:
            raise DietApiError(response.status_code, _error_message(response))
        return response.json()

    async def create_food_item(self, payload: dict[str, object]) -> dict[str, object]:
        """Create a food item."""
        return await self._json("POST", "/api/food-items", json=payload)

    async def get_profile(self) -> dict[str, object]:
        """Return the user profile."""
        return await self._json("GET", "/api/user/profile")

    async def list_weight_entries(self) -> list[dict[str, object]]:
        """Return the weight history."""
        return await self._json("GET", "/api/user/weight")

    async def record_weight(
        self, entry_date: str, weight: float, time: str | None = None
    ) -> dict[str, object]:
        """Upsert the weight for a date."""
        payload: dict[str, object] = {"date": entry_date, "weight": weight}
        if time:
            payload["time"] = time
        return await self._json("POST", "/api/user/weight", json=payload)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        return str(body["error"])
    return response.text
