"""Tests for the outbound HTTP clients."""

import asyncio

import httpx
import pytest

from diet_tracker.adapters.diet_api_client import DietApiClient, DietApiError
from diet_tracker.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
from diet_tracker.api.app import create_app


def _off_client(handler) -> HttpxOpenFoodFactsClient:
    return HttpxOpenFoodFactsClient(
        base_url="https://off.test/api/v2",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def _api_client(handler, max_retries: int = 3) -> DietApiClient:
    return DietApiClient(
        base_url="https://diet.test",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        max_retries=max_retries,
        delay_seconds=0,
    )


def test_openfoodfacts_client_requests_product_fields() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"status": 1, "product": {"product_name": "X"}})

    payload = asyncio.run(_off_client(handler).get_product("123"))

    assert payload["product"]["product_name"] == "X"
    assert seen[0].url.path == "/api/v2/product/123"
    assert seen[0].url.params["fields"] == "product_name,nutriments"


def test_openfoodfacts_client_maps_404_to_unknown_product() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"status": 0})

    assert asyncio.run(_off_client(handler).get_product("000")) == {"status": 0}


def test_openfoodfacts_client_raises_on_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    with pytest.raises(httpx.HTTPStatusError):
        asyncio.run(_off_client(handler).get_product("123"))


def test_api_client_retries_server_errors() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        if len(calls) < 3:
            return httpx.Response(502, json={"error": "bad gateway"})
        return httpx.Response(200, json=[])

    assert asyncio.run(_api_client(handler).list_food_items()) == []
    assert len(calls) == 3


def test_api_client_does_not_retry_client_errors() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(404, json={"error": "Food item not found"})

    with pytest.raises(DietApiError) as excinfo:
        asyncio.run(_api_client(handler).get_food_item("missing"))

    assert excinfo.value.status_code == 404
    assert excinfo.value.message == "Food item not found"
    assert len(calls) == 1


def test_api_client_gives_up_after_transport_errors() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(httpx.ConnectError):
        asyncio.run(_api_client(handler, max_retries=2).get_profile())

    assert len(calls) == 2


def test_api_client_returns_last_server_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Internal server error"})

    with pytest.raises(DietApiError) as excinfo:
        asyncio.run(_api_client(handler).get_profile())

    assert excinfo.value.status_code == 500


def test_api_client_barcode_miss_returns_none() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"error": "not found"})

    assert asyncio.run(_api_client(handler).find_by_barcode("000")) is None


def test_api_client_against_app(container) -> None:
    app = create_app(container)

    async def scenario() -> tuple[dict, dict, list]:
        client = DietApiClient(
            base_url="http://app.test",
            http_client=httpx.AsyncClient(transport=httpx.ASGITransport(app=app)),
            delay_seconds=0,
        )
        try:
            food = await client.create_food_item(
                {"name": "Rice", "calories": 130, "carbohydrates": 28}
            )
            await client.add_meal_entry("2024-01-05", "lunch", food["id"], 150)
            summary = await client.get_daily_summary("2024-01-05")
            await client.record_weight("2024-01-05", 80.5, "07:00")
            weights = await client.list_weight_entries()
        finally:
            await client.close()
        return food, summary, weights

    food, summary, weights = asyncio.run(scenario())

    assert food["unit"] == "grams"
    assert summary["totals"]["calories"] == 195
    assert summary["totals"]["carbohydrates"] == 42
    assert weights[0]["weight"] == 80.5
    assert weights[0]["time"] == "07:00"
