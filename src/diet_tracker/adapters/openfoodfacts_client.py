"""OpenFoodFacts product API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_PRODUCT_FIELDS = "product_name,nutriments"


class ProductClient(Protocol):
    """Interface for barcode-to-nutrition lookups."""

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Return raw product data for a barcode."""


@dataclass
class HttpxOpenFoodFactsClient(ProductClient):
    """HTTPX-backed OpenFoodFacts client."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxOpenFoodFactsClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def get_product(self, barcode: str) -> dict[str, object]:
        """Fetch a product; unknown barcodes answer with status 0."""
        url = f"{self.base_url}/product/{barcode}"
        response = await self.http_client.get(
            url,
            params={"fields": _PRODUCT_FIELDS},
            timeout=self.timeout_seconds,
        )
        if response.status_code == httpx.codes.NOT_FOUND:
            return {"status": 0}
        response.raise_for_status()
        return response.json()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
