import logging
from typing import Any

import httpx

from tagerpro.core.config import settings

logger = logging.getLogger(__name__)


class ApiError(Exception):
    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class TagerProClient:
    """Request/response calls to the products, leads and analytics endpoints. No retries."""

    def __init__(
        self,
        base_url: str | None = None,
        *,
        client: httpx.AsyncClient | None = None,
        timeout: float | None = 15.0,
    ):
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._owns_client = client is None

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "TagerProClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _request(self, method: str, path: str, *, json: Any = None) -> httpx.Response:
        response = await self._client.request(method, f"{self.base_url}/api{path}", json=json)
        if response.is_error and response.status_code != 404:
            try:
                body = response.json()
            except ValueError:
                body = None
            message = (body.get("error") if isinstance(body, dict) else None) or response.reason_phrase
            logger.warning("%s %s failed with %s: %s", method, path, response.status_code, message)
            raise ApiError(response.status_code, message)
        return response

    async def _get_or_none(self, path: str) -> dict | None:
        response = await self._request("GET", path)
        return None if response.status_code == 404 else response.json()

    async def _put_or_none(self, path: str, data: dict) -> dict | None:
        response = await self._request("PUT", path, json=data)
        return None if response.status_code == 404 else response.json()

    async def _delete(self, path: str) -> bool:
        response = await self._request("DELETE", path)
        return response.status_code != 404

    async def _create(self, path: str, data: dict) -> dict:
        response = await self._request("POST", path, json=data)
        if response.status_code == 404:
            raise ApiError(404, f"{path} not found")
        return response.json()

    async def _list(self, path: str) -> list[dict]:
        response = await self._request("GET", path)
        if response.status_code == 404:
            raise ApiError(404, f"{path} not found")
        return response.json()

    # Products
    async def list_products(self) -> list[dict]:
        return await self._list("/products")

    async def get_product(self, product_id: int) -> dict | None:
        return await self._get_or_none(f"/products/{product_id}")

    async def create_product(self, data: dict) -> dict:
        return await self._create("/products", data)

    async def update_product(self, product_id: int, data: dict) -> dict | None:
        return await self._put_or_none(f"/products/{product_id}", data)

    async def delete_product(self, product_id: int) -> bool:
        return await self._delete(f"/products/{product_id}")

    # Leads
    async def list_leads(self) -> list[dict]:
        return await self._list("/leads")

    async def get_lead(self, lead_id: int) -> dict | None:
        return await self._get_or_none(f"/leads/{lead_id}")

    async def create_lead(self, data: dict) -> dict:
        return await self._create("/leads", data)

    async def update_lead(self, lead_id: int, data: dict) -> dict | None:
        return await self._put_or_none(f"/leads/{lead_id}", data)

    async def delete_lead(self, lead_id: int) -> bool:
        return await self._delete(f"/leads/{lead_id}")

    # Analytics
    async def get_analytics(self) -> dict:
        response = await self._request("GET", "/analytics")
        return response.json()

    async def track_event(self, event_type: str, product_id: int | None = None) -> None:
        await self._request("POST", "/analytics/track", json={"eventType": event_type, "productId": product_id})
