# app/domain/repositories/printful_repo.py
from __future__ import annotations
from typing import Any, Optional
import httpx

from app.domain.services.constants import PRINTFUL_STORE_PRODUCTS_PATH

"""
Note:
    - Adapter for the Printful store products API (listing + per-product detail).
    - No business logic here, just HTTP access and unwrapping of the "result" envelope.
    - httpx errors are propagated; the fetch pipeline decides what they mean.
"""


class PrintfulStoreRepo:
    """
    Thin async client over a shared httpx.AsyncClient.
    The store id header tells Printful which store to use when the key can access several.
    """
    def __init__(self, client: httpx.AsyncClient, api_key: Optional[str], store_id: str, base_url: str):
        self.client = client
        self.api_key = api_key
        self.store_id = store_id
        self.base_url = base_url.rstrip("/")

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.api_key}",
            "X-PF-Store-Id": self.store_id,
        }

    async def _get_result(self, path: str, params: Optional[dict] = None) -> Any:
        """
        GET a Printful endpoint and return its "result" field (None if absent).
        Raises httpx.HTTPStatusError on non-2xx, httpx.RequestError on transport
        problems and ValueError when the body is not a JSON object.
        """
        resp = await self.client.get(f"{self.base_url}{path}", headers=self.headers(), params=params)
        resp.raise_for_status()
        data = resp.json()
        if not isinstance(data, dict):
            raise ValueError(f"unexpected response body type: {type(data).__name__}")
        return data.get("result")

    async def list_products(self, limit: int = 100) -> Any:
        """Raw product summaries: [{id, name, thumbnail_url, synced, ...}] or None."""
        return await self._get_result(PRINTFUL_STORE_PRODUCTS_PATH, params={"limit": limit})

    async def get_product(self, product_id: Any) -> Any:
        """Raw product detail: {sync_product: {...}, sync_variants: [{retail_price, ...}]} or None."""
        return await self._get_result(f"{PRINTFUL_STORE_PRODUCTS_PATH}/{product_id}")
