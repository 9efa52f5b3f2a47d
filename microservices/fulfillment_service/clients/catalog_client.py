"""
Catalogue Service Client for Fulfillment Service

Product and category lookups. Lookups that fail for any reason return
None; shipment building degrades instead of failing.
"""

import httpx
import logging
from typing import Optional, Dict, Any

from pydantic import ValidationError

from ..models import CategoryInfo, ProductInfo

logger = logging.getLogger(__name__)


class CatalogClient:
    """Client for the catalogue service"""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10.0, http_client: Optional[httpx.AsyncClient] = None):
        if base_url:
            self.base_url = base_url.rstrip('/')
        else:
            from core.config import get_settings
            self.base_url = get_settings().services.catalog_service_url.rstrip('/')

        self.client = http_client or httpx.AsyncClient(timeout=timeout)
        logger.info(f"CatalogClient initialized with base_url: {self.base_url}")

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def get_product(self, product_id: str) -> Optional[ProductInfo]:
        data = await self._get(f"/api/v1/catalog/products/{product_id}", "product", product_id)
        if data is None:
            return None
        try:
            return ProductInfo(
                product_id=str(data.get("product_id") or data.get("id") or product_id),
                name=data.get("name"),
                code=data.get("code"),
                category_id=_optional_str(data.get("category_id") or data.get("category")),
                weight=data.get("weight"),
                dimensions=data.get("dimensions"),
            )
        except ValidationError as e:
            logger.warning(f"Product {product_id} has incomplete shipping data: {e}")
            return None

    async def get_category(self, category_id: str) -> Optional[CategoryInfo]:
        data = await self._get(f"/api/v1/catalog/categories/{category_id}", "category", category_id)
        if data is None:
            return None
        try:
            return CategoryInfo(
                category_id=str(data.get("category_id") or data.get("id") or category_id),
                name=data.get("name"),
                hsn=data.get("hsn") or "",
            )
        except ValidationError as e:
            logger.warning(f"Category {category_id} has invalid data: {e}")
            return None

    async def _get(self, path: str, kind: str, key: str) -> Optional[Dict[str, Any]]:
        try:
            response = await self.client.get(f"{self.base_url}{path}")
            if response.status_code == 404:
                logger.warning(f"{kind.capitalize()} {key} not found")
                return None
            response.raise_for_status()
            body = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"Failed to get {kind} {key}: {e.response.status_code}")
            return None
        except Exception as e:
            logger.error(f"Error getting {kind} {key}: {e}")
            return None

        if not isinstance(body, dict):
            return None
        # Accept bare objects or {"<kind>": {...}} / {"data": {...}} envelopes
        data = body.get(kind) or body.get("data") or body
        return data if isinstance(data, dict) else None


def _optional_str(value: Any) -> Optional[str]:
    return str(value) if value else None
