"""
Product Lookup implementations used by the cart.

Two backends share the same contract (``fetch_product`` returns a Product or
raises NotFoundError / LookupFailure):
- RepositoryProductLookup reads the catalog tables through Supabase
- HttpProductLookup calls the storefront's POST /api/products endpoint
"""
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import ValidationError

from vietfood.config import LOOKUP_TIMEOUT, STOREFRONT_API_URL
from vietfood.db import get_supabase
from vietfood.errors import LookupFailure, NotFoundError
from vietfood.logging import get_logger, sanitize_id_for_logging
from vietfood.services.models import Product, ProductVariant
from vietfood.services.repositories import ProductRepository

logger = get_logger(__name__)


class ProductLookup(Protocol):
    """Fetches live product data (price, stock, variants)."""

    async def fetch_product(self, product_id: str) -> Product:
        ...


class RepositoryProductLookup:
    """Product lookup backed by ProductRepository."""

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    async def fetch_product(self, product_id: str) -> Product:
        try:
            product = await self.repo.get_by_id(product_id)
        except Exception as e:
            logger.error(f"Product lookup failed for {sanitize_id_for_logging(product_id)}: {e}")
            raise LookupFailure(str(e)) from e

        if product is None:
            raise NotFoundError(f"product {product_id} not found")
        return product


async def get_repository_lookup() -> RepositoryProductLookup:
    """Product lookup over the shared async Supabase client."""
    client = await get_supabase()
    return RepositoryProductLookup(ProductRepository(client))


def _payload_to_product(payload: Dict[str, Any]) -> Product:
    """Map the storefront's camelCase product payload onto Product."""
    category = payload.get("category") or {}
    images = payload.get("images") or []
    variants = [
        ProductVariant(
            id=v["id"],
            name=v.get("name") or "",
            value=v.get("value") or "",
            price_modifier=v.get("priceModifier"),
            stock_quantity=v.get("stockQuantity") or 0,
            # The endpoint only returns active variants and may omit the flag
            is_active=v.get("isActive", True),
        )
        for v in payload.get("variants") or []
    ]
    return Product(
        id=payload["id"],
        sku=payload.get("sku") or "",
        name=payload["nameJa"],
        name_vi=payload.get("nameVi"),
        price=payload["price"],
        stock_quantity=payload.get("stockQuantity") or 0,
        is_active=payload.get("isActive", True),
        category_name=category.get("nameJa"),
        category_name_vi=category.get("nameVi"),
        image_url=images[0].get("imageUrl") if images else None,
        variants=variants,
    )


class HttpProductLookup:
    """
    Product lookup over the storefront API.

    Usage:
        lookup = HttpProductLookup()
        product = await lookup.fetch_product("prod-123")
    """

    def __init__(
        self,
        base_url: str = STOREFRONT_API_URL,
        timeout: float = LOOKUP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout = timeout
        self._transport = transport

    async def fetch_product(self, product_id: str) -> Product:
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url, timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post("/api/products", json={"id": product_id})
        except httpx.HTTPError as e:
            logger.error(f"Product lookup request failed for {sanitize_id_for_logging(product_id)}: {e}")
            raise LookupFailure(str(e)) from e

        if response.status_code == 404:
            raise NotFoundError(f"product {product_id} not found")
        if response.is_error:
            raise LookupFailure(f"product lookup returned HTTP {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise LookupFailure("product lookup returned invalid JSON") from e

        if not data.get("success"):
            raise NotFoundError(data.get("error") or f"product {product_id} not found")

        try:
            return _payload_to_product(data["data"]["product"])
        except (KeyError, TypeError, ValidationError) as e:
            raise LookupFailure(f"malformed product payload: {e}") from e
