"""Product Repository - Product catalog operations.

All methods use async/await with supabase-py v2.
"""
from typing import Any, Dict, Optional

from .base import BaseRepository
from vietfood.services.models import Product, ProductVariant

PRODUCT_COLUMNS = (
    "id, sku, name_ja, name_vi, price, stock_quantity, is_active, "
    "categories(name_ja, name_vi), "
    "product_images(image_url, sort_order), "
    "product_variants(id, name, value, price_modifier, stock_quantity, is_active)"
)


def _row_to_product(row: Dict[str, Any]) -> Product:
    category = row.get("categories") or {}
    images = sorted(row.get("product_images") or [], key=lambda i: i.get("sort_order") or 0)
    variants = [ProductVariant(**v) for v in row.get("product_variants") or []]
    return Product(
        id=row["id"],
        sku=row.get("sku") or "",
        name=row["name_ja"],
        name_vi=row.get("name_vi"),
        price=row["price"],
        stock_quantity=row.get("stock_quantity") or 0,
        is_active=row.get("is_active", True),
        category_name=category.get("name_ja"),
        category_name_vi=category.get("name_vi"),
        image_url=images[0]["image_url"] if images else None,
        variants=variants,
    )


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """Get product with its category, first image and variants."""
        result = await self.client.table("products").select(PRODUCT_COLUMNS).eq(
            "id", product_id
        ).limit(1).execute()

        return _row_to_product(result.data[0]) if result.data else None
