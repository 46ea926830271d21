"""Cart models with Decimal-based pricing.

All cart values are immutable; the reducer builds new instances with
dataclasses.replace instead of mutating line items in place.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from vietfood.services.models import Product, ProductVariant
from vietfood.services.money import add, multiply, to_decimal, to_json_number


@dataclass(frozen=True)
class ProductSnapshot:
    """Product data captured when the item was added."""
    id: str
    sku: str
    name: str
    price: Decimal
    stock_quantity: int
    name_vi: Optional[str] = None
    category_name: Optional[str] = None
    category_name_vi: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "price", to_decimal(self.price))

    @classmethod
    def from_product(cls, product: Product) -> "ProductSnapshot":
        return cls(
            id=product.id,
            sku=product.sku,
            name=product.name,
            price=product.price,
            stock_quantity=product.stock_quantity,
            name_vi=product.name_vi,
            category_name=product.category_name,
            category_name_vi=product.category_name_vi,
            image_url=product.image_url,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sku": self.sku,
            "nameJa": self.name,
            "nameVi": self.name_vi,
            "price": to_json_number(self.price),
            "stockQuantity": self.stock_quantity,
            "images": [{"imageUrl": self.image_url, "altText": None}] if self.image_url else [],
            "category": {"nameJa": self.category_name, "nameVi": self.category_name_vi},
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProductSnapshot":
        category = data.get("category") or {}
        images = data.get("images") or []
        return cls(
            id=data["id"],
            sku=data.get("sku") or "",
            name=data["nameJa"],
            price=to_decimal(data["price"]),
            stock_quantity=int(data.get("stockQuantity") or 0),
            name_vi=data.get("nameVi"),
            category_name=category.get("nameJa"),
            category_name_vi=category.get("nameVi"),
            image_url=images[0].get("imageUrl") if images else None,
        )


@dataclass(frozen=True)
class VariantSnapshot:
    """Variant data captured when the item was added."""
    id: str
    name: str
    value: str
    price_modifier: Decimal
    stock_quantity: int

    def __post_init__(self):
        object.__setattr__(self, "price_modifier", to_decimal(self.price_modifier))

    @classmethod
    def from_variant(cls, variant: ProductVariant) -> "VariantSnapshot":
        return cls(
            id=variant.id,
            name=variant.name,
            value=variant.value,
            price_modifier=variant.price_modifier,
            stock_quantity=variant.stock_quantity,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "value": self.value,
            "priceModifier": to_json_number(self.price_modifier),
            "stockQuantity": self.stock_quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "VariantSnapshot":
        return cls(
            id=data["id"],
            name=data.get("name") or "",
            value=data.get("value") or "",
            price_modifier=to_decimal(data.get("priceModifier")),
            stock_quantity=int(data.get("stockQuantity") or 0),
        )


@dataclass(frozen=True)
class CartLineItem:
    """One (product, variant) pairing in the cart."""
    id: str
    product_id: str
    quantity: int
    product: ProductSnapshot
    variant_id: Optional[str] = None
    variant: Optional[VariantSnapshot] = None

    @property
    def unit_price(self) -> Decimal:
        """Base price plus the variant's modifier, as snapshotted."""
        modifier = self.variant.price_modifier if self.variant else Decimal("0")
        return add(self.product.price, modifier)

    @property
    def stock_snapshot(self) -> int:
        """Maximum purchasable quantity known at the last lookup."""
        if self.variant is not None:
            return self.variant.stock_quantity
        return self.product.stock_quantity

    @property
    def line_total(self) -> Decimal:
        return multiply(self.unit_price, self.quantity)

    def matches(self, product_id: str, variant_id: Optional[str]) -> bool:
        return self.product_id == product_id and self.variant_id == variant_id

    def display_name(self, lang: str) -> str:
        if lang == "vi" and self.product.name_vi:
            return self.product.name_vi
        return self.product.name

    def to_dict(self) -> dict:
        """Convert to the storefront's persisted line item shape."""
        return {
            "id": self.id,
            "productId": self.product_id,
            "productVariantId": self.variant_id,
            "quantity": self.quantity,
            "product": self.product.to_dict(),
            "productVariant": self.variant.to_dict() if self.variant else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        variant = data.get("productVariant")
        return cls(
            id=data["id"],
            product_id=data["productId"],
            quantity=int(data["quantity"]),
            product=ProductSnapshot.from_dict(data["product"]),
            variant_id=data.get("productVariantId"),
            variant=VariantSnapshot.from_dict(variant) if variant else None,
        )


@dataclass(frozen=True)
class CartState:
    """Shopping cart snapshot. Totals are always derived from items."""
    items: Tuple[CartLineItem, ...] = ()
    total_items: int = 0
    total_amount: Decimal = Decimal("0")
    is_loading: bool = False
    error: Optional[str] = None

    def find_item(self, product_id: str, variant_id: Optional[str] = None) -> Optional[CartLineItem]:
        return next((item for item in self.items if item.matches(product_id, variant_id)), None)

    def to_dict(self) -> dict:
        """Serialized shape for storage. Totals and status flags are not persisted."""
        return {"items": [item.to_dict() for item in self.items]}
