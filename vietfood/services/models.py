"""Catalog Models - Pydantic models returned by product lookups."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, field_validator

from vietfood.services.money import to_decimal as _to_decimal


class ProductVariant(BaseModel):
    """Purchasable sub-option of a product (e.g. 500g / 1kg)."""
    id: str
    name: str
    value: str = ""
    price_modifier: Decimal = Decimal("0")
    stock_quantity: int = 0
    is_active: bool = True

    class Config:
        extra = "ignore"

    @field_validator("price_modifier", mode="before")
    @classmethod
    def convert_modifier_to_decimal(cls, v):
        return _to_decimal(v)


class Product(BaseModel):
    """Product record as seen by the cart."""
    id: str
    sku: str = ""
    name: str  # Japanese name
    name_vi: Optional[str] = None
    price: Decimal
    stock_quantity: int = 0
    is_active: bool = True
    category_name: Optional[str] = None
    category_name_vi: Optional[str] = None
    image_url: Optional[str] = None
    variants: list[ProductVariant] = []

    class Config:
        extra = "ignore"

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return _to_decimal(v)

    def find_variant(self, variant_id: str) -> Optional[ProductVariant]:
        """Active variant with the given id, if any."""
        return next(
            (v for v in self.variants if v.id == variant_id and v.is_active),
            None,
        )

    def localized_name(self, lang: str) -> str:
        if lang == "vi" and self.name_vi:
            return self.name_vi
        return self.name
