"""Cart reducer actions."""
from dataclasses import dataclass
from typing import Optional, Tuple, Union
from uuid import uuid4

from .models import CartLineItem, ProductSnapshot, VariantSnapshot


def new_line_item_id(product_id: str, variant_id: Optional[str] = None) -> str:
    """Line item id minted per insertion event."""
    return f"{product_id}-{variant_id or 'default'}-{uuid4().hex[:12]}"


@dataclass(frozen=True)
class SetLoading:
    is_loading: bool


@dataclass(frozen=True)
class SetError:
    message: Optional[str]


@dataclass(frozen=True)
class SetItems:
    """Replace items wholesale (hydration)."""
    items: Tuple[CartLineItem, ...]


@dataclass(frozen=True)
class AddItem:
    """
    Add quantity of a (product, variant) pair.

    The id for a new line item is minted here rather than in the reducer,
    so applying the same action twice is deterministic.
    """
    product_id: str
    quantity: int
    product: ProductSnapshot
    variant_id: Optional[str] = None
    variant: Optional[VariantSnapshot] = None
    line_item_id: str = ""

    def __post_init__(self):
        if self.quantity < 1:
            raise ValueError("quantity must be a positive integer")
        if not self.line_item_id:
            object.__setattr__(self, "line_item_id", new_line_item_id(self.product_id, self.variant_id))


@dataclass(frozen=True)
class UpdateQuantity:
    line_item_id: str
    quantity: int


@dataclass(frozen=True)
class RemoveItem:
    line_item_id: str


@dataclass(frozen=True)
class ClearCart:
    pass


CartAction = Union[SetLoading, SetError, SetItems, AddItem, UpdateQuantity, RemoveItem, ClearCart]
