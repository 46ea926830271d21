"""Cart package: models, reducer, pricing, storage, and service facade."""
from .actions import AddItem, CartAction, ClearCart, RemoveItem, SetError, SetItems, SetLoading, UpdateQuantity
from .models import CartLineItem, CartState, ProductSnapshot, VariantSnapshot
from .reducer import cart_reducer
from .service import CartService, StockCheckResult
from .storage import CartStorage, InMemoryCartStorage, RedisCartStorage

__all__ = [
    "AddItem",
    "CartAction",
    "ClearCart",
    "RemoveItem",
    "SetError",
    "SetItems",
    "SetLoading",
    "UpdateQuantity",
    "CartLineItem",
    "CartState",
    "ProductSnapshot",
    "VariantSnapshot",
    "cart_reducer",
    "CartService",
    "StockCheckResult",
    "CartStorage",
    "InMemoryCartStorage",
    "RedisCartStorage",
]
