"""
Cart errors and message keys.

Message keys resolve through vietfood.i18n, so the same error renders in
Japanese or Vietnamese depending on the cart language.
"""
from typing import Any, Optional

from vietfood.i18n import get_text

# Message keys
ERROR_PRODUCT_NOT_FOUND = "errors.product_not_found"
ERROR_VARIANT_NOT_FOUND = "errors.variant_not_found"
ERROR_INSUFFICIENT_STOCK = "errors.insufficient_stock"
ERROR_LOOKUP_FAILED = "errors.lookup_failed"
ERROR_ADD_FAILED = "errors.add_failed"
ERROR_CART_LOAD_FAILED = "errors.cart_load_failed"
ERROR_STORAGE_FAILED = "errors.storage_failed"


class CartError(Exception):
    """Base class for cart failures surfaced to the storefront."""

    message_key = ERROR_ADD_FAILED

    def __init__(self, detail: Optional[str] = None, **params: Any):
        self.detail = detail
        self.params = params
        super().__init__(detail or self.message_key)

    def localized(self, lang: str) -> str:
        """Message shown in the cart's error banner."""
        return get_text(self.message_key, lang, **self.params)


class NotFoundError(CartError):
    """Product or variant is absent or inactive."""

    message_key = ERROR_PRODUCT_NOT_FOUND


class VariantNotFoundError(NotFoundError):
    """Requested variant does not resolve to an active variant of the product."""

    message_key = ERROR_VARIANT_NOT_FOUND


class InsufficientStockError(CartError):
    """Requested quantity (plus what is already in the cart) exceeds stock."""

    message_key = ERROR_INSUFFICIENT_STOCK

    def __init__(self, requested: int, available: int, detail: Optional[str] = None):
        self.requested = requested
        self.available = available
        super().__init__(
            detail or f"requested {requested}, available {available}",
            requested=requested,
            available=available,
        )


class LookupFailure(CartError):
    """Product lookup failed in transport (network, HTTP 5xx, bad payload)."""

    message_key = ERROR_LOOKUP_FAILED


class StorageFailure(CartError):
    """Cart persistence failed. Logged only, never shown to the shopper."""

    message_key = ERROR_STORAGE_FAILED


__all__ = [
    "ERROR_PRODUCT_NOT_FOUND",
    "ERROR_VARIANT_NOT_FOUND",
    "ERROR_INSUFFICIENT_STOCK",
    "ERROR_LOOKUP_FAILED",
    "ERROR_ADD_FAILED",
    "ERROR_CART_LOAD_FAILED",
    "ERROR_STORAGE_FAILED",
    "CartError",
    "NotFoundError",
    "VariantNotFoundError",
    "InsufficientStockError",
    "LookupFailure",
    "StorageFailure",
]
