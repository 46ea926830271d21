"""Cart service: bridges the pure reducer to product lookups and storage."""
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Mapping, Optional

from vietfood.config import CART_LANGUAGE, MAX_QUANTITY, MIN_QUANTITY
from vietfood.errors import (
    ERROR_CART_LOAD_FAILED,
    CartError,
    InsufficientStockError,
    LookupFailure,
    NotFoundError,
    StorageFailure,
    VariantNotFoundError,
)
from vietfood.i18n import get_text, normalize_language
from vietfood.logging import get_logger, sanitize_id_for_logging, sanitize_string_for_logging
from vietfood.services.catalog import ProductLookup
from vietfood.services.models import Product, ProductVariant
from vietfood.services.money import format_money, to_json_number

from . import pricing
from .actions import AddItem, CartAction, ClearCart, RemoveItem, SetError, SetItems, SetLoading, UpdateQuantity
from .models import CartLineItem, CartState, ProductSnapshot, VariantSnapshot
from .reducer import cart_reducer
from .storage import CartStorage

logger = get_logger(__name__)


@dataclass(frozen=True)
class StockCheckResult:
    """Outcome of re-checking the cart against live stock."""
    has_out_of_stock: bool
    out_of_stock_items: List[str] = field(default_factory=list)


class CartService:
    """
    The storefront's cart.

    Construct once at application start and pass it to whatever needs the
    cart. The cart is hydrated from storage on construction and persisted
    after every change to its items.

    Error contract:
        add_to_cart raises NotFoundError / InsufficientStockError /
        LookupFailure and also leaves the localized message in
        state.error, so callers may either catch the exception or render
        state.error. update/remove/clear never raise for missing ids.

    Concurrency:
        Mutations are not serialized. A synchronous mutation made while
        add_to_cart is awaiting a lookup applies immediately, and the
        pending add still lands afterwards (e.g. clear_cart followed by a
        late AddItem leaves that item in the cart).

    Usage:
        cart = CartService(HttpProductLookup(), RedisCartStorage(session_id))
        await cart.add_to_cart("prod-1", 2)
        cart.get_final_total()
    """

    def __init__(self, lookup: ProductLookup, storage: CartStorage, lang: str = CART_LANGUAGE):
        self.lookup = lookup
        self.storage = storage
        self.lang = normalize_language(lang)
        self._state = CartState()
        self.load_cart()

    @property
    def state(self) -> CartState:
        return self._state

    # ------------------------------------------------------------------
    # Dispatch and persistence
    # ------------------------------------------------------------------

    def dispatch(self, action: CartAction) -> CartState:
        """Apply an action; persist if the items changed."""
        previous = self._state
        self._state = cart_reducer(previous, action)
        if self._state.items != previous.items:
            self._persist()
        return self._state

    def _persist(self) -> None:
        try:
            saved = self.storage.save(self._state.to_dict())
        except Exception as e:
            logger.error(f"Cart storage raised on save: {e}")
            saved = False
        if not saved:
            logger.warning(f"Cart not persisted ({len(self._state.items)} items kept in memory)")

    def load_cart(self) -> None:
        """Hydrate items from storage. Unreadable data leaves the cart empty."""
        try:
            data = self.storage.load()
        except StorageFailure as e:
            logger.error(f"Failed to load cart from storage: {e}")
            self.dispatch(SetError(get_text(ERROR_CART_LOAD_FAILED, self.lang)))
            return

        if not data:
            return

        try:
            items = tuple(CartLineItem.from_dict(item) for item in data.get("items") or [])
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"Corrupted cart data in storage: {e}")
            self.dispatch(SetError(get_text(ERROR_CART_LOAD_FAILED, self.lang)))
            return

        self.dispatch(SetItems(items))
        logger.info(f"Cart hydrated with {len(items)} items")

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add_to_cart(self, product_id: str, quantity: int, variant_id: Optional[str] = None) -> None:
        """
        Add a product (optionally a specific variant) after checking live stock.

        Args:
            product_id: Product to add
            quantity: Units to add (1..99)
            variant_id: Variant to add, if the product has one selected

        Raises:
            ValueError: quantity outside 1..99 (nothing dispatched)
            NotFoundError: product or variant absent or inactive
            InsufficientStockError: stock below quantity + quantity already in cart
            LookupFailure: product lookup failed in transport
        """
        if not isinstance(quantity, int) or not MIN_QUANTITY <= quantity <= MAX_QUANTITY:
            raise ValueError(f"quantity must be between {MIN_QUANTITY} and {MAX_QUANTITY}")

        self.dispatch(SetError(None))
        self.dispatch(SetLoading(True))
        try:
            product = await self._fetch(product_id)
            variant = self._resolve_variant(product, variant_id)

            available_stock = variant.stock_quantity if variant else product.stock_quantity
            in_cart = self.get_item_quantity(product_id, variant_id)
            if available_stock < quantity + in_cart:
                raise InsufficientStockError(requested=quantity + in_cart, available=available_stock)

            self.dispatch(AddItem(
                product_id=product_id,
                quantity=quantity,
                product=ProductSnapshot.from_product(product),
                variant_id=variant_id,
                variant=VariantSnapshot.from_variant(variant) if variant else None,
            ))
        except CartError as e:
            logger.warning(
                f"Add to cart failed for {sanitize_id_for_logging(product_id)}: "
                f"{type(e).__name__}: {sanitize_string_for_logging(str(e))}"
            )
            self.dispatch(SetError(e.localized(self.lang)))
            raise
        finally:
            self.dispatch(SetLoading(False))

    async def add_multiple_to_cart(self, entries: Iterable[Mapping]) -> None:
        """Add several products in order; stops at the first failure."""
        for entry in entries:
            await self.add_to_cart(entry["product_id"], entry["quantity"], entry.get("variant_id"))

    def update_quantity(self, line_item_id: str, quantity: int) -> None:
        """Set a line's quantity; 0 or less removes the line."""
        self.dispatch(UpdateQuantity(line_item_id=line_item_id, quantity=quantity))

    def remove_from_cart(self, line_item_id: str) -> None:
        self.dispatch(RemoveItem(line_item_id=line_item_id))

    def clear_cart(self) -> None:
        self.dispatch(ClearCart())

    async def _fetch(self, product_id: str) -> Product:
        try:
            return await self.lookup.fetch_product(product_id)
        except CartError:
            raise
        except Exception as e:
            raise LookupFailure(str(e)) from e

    @staticmethod
    def _resolve_variant(product: Product, variant_id: Optional[str]) -> Optional[ProductVariant]:
        if not product.is_active:
            raise NotFoundError(f"product {product.id} is inactive")
        if variant_id is None:
            return None
        variant = product.find_variant(variant_id)
        if variant is None:
            raise VariantNotFoundError(f"variant {variant_id} not found on product {product.id}")
        return variant

    # ------------------------------------------------------------------
    # Stock re-check
    # ------------------------------------------------------------------

    async def check_stock(self) -> StockCheckResult:
        """
        Re-fetch every line and report those whose live stock is below the
        quantity in the cart. Nothing is removed or clamped.

        A line whose lookup fails is logged and not reported.
        """
        out_of_stock: List[str] = []

        for item in self._state.items:
            try:
                product = await self.lookup.fetch_product(item.product_id)
            except Exception as e:
                logger.error(f"Stock check failed for item {sanitize_id_for_logging(item.id)}: {e}")
                continue

            if item.variant_id:
                variant = product.find_variant(item.variant_id)
                available_stock = variant.stock_quantity if variant else 0
            else:
                available_stock = product.stock_quantity

            if available_stock < item.quantity:
                out_of_stock.append(item.display_name(self.lang))

        return StockCheckResult(has_out_of_stock=bool(out_of_stock), out_of_stock_items=out_of_stock)

    # ------------------------------------------------------------------
    # Getters
    # ------------------------------------------------------------------

    def get_item_quantity(self, product_id: str, variant_id: Optional[str] = None) -> int:
        item = self._state.find_item(product_id, variant_id)
        return item.quantity if item else 0

    def is_in_cart(self, product_id: str, variant_id: Optional[str] = None) -> bool:
        return self._state.find_item(product_id, variant_id) is not None

    def get_item_id(self, product_id: str, variant_id: Optional[str] = None) -> Optional[str]:
        item = self._state.find_item(product_id, variant_id)
        return item.id if item else None

    def get_item_total(self, product_id: str, variant_id: Optional[str] = None) -> Decimal:
        item = self._state.find_item(product_id, variant_id)
        return item.line_total if item else Decimal("0")

    def get_cart_stats(self) -> dict:
        items = self._state.items
        return {
            "item_count": len(items),
            "total_items": self._state.total_items,
            "total_amount": self._state.total_amount,
            "is_empty": not items,
            "has_items": bool(items),
        }

    def get_shipping_cost(self) -> Decimal:
        return pricing.get_shipping_cost(self._state)

    def get_tax_amount(self) -> Decimal:
        return pricing.get_tax_amount(self._state)

    def get_tax_included_amount(self) -> Decimal:
        return pricing.get_tax_included_amount(self._state)

    def get_final_total(self) -> Decimal:
        return pricing.get_final_total(self._state)

    def get_amount_for_free_shipping(self) -> Decimal:
        return pricing.get_amount_for_free_shipping(self._state)

    def get_items_by_category(self) -> Dict[str, List[CartLineItem]]:
        """Group lines by localized category name, preserving cart order."""
        fallback = get_text("cart.uncategorized", self.lang)
        grouped: Dict[str, List[CartLineItem]] = {}
        for item in self._state.items:
            if self.lang == "vi" and item.product.category_name_vi:
                name = item.product.category_name_vi
            else:
                name = item.product.category_name or fallback
            grouped.setdefault(name, []).append(item)
        return grouped

    def export_cart_data(self) -> dict:
        """Cart contents and totals in the shape the order form submits."""
        return {
            "items": [
                {
                    "product_id": item.product_id,
                    "variant_id": item.variant_id,
                    "quantity": item.quantity,
                    "unit_price": to_json_number(item.unit_price),
                    "total_price": to_json_number(item.line_total),
                }
                for item in self._state.items
            ],
            "summary": {
                "subtotal": to_json_number(self._state.total_amount),
                "tax": to_json_number(self.get_tax_amount()),
                "shipping": to_json_number(self.get_shipping_cost()),
                "total": to_json_number(self.get_final_total()),
                "total_formatted": format_money(self.get_final_total()),
            },
        }
