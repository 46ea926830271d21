"""
Cart reducer - pure state transitions.

cart_reducer(state, action) returns a new CartState and never performs I/O.
Totals are recomputed from scratch on every item change; carts hold a handful
of lines so there is nothing to gain from incremental bookkeeping.

Stock is deliberately not checked here. CartService validates against live
inventory before dispatching AddItem.
"""
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Dict, Iterable, Tuple, Type

from .actions import (
    AddItem,
    CartAction,
    ClearCart,
    RemoveItem,
    SetError,
    SetItems,
    SetLoading,
    UpdateQuantity,
)
from .models import CartLineItem, CartState


def _with_items(state: CartState, items: Iterable[CartLineItem], **changes) -> CartState:
    items = tuple(items)
    return replace(
        state,
        items=items,
        total_items=sum(item.quantity for item in items),
        total_amount=sum((item.line_total for item in items), Decimal("0")),
        **changes,
    )


def _set_loading(state: CartState, action: SetLoading) -> CartState:
    return replace(state, is_loading=action.is_loading)


def _set_error(state: CartState, action: SetError) -> CartState:
    return replace(state, error=action.message, is_loading=False)


def _set_items(state: CartState, action: SetItems) -> CartState:
    return _with_items(state, action.items, is_loading=False, error=None)


def _add_item(state: CartState, action: AddItem) -> CartState:
    existing = state.find_item(action.product_id, action.variant_id)

    if existing is not None:
        items: Tuple[CartLineItem, ...] = tuple(
            replace(item, quantity=item.quantity + action.quantity) if item is existing else item
            for item in state.items
        )
    else:
        items = state.items + (
            CartLineItem(
                id=action.line_item_id,
                product_id=action.product_id,
                quantity=action.quantity,
                product=action.product,
                variant_id=action.variant_id,
                variant=action.variant,
            ),
        )

    return _with_items(state, items, error=None)


def _update_quantity(state: CartState, action: UpdateQuantity) -> CartState:
    quantity = max(0, action.quantity)
    items = (
        replace(item, quantity=quantity) if item.id == action.line_item_id else item
        for item in state.items
    )
    return _with_items(state, (item for item in items if item.quantity > 0), error=None)


def _remove_item(state: CartState, action: RemoveItem) -> CartState:
    return _with_items(
        state,
        (item for item in state.items if item.id != action.line_item_id),
        error=None,
    )


def _clear_cart(state: CartState, action: ClearCart) -> CartState:
    return _with_items(state, (), error=None)


_HANDLERS: Dict[Type, Callable[[CartState, CartAction], CartState]] = {
    SetLoading: _set_loading,
    SetError: _set_error,
    SetItems: _set_items,
    AddItem: _add_item,
    UpdateQuantity: _update_quantity,
    RemoveItem: _remove_item,
    ClearCart: _clear_cart,
}


def cart_reducer(state: CartState, action: CartAction) -> CartState:
    """Compute the next cart state for an action."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown cart action: {type(action).__name__}")
    return handler(state, action)
