"""
Derived cart totals.

Calculation order for the final total:
1. Subtotal (CartState.total_amount, whole yen)
2. Consumption tax at 10%, rounded half-up on its own
3. Shipping (free from 5000 yen)
"""
from decimal import Decimal

from vietfood.services.money import add, multiply, round_money, subtract

from .models import CartState

FREE_SHIPPING_THRESHOLD = Decimal("5000")
STANDARD_SHIPPING_COST = Decimal("500")
TAX_RATE = Decimal("0.10")


def get_shipping_cost(state: CartState) -> Decimal:
    if state.total_amount >= FREE_SHIPPING_THRESHOLD:
        return Decimal("0")
    return STANDARD_SHIPPING_COST


def get_tax_amount(state: CartState) -> Decimal:
    return round_money(multiply(state.total_amount, TAX_RATE))


def get_tax_included_amount(state: CartState) -> Decimal:
    """Subtotal with tax, rounded once over the whole amount."""
    return round_money(multiply(state.total_amount, add(1, TAX_RATE)))


def get_final_total(state: CartState) -> Decimal:
    """Subtotal + rounded tax + shipping."""
    return add(add(state.total_amount, get_tax_amount(state)), get_shipping_cost(state))


def get_amount_for_free_shipping(state: CartState) -> Decimal:
    remaining = subtract(FREE_SHIPPING_THRESHOLD, state.total_amount)
    return remaining if remaining > 0 else Decimal("0")
