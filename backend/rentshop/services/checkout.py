# rentshop/services/checkout.py
from __future__ import annotations

import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List

from rentshop.core.errors import EmptyCartError
from rentshop.schemas.cart import CartLine
from rentshop.schemas.order import OrderSummary
from rentshop.services.cart_store import CartStore
from rentshop.utils.ids import now_millis, random_suffix

logger = logging.getLogger("rentshop.checkout")


def calc_totals(lines: List[CartLine]) -> Dict[str, Any]:
    """
    Order amount summary. Shipping is free and no tax is charged on rentals.
    """
    subtotal = sum((Decimal(str(it.price)) * it.quantity for it in lines), Decimal("0"))
    shipping = Decimal("0.00")
    tax = Decimal("0.00")
    grand_total = (subtotal + shipping + tax).quantize(Decimal("0.01"))

    return {
        "item_count": int(sum(it.quantity for it in lines)),
        "subtotal": float(subtotal.quantize(Decimal("0.01"))),
        "shipping": float(shipping),
        "tax": float(tax),
        "grand_total": float(grand_total),
    }


def checkout(cart: CartStore) -> OrderSummary:
    """Summarize the cart as an order and empty it."""
    if not cart.items:
        raise EmptyCartError("cart is empty")

    lines = [it.model_copy() for it in cart.items]
    summary = OrderSummary(
        order_id=f"order_{now_millis()}_{random_suffix(6)}",
        items=lines,
        placed_at=datetime.now(timezone.utc),
        **calc_totals(lines),
    )
    cart.clear_cart()
    logger.info("Order %s placed: %d items, total %.2f", summary.order_id, summary.item_count, summary.grand_total)
    return summary
