# rentshop/services/rental.py
from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Literal, Optional

from rentshop.schemas.cart import CartItemIn
from rentshop.schemas.product import Product

RentalPeriod = Literal["daily", "weekly", "monthly"]

# days per period, multiplier on the daily rate (longer periods are cheaper per day)
_PERIODS: Dict[str, tuple[int, Decimal]] = {
    "daily": (1, Decimal("1")),
    "weekly": (7, Decimal("0.8")),
    "monthly": (30, Decimal("0.7")),
}


def rental_price(base_price: float, period: RentalPeriod = "daily") -> float:
    """Unit price for one rental of `period`, rounded to cents."""
    days, factor = _PERIODS.get(period, _PERIODS["daily"])
    price = Decimal(str(base_price)) * days * factor
    return float(price.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def rental_cart_item(product: Product, period: RentalPeriod = "daily") -> CartItemIn:
    """Cart item for renting `product`; the price is frozen at this moment."""
    return CartItemIn(
        id=product.id,
        product_id=product.id,
        title=f"{product.name} ({period} rental)",
        price=rental_price(product.price, period),
        image=product.primary_image,
    )


def filter_products(
    products: List[Product],
    search: Optional[str] = None,
    category: Optional[str] = None,
) -> List[Product]:
    """
    Plain substring search on name/description (case-insensitive) plus an exact
    category match. `category` of None or "all" matches everything.
    """
    needle = (search or "").strip().lower()
    cat = (category or "all").strip().lower()
    out: List[Product] = []
    for p in products:
        if needle and needle not in p.name.lower() and needle not in (p.description or "").lower():
            continue
        if cat != "all" and p.category != cat:
            continue
        out.append(p)
    return out
