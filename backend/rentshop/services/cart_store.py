"""
rentshop/services/cart_store.py
Shopping cart lines: merge-on-add, absolute quantity updates, derived totals.

Behavior
- One line per product_id. Adding again bumps quantity by 1 and keeps the captured
  title/price/image of the first add.
- A line never holds quantity <= 0: such updates delete it.
- Totals use the price captured at add time, not the live catalog price.
- Every mutation writes the `cart-storage` snapshot; it's read once on construction.
- Nothing here raises for a missing line; absent product ids are no-ops.
"""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from rentshop.core.local_storage import LocalStorage
from rentshop.schemas.cart import CartItemIn, CartLine

logger = logging.getLogger("rentshop.cart")

CART_KEY = "cart-storage"
SNAPSHOT_VERSION = 0


def _load_lines(storage: Optional[LocalStorage], key: str) -> List[CartLine]:
    if storage is None:
        return []
    snap = storage.get_item(key)
    if not isinstance(snap, dict):
        return []
    raw = (snap.get("state") or {}).get("items") or []
    lines: List[CartLine] = []
    seen = set()
    for it in raw:
        try:
            line = CartLine.model_validate(it)
        except ValidationError as exc:
            logger.warning("Dropping invalid cart line from snapshot: %s", exc)
            continue
        if line.product_id in seen:
            continue
        seen.add(line.product_id)
        lines.append(line)
    return lines


class CartStore:
    def __init__(self, storage: Optional[LocalStorage] = None, key: str = CART_KEY):
        self._storage = storage
        self._key = key
        self.items: List[CartLine] = _load_lines(storage, key)

    # ---------- persistence ----------
    def snapshot(self) -> Dict[str, Any]:
        return {
            "state": {"items": [it.model_dump(mode="json") for it in self.items]},
            "version": SNAPSHOT_VERSION,
        }

    def _save(self) -> None:
        if self._storage is not None:
            self._storage.set_item(self._key, self.snapshot())

    def _find(self, product_id: str) -> Optional[CartLine]:
        for it in self.items:
            if it.product_id == product_id:
                return it
        return None

    # ---------- mutations ----------
    def add_item(self, item: CartItemIn) -> CartLine:
        existing = self._find(item.product_id)
        if existing:
            existing.quantity += 1
            line = existing
        else:
            line = CartLine(**item.model_dump(), quantity=1)
            self.items.append(line)
        self._save()
        return line

    def remove_item(self, product_id: str) -> None:
        before = len(self.items)
        self.items = [it for it in self.items if it.product_id != product_id]
        if len(self.items) != before:
            self._save()

    def update_quantity(self, product_id: str, quantity: int) -> None:
        quantity = int(quantity)
        if quantity <= 0:
            self.remove_item(product_id)
            return
        line = self._find(product_id)
        if line is None:
            return
        line.quantity = quantity
        self._save()

    def clear_cart(self) -> None:
        self.items = []
        self._save()

    # ---------- derived ----------
    def get_total_items(self) -> int:
        return sum(it.quantity for it in self.items)

    def get_total_price(self) -> float:
        total = sum((Decimal(str(it.price)) * it.quantity for it in self.items), Decimal("0"))
        return float(total)
