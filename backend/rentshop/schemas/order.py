# rentshop/schemas/order.py
from __future__ import annotations

from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from rentshop.schemas.cart import CartLine


class OrderSummary(BaseModel):
    """Result of the simulated checkout. No payment is taken."""
    order_id: str
    items: List[CartLine] = Field(default_factory=list)
    item_count: int
    subtotal: float
    shipping: float = 0.0
    tax: float = 0.0
    grand_total: float
    placed_at: datetime
