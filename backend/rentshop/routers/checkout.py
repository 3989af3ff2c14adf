# rentshop/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException

from rentshop.core.context import StoreContext, get_stores
from rentshop.core.errors import EmptyCartError
from rentshop.schemas.order import OrderSummary
from rentshop.services.checkout import checkout

router = APIRouter(prefix="/checkout", tags=["Checkout"])


@router.post("", response_model=OrderSummary, summary="Simulated checkout")
def place_order(ctx: StoreContext = Depends(get_stores)):
    """Summarizes the cart as an order and clears it. No payment is taken."""
    try:
        return checkout(ctx.cart)
    except EmptyCartError as e:
        raise HTTPException(status_code=400, detail=str(e))
