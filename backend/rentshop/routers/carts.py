"""
rentshop/routers/carts.py
Cart endpoints over the process-wide CartStore.

Behavior
- Add merges by product_id (quantity + 1) and keeps the price captured on first add.
- PUT sets an absolute quantity; 0 or less removes the line.
- Removing or updating an unknown product_id is a no-op, not a 404.
- POST /cart/rentals prices a listing for a rental period and adds it `quantity` times.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field, field_validator

from rentshop.core.context import StoreContext, get_stores
from rentshop.schemas.cart import CartItemIn, CartOut, QuantityBody
from rentshop.services.rental import RentalPeriod, rental_cart_item

router = APIRouter(prefix="/cart", tags=["Cart"])


class RentalBody(BaseModel):
    product_id: str = Field(..., description="Listing id as returned by /products.")
    period: RentalPeriod = Field("daily", description="daily | weekly | monthly")
    quantity: int = Field(1, ge=1, le=100)

    @field_validator("product_id")
    @classmethod
    def _clean_pid(cls, v: str) -> str:
        v = (v or "").strip()
        for ch in ("\u200b", "\u200c", "\u200d", "\ufeff", "\xa0"):
            v = v.replace(ch, "")
        if not v:
            raise ValueError("product_id cannot be empty")
        return v


def _cart_out(ctx: StoreContext) -> CartOut:
    cart = ctx.cart
    return CartOut(
        items=list(cart.items),
        total_items=cart.get_total_items(),
        total_price=cart.get_total_price(),
    )


@router.get("", response_model=CartOut)
def get_cart(ctx: StoreContext = Depends(get_stores)):
    return _cart_out(ctx)


@router.post("/items", response_model=CartOut)
def add_to_cart(payload: CartItemIn, ctx: StoreContext = Depends(get_stores)):
    ctx.cart.add_item(payload)
    return _cart_out(ctx)


@router.post("/rentals", response_model=CartOut)
async def add_rental(payload: RentalBody, ctx: StoreContext = Depends(get_stores)):
    product = await ctx.products.get_product(payload.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    item = rental_cart_item(product, payload.period)
    for _ in range(payload.quantity):
        ctx.cart.add_item(item)
    return _cart_out(ctx)


@router.put("/items/{product_id}", response_model=CartOut)
def update_quantity(product_id: str, payload: QuantityBody, ctx: StoreContext = Depends(get_stores)):
    ctx.cart.update_quantity(product_id, payload.quantity)
    return _cart_out(ctx)


@router.delete("/items/{product_id}", response_model=CartOut)
def remove_cart_item(product_id: str, ctx: StoreContext = Depends(get_stores)):
    ctx.cart.remove_item(product_id)
    return _cart_out(ctx)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(ctx: StoreContext = Depends(get_stores)):
    ctx.cart.clear_cart()
    return  # 204 No Content
