# rentshop/routers/wishlist.py
from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, Field

from rentshop.core.context import StoreContext, get_stores
from rentshop.schemas.wishlist import ToggleOut, WishlistEntry, WishlistOut

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


class ToggleBody(BaseModel):
    product_id: str = Field(..., min_length=1)


@router.get("", response_model=WishlistOut)
def get_wishlist(ctx: StoreContext = Depends(get_stores)):
    return WishlistOut(items=list(ctx.wishlist.items))


@router.post("/items", response_model=WishlistOut)
def add_to_wishlist(entry: WishlistEntry, ctx: StoreContext = Depends(get_stores)):
    ctx.wishlist.add_item(entry)
    return WishlistOut(items=list(ctx.wishlist.items))


@router.post("/toggle", response_model=ToggleOut)
async def toggle_wishlist(payload: ToggleBody, ctx: StoreContext = Depends(get_stores)):
    product = await ctx.products.get_product(payload.product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    entry = WishlistEntry(
        id=product.id,
        product_id=product.id,
        title=product.name,
        price=product.price,
        image=product.primary_image,
        category=product.category,
    )
    return ToggleOut(product_id=product.id, in_wishlist=ctx.wishlist.toggle(entry))


@router.delete("/items/{product_id}", response_model=WishlistOut)
def remove_from_wishlist(product_id: str = Path(..., min_length=1), ctx: StoreContext = Depends(get_stores)):
    ctx.wishlist.remove_item(product_id)
    return WishlistOut(items=list(ctx.wishlist.items))


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
def clear_wishlist(ctx: StoreContext = Depends(get_stores)):
    ctx.wishlist.clear_wishlist()
    return None
