"""
# `rentshop/routers/products.py` - Listing endpoints

### `GET /products/`
Refreshes the catalog (remote, or cached snapshot when the remote is down) and
returns it, optionally filtered by `search` (substring of name/description) and
`category` (`all` = no filter).

### `GET /products/mine`
Listings whose `seller_id` is the current installation's user id.

### `GET /products/{product_id}`
Single listing; fetches the catalog once if the id isn't known locally. `404` if absent.

### `POST /products/`
Multipart form: listing fields (`ProductCreate.as_form`) + `photos` (1 to 5 files).
Photos go to Firebase Storage, or inline as `data:` URIs when storage is unavailable.
The listing is always accepted; `X-Persistence: local` marks a listing that only
exists in the local catalog because the remote insert failed.

### `DELETE /products/{product_id}`
Removes the listing. Unknown ids are not an error (`removed=false`).
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, Query, Response, UploadFile, status

from rentshop.core.context import StoreContext, current_user_id, get_stores
from rentshop.core.errors import MissingSellerError
from rentshop.schemas.product import Product, ProductCreate
from rentshop.services.images import MAX_IMAGES, ImageUpload, upload_images
from rentshop.services.rental import filter_products

router = APIRouter(prefix="/products", tags=["Products"])


@router.get("", response_model=List[Product], include_in_schema=False)
@router.get("/", response_model=List[Product], summary="List Products")
async def list_products(
    search: Optional[str] = Query(None, description="Substring of name or description"),
    category: Optional[str] = Query(None, description="Category or 'all'"),
    ctx: StoreContext = Depends(get_stores),
):
    await ctx.products.fetch_products()
    return filter_products(ctx.products.products, search, category)


@router.get("/mine", response_model=List[Product], summary="My Listings")
def my_products(
    ctx: StoreContext = Depends(get_stores),
    user_id: str = Depends(current_user_id),
):
    return ctx.products.get_my_products(user_id)


@router.get("/{product_id}", response_model=Product, summary="Get Product")
async def get_product(product_id: str, ctx: StoreContext = Depends(get_stores)):
    product = await ctx.products.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@router.post("", response_model=Product, status_code=status.HTTP_201_CREATED, include_in_schema=False)
@router.post("/", response_model=Product, status_code=status.HTTP_201_CREATED, summary="Create Listing")
async def create_product(
    response: Response,
    product_in: ProductCreate = Depends(ProductCreate.as_form),
    photos: List[UploadFile] = File(..., description="1-5 listing photos, first is primary"),
    ctx: StoreContext = Depends(get_stores),
    user_id: str = Depends(current_user_id),
):
    uploads = [p for p in photos if p and p.filename]
    if not uploads:
        raise HTTPException(status_code=400, detail="Please upload at least one image")
    if len(uploads) > MAX_IMAGES:
        raise HTTPException(status_code=400, detail=f"At most {MAX_IMAGES} images are allowed")

    images = [ImageUpload(p.filename, await p.read(), p.content_type) for p in uploads]
    product_in.images = upload_images(
        images,
        user_id,
        bucket=ctx.bucket,
        prefix=ctx.settings.product_images_prefix,
    )
    product_in.seller_id = user_id

    try:
        outcome = await ctx.products.add_product(product_in)
    except MissingSellerError as e:
        raise HTTPException(status_code=422, detail=str(e))
    response.headers["X-Persistence"] = "local" if outcome.degraded else "remote"
    return outcome.value


@router.delete("/{product_id}", summary="Remove Listing")
async def delete_product(product_id: str, ctx: StoreContext = Depends(get_stores)):
    outcome = await ctx.products.remove_product(product_id)
    return {"removed": outcome.value, "degraded": outcome.degraded}
