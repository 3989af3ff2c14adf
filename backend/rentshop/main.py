"""
# `rentshop/main.py` - Application entry point

## General
Builds the FastAPI app: one `StoreContext` (cart, wishlist, catalog, local storage,
optional Firebase clients) per process, stored on `app.state.stores`, CORS from
`settings.allowed_origins`, and the routers.

## Routers
- `/products`
- `/cart`
- `/wishlist`
- `/checkout`
- `/me`

Without Firebase credentials the app runs in local/cache mode: listings and the
catalog live only in the JSON snapshots under `settings.local_storage_dir`.
"""
import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rentshop.config import Settings, get_settings
from rentshop.core.context import StoreContext, build_context
from rentshop.routers import carts, checkout, products, users, wishlist

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
logger = logging.getLogger("rentshop")


def create_app(settings: Optional[Settings] = None, stores: Optional[StoreContext] = None) -> FastAPI:
    settings = settings or (stores.settings if stores else get_settings())
    if settings.debug:
        logging.getLogger("rentshop").setLevel(logging.DEBUG)

    app = FastAPI(
        title="Rental Storefront API",
        description="Cart, wishlist and listing state for a rental marketplace.",
        version="1.0.0",
        redirect_slashes=False,
    )
    app.state.stores = stores or build_context(settings)
    if not app.state.stores.products.remote_configured:
        logger.warning("Remote data service not configured; running in local/cache mode")

    # Configure CORS (allow front-end domain or all origins as specified)
    allow_origins = [origin.strip() for origin in settings.allowed_origins.split(',')] if settings.allowed_origins else ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(products.router)
    app.include_router(carts.router)
    app.include_router(wishlist.router)
    app.include_router(checkout.router)
    app.include_router(users.router)
    return app


# Run the app directly with uvicorn (for development)
if __name__ == "__main__":
    import uvicorn
    uvicorn.run("rentshop.main:create_app", factory=True, host="0.0.0.0", port=8000, reload=True)
