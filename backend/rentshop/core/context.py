"""
rentshop/core/context.py
One set of stores per process, built once and handed to the routers through
`app.state` instead of module-level singletons.
"""
from dataclasses import dataclass
from typing import Any, Optional

from fastapi import Depends, Request

from rentshop.config import Settings, firestore_client, init_firebase, storage_bucket
from rentshop.core.identity import get_current_user_id
from rentshop.core.local_storage import LocalStorage
from rentshop.repositories.products import FirestoreProducts, RemoteProducts
from rentshop.services.cart_store import CartStore
from rentshop.services.products_store import ProductsStore
from rentshop.services.wishlist_store import WishlistStore

_UNSET: Any = object()


@dataclass
class StoreContext:
    settings: Settings
    storage: LocalStorage
    cart: CartStore
    wishlist: WishlistStore
    products: ProductsStore
    bucket: Any = None

    def current_user_id(self) -> str:
        return get_current_user_id(self.storage)


def build_context(
    settings: Settings,
    remote: Optional[RemoteProducts] = _UNSET,
    bucket: Any = _UNSET,
) -> StoreContext:
    """
    Wire the stores. `remote`/`bucket` default to Firebase when configured and None
    otherwise; pass them explicitly to inject fakes.
    """
    if remote is _UNSET or bucket is _UNSET:
        firebase_app = init_firebase(settings)
        if remote is _UNSET:
            db = firestore_client(firebase_app)
            remote = FirestoreProducts(db, settings.firebase_collection_prefix) if db is not None else None
        if bucket is _UNSET:
            bucket = storage_bucket(firebase_app, settings)

    storage = LocalStorage(settings.local_storage_dir or None)
    return StoreContext(
        settings=settings,
        storage=storage,
        cart=CartStore(storage),
        wishlist=WishlistStore(storage),
        products=ProductsStore(
            remote,
            storage,
            remove_local_on_remote_failure=settings.remove_local_on_remote_failure,
        ),
        bucket=bucket,
    )


def get_stores(request: Request) -> StoreContext:
    return request.app.state.stores


def current_user_id(ctx: StoreContext = Depends(get_stores)) -> str:
    return ctx.current_user_id()
