"""
# `rentshop/services/products_store.py` - Catalog store

## General
Owns the in-memory catalog and mediates between the remote data service
(`repositories/products.py`) and the local `products-storage` snapshot.
Every remote failure degrades to local-only semantics; the caller gets a
`Degraded` outcome instead of an exception. The only hard failure is a missing
`seller_id` on `add_product`.

---

## Operations

### `fetch_products()`
1. `loading` goes true while the call is in flight.
2. Remote catalog is read (newest first). Unconfigured remote: no call at all.
3. Success: `products` replaced, snapshot written -> `Ok`.
4. Failure: snapshot loaded; if it has rows they replace `products`, otherwise
   `products` is left as it was -> `Degraded`.

### `add_product(data)`
1. `seller_id` missing/blank -> `MissingSellerError`, nothing touched.
2. Remote insert; the server row (id, timestamps) is prepended -> `Ok`. A row
   that comes back malformed keeps its server id, never a second local record.
3. Failure: a local record is synthesized and prepended -> `Degraded`.

### `remove_product(product_id)`
Remote delete, then local removal. With `remove_local_on_remote_failure`
(default) the local entry goes away even if the remote delete failed.

### `get_my_products(seller_id)` / `get_product(product_id)`
Local filter / local lookup (with one fetch when the id is unknown).

---

## Ordering
Each fetch/add/remove takes a sequence number when it starts. A fetch result is
only applied if no newer operation has been applied meanwhile; otherwise it is
discarded and reported as `Degraded(current, StaleResponse)`.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Union

from pydantic import ValidationError

from rentshop.core.errors import MissingSellerError, RemoteUnavailable, StaleResponse
from rentshop.core.local_storage import LocalStorage
from rentshop.repositories.products import RemoteProducts
from rentshop.schemas.product import Product, ProductCreate
from rentshop.schemas.results import Degraded, Ok, Outcome
from rentshop.utils.ids import local_product_id

logger = logging.getLogger("rentshop.products")

PRODUCTS_KEY = "products-storage"


def _parse_products(rows: Iterable[Dict[str, Any]], source: str) -> List[Product]:
    out: List[Product] = []
    seen = set()
    for row in rows or []:
        try:
            p = Product.model_validate(row)
        except ValidationError as exc:
            logger.warning("Skipping malformed product from %s: %s", source, exc)
            continue
        if p.id in seen:
            continue
        seen.add(p.id)
        out.append(p)
    return out


class ProductsStore:
    def __init__(
        self,
        remote: Optional[RemoteProducts] = None,
        storage: Optional[LocalStorage] = None,
        *,
        remove_local_on_remote_failure: bool = True,
        key: str = PRODUCTS_KEY,
    ):
        self._remote = remote
        self._storage = storage
        self._key = key
        self.remove_local_on_remote_failure = remove_local_on_remote_failure

        self.products: List[Product] = []
        self._inflight_fetches = 0
        self._seq = 0
        self._applied = 0

    @property
    def loading(self) -> bool:
        return self._inflight_fetches > 0

    @property
    def remote_configured(self) -> bool:
        return self._remote is not None

    # ---------- helpers ----------
    def _next_seq(self) -> int:
        self._seq += 1
        return self._seq

    def _mark_applied(self, seq: int) -> None:
        self._applied = max(self._applied, seq)

    def _require_remote(self) -> RemoteProducts:
        if self._remote is None:
            raise RemoteUnavailable("remote data service is not configured")
        return self._remote

    def _save(self) -> None:
        if self._storage is None:
            return
        self._storage.set_item(self._key, {
            "state": {"products": [p.model_dump(mode="json") for p in self.products]},
            "version": 0,
        })

    def _load_snapshot(self) -> List[Product]:
        snap = self._storage.get_item(self._key) if self._storage is not None else None
        if not isinstance(snap, dict):
            return []
        return _parse_products((snap.get("state") or {}).get("products") or [], "local snapshot")

    def _prepend(self, product: Product) -> None:
        self.products = [product] + [p for p in self.products if p.id != product.id]

    # ---------- fetch ----------
    async def fetch_products(self) -> Outcome[List[Product]]:
        seq = self._next_seq()
        self._inflight_fetches += 1
        try:
            try:
                rows = await self._require_remote().list()
                fresh = _parse_products(rows, "remote")
            except Exception as exc:
                return self._recover_catalog(seq, exc)

            if seq < self._applied:
                logger.debug("Discarding stale catalog response #%s (applied #%s)", seq, self._applied)
                return Degraded(list(self.products), StaleResponse(seq, self._applied))

            self.products = fresh
            self._mark_applied(seq)
            self._save()
            return Ok(list(self.products))
        finally:
            self._inflight_fetches -= 1

    def _recover_catalog(self, seq: int, cause: Exception) -> Degraded[List[Product]]:
        if seq < self._applied:
            logger.debug("Discarding stale catalog fallback #%s (applied #%s)", seq, self._applied)
            return Degraded(list(self.products), StaleResponse(seq, self._applied))

        cached = self._load_snapshot()
        if cached:
            self.products = cached
            self._mark_applied(seq)
            logger.warning("Catalog fetch degraded, using %d cached products: %r", len(cached), cause)
        else:
            logger.warning("Catalog fetch degraded, no cached products: %r", cause)
        return Degraded(list(self.products), cause)

    # ---------- add ----------
    def _from_inserted_row(self, record: Dict[str, Any], row: Dict[str, Any]) -> Product:
        try:
            return Product.model_validate(row)
        except ValidationError as exc:
            now = datetime.now(timezone.utc)
            product_id = str((row or {}).get("id") or local_product_id())
            logger.warning("Listing %s inserted but the returned row is unreadable: %s", product_id, exc)
            return Product(**record, id=product_id, created_at=now, updated_at=now)

    async def add_product(self, data: Union[ProductCreate, Dict[str, Any]]) -> Outcome[Product]:
        seller_id = data.get("seller_id") if isinstance(data, dict) else data.seller_id
        if not seller_id or not str(seller_id).strip():
            raise MissingSellerError()
        if isinstance(data, dict):
            data = ProductCreate.model_validate(data)

        seq = self._next_seq()
        record = data.model_dump()
        outcome: Outcome[Product]
        try:
            row = await self._require_remote().insert(record)
        except Exception as exc:
            now = datetime.now(timezone.utc)
            product = Product(**record, id=local_product_id(), created_at=now, updated_at=now)
            logger.warning("Listing %s stored locally only: %r", product.id, exc)
            outcome = Degraded(product, exc)
        else:
            # the write reached the remote; keep its id even if the row is malformed
            product = self._from_inserted_row(record, row)
            outcome = Ok(product)

        self._prepend(product)
        self._mark_applied(seq)
        self._save()
        return outcome

    # ---------- remove ----------
    def _drop_local(self, product_id: str) -> bool:
        before = len(self.products)
        self.products = [p for p in self.products if p.id != product_id]
        removed = len(self.products) != before
        if removed:
            self._save()
        return removed

    async def remove_product(self, product_id: str) -> Outcome[bool]:
        """Value is True when a local entry was removed."""
        seq = self._next_seq()
        try:
            await self._require_remote().delete(product_id)
        except Exception as exc:
            if not self.remove_local_on_remote_failure:
                logger.warning("Remote delete of %s failed, keeping local entry: %r", product_id, exc)
                return Degraded(False, exc)
            logger.warning("Remote delete of %s failed, removing locally only: %r", product_id, exc)
            removed = self._drop_local(product_id)
            self._mark_applied(seq)
            return Degraded(removed, exc)

        removed = self._drop_local(product_id)
        self._mark_applied(seq)
        return Ok(removed)

    # ---------- queries ----------
    def get_my_products(self, seller_id: str) -> List[Product]:
        return [p for p in self.products if p.seller_id == seller_id]

    def find(self, product_id: str) -> Optional[Product]:
        return next((p for p in self.products if p.id == product_id), None)

    async def get_product(self, product_id: str) -> Optional[Product]:
        """Local lookup first; one catalog fetch if the id isn't known yet."""
        found = self.find(product_id)
        if found is None:
            await self.fetch_products()
            found = self.find(product_id)
        return found
