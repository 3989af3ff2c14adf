"""
rentshop/services/wishlist_store.py
Saved items with set semantics on product_id. Persisted to `wishlist-storage` after
every mutation, loaded once on construction.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from rentshop.core.local_storage import LocalStorage
from rentshop.schemas.wishlist import WishlistEntry

logger = logging.getLogger("rentshop.wishlist")

WISHLIST_KEY = "wishlist-storage"


class WishlistStore:
    def __init__(self, storage: Optional[LocalStorage] = None, key: str = WISHLIST_KEY):
        self._storage = storage
        self._key = key
        self.items: List[WishlistEntry] = self._load()

    def _load(self) -> List[WishlistEntry]:
        snap = self._storage.get_item(self._key) if self._storage is not None else None
        if not isinstance(snap, dict):
            return []
        out: List[WishlistEntry] = []
        for it in (snap.get("state") or {}).get("items") or []:
            try:
                entry = WishlistEntry.model_validate(it)
            except ValidationError as exc:
                logger.warning("Dropping invalid wishlist entry from snapshot: %s", exc)
                continue
            if not any(e.product_id == entry.product_id for e in out):
                out.append(entry)
        return out

    def snapshot(self) -> Dict[str, Any]:
        return {"state": {"items": [it.model_dump(mode="json") for it in self.items]}, "version": 0}

    def _save(self) -> None:
        if self._storage is not None:
            self._storage.set_item(self._key, self.snapshot())

    def add_item(self, entry: WishlistEntry) -> None:
        if self.is_in_wishlist(entry.product_id):
            return
        self.items.append(entry)
        self._save()

    def remove_item(self, product_id: str) -> None:
        before = len(self.items)
        self.items = [it for it in self.items if it.product_id != product_id]
        if len(self.items) != before:
            self._save()

    def clear_wishlist(self) -> None:
        self.items = []
        self._save()

    def is_in_wishlist(self, product_id: str) -> bool:
        return any(it.product_id == product_id for it in self.items)

    def toggle(self, entry: WishlistEntry) -> bool:
        """Remove when present, add otherwise. Returns the new membership."""
        if self.is_in_wishlist(entry.product_id):
            self.remove_item(entry.product_id)
            return False
        self.add_item(entry)
        return True
