"""
rentshop/repositories/products.py
Remote data service for the catalog, backed by Cloud Firestore (async client).

Every call may raise whatever the client raises (GoogleAPIError, transport errors,
auth errors). Callers decide how to degrade; nothing is caught here.
"""
from typing import Any, Dict, List, Protocol

from google.cloud import firestore as gcf
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

COL = "products"


class RemoteProducts(Protocol):
    async def list(self) -> List[Dict[str, Any]]: ...

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]: ...

    async def delete(self, product_id: str) -> None: ...


def _with_id(snap) -> Dict[str, Any]:
    data = snap.to_dict() or {}
    data["id"] = data.get("id") or snap.id
    return data


class FirestoreProducts:
    def __init__(self, db, prefix: str = ""):
        self._db = db
        self._col = f"{prefix}{COL}" if prefix else COL

    async def list(self) -> List[Dict[str, Any]]:
        """Whole catalog, newest first."""
        q = self._db.collection(self._col).order_by("created_at", direction=gcf.Query.DESCENDING)
        return [_with_id(snap) async for snap in q.stream()]

    async def insert(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Write a new document and read it back so server timestamps are resolved."""
        ref = self._db.collection(self._col).document()
        data = dict(record)
        data.update(
            id=ref.id,
            created_at=SERVER_TIMESTAMP,
            updated_at=SERVER_TIMESTAMP,
        )
        await ref.set(data)
        return _with_id(await ref.get())

    async def delete(self, product_id: str) -> None:
        # Firestore deletes of missing documents succeed, which is what we want
        await self._db.collection(self._col).document(product_id).delete()
