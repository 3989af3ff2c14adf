import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from google.api_core.exceptions import ServiceUnavailable

from rentshop.config import Settings
from rentshop.core.local_storage import LocalStorage

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def product_row(pid: str, minutes: int = 0, **overrides) -> dict:
    ts = BASE_TIME + timedelta(minutes=minutes)
    row = {
        "id": pid,
        "name": f"Item {pid}",
        "description": f"Description of {pid}",
        "price": 10.0,
        "stock_quantity": 1,
        "category": "electronics",
        "images": [f"https://img.example/{pid}.jpg"],
        "seller_id": "user_1_seller",
        "contact_number": "555-0100",
        "additional_details": None,
        "created_at": ts,
        "updated_at": ts,
    }
    row.update(overrides)
    return row


def new_listing(**overrides) -> dict:
    data = {
        "name": "Camping tent",
        "description": "4 person tent",
        "price": 12.5,
        "stock_quantity": 1,
        "category": "sports",
        "images": ["data:image/png;base64,AAAA"],
        "seller_id": "user_1_seller",
        "contact_number": "555-0100",
    }
    data.update(overrides)
    return data


class FakeRemote:
    """In-memory stand-in for the Firestore repository."""

    def __init__(self, rows=None):
        self.rows = list(rows or [])
        self.calls = []
        self._n = 0

    async def list(self):
        self.calls.append("list")
        return sorted(self.rows, key=lambda r: r["created_at"], reverse=True)

    async def insert(self, record):
        self.calls.append("insert")
        self._n += 1
        now = datetime.now(timezone.utc)
        row = dict(record, id=f"srv_{self._n}", created_at=now, updated_at=now)
        self.rows.append(row)
        return dict(row)

    async def delete(self, product_id):
        self.calls.append("delete")
        self.rows = [r for r in self.rows if r["id"] != product_id]


class FailingRemote:
    def __init__(self, exc=None):
        self.exc = exc or ServiceUnavailable("backend unreachable")
        self.calls = []

    async def list(self):
        self.calls.append("list")
        raise self.exc

    async def insert(self, record):
        self.calls.append("insert")
        raise self.exc

    async def delete(self, product_id):
        self.calls.append("delete")
        raise self.exc


class GatedRemote(FakeRemote):
    """list() waits until its gate is opened; each call gets its own gate."""

    def __init__(self, rows=None):
        super().__init__(rows)
        self.gates = []

    async def list(self):
        gate = asyncio.Event()
        snapshot = sorted(self.rows, key=lambda r: r["created_at"], reverse=True)
        self.gates.append(gate)
        await gate.wait()
        return snapshot


@pytest.fixture
def storage(tmp_path):
    return LocalStorage(str(tmp_path / "store"))


@pytest.fixture
def settings(tmp_path):
    return Settings(
        _env_file=None,
        firebase_project_id=None,
        local_storage_dir=str(tmp_path / "app-store"),
    )
