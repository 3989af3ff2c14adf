from datetime import datetime, timezone

from google.cloud import firestore as gcf
from google.cloud.firestore_v1 import SERVER_TIMESTAMP

from conftest import product_row
from rentshop.repositories.products import FirestoreProducts, _with_id

WRITE_TIME = datetime(2024, 6, 1, 9, 30, tzinfo=timezone.utc)


class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = data

    def to_dict(self):
        return None if self._data is None else dict(self._data)


class FakeDocument:
    def __init__(self, collection, doc_id):
        self._collection = collection
        self.id = doc_id

    async def set(self, data):
        self._collection.writes.append((self.id, dict(data)))
        resolved = {k: WRITE_TIME if v is SERVER_TIMESTAMP else v for k, v in data.items()}
        self._collection.docs[self.id] = resolved

    async def get(self):
        return FakeSnapshot(self.id, self._collection.docs.get(self.id))

    async def delete(self):
        self._collection.deleted.append(self.id)
        self._collection.docs.pop(self.id, None)


class FakeQuery:
    def __init__(self, collection, field, direction):
        self._collection = collection
        self._field = field
        self._direction = direction

    async def stream(self):
        items = sorted(
            self._collection.docs.items(),
            key=lambda kv: kv[1][self._field],
            reverse=self._direction == gcf.Query.DESCENDING,
        )
        for doc_id, data in items:
            yield FakeSnapshot(doc_id, data)


class FakeCollection:
    def __init__(self):
        self.docs = {}
        self.writes = []
        self.deleted = []
        self.queries = []
        self._n = 0

    def document(self, doc_id=None):
        if doc_id is None:
            self._n += 1
            doc_id = f"auto_{self._n}"
        return FakeDocument(self, doc_id)

    def order_by(self, field, direction=None):
        self.queries.append((field, direction))
        return FakeQuery(self, field, direction)


class FakeFirestore:
    def __init__(self):
        self.collections = {}

    def collection(self, name):
        return self.collections.setdefault(name, FakeCollection())


def seed(db, name, *rows):
    col = db.collection(name)
    for row in rows:
        data = dict(row)
        col.docs[data.pop("id")] = data


async def test_list_is_newest_first_and_fills_ids():
    db = FakeFirestore()
    seed(db, "products", product_row("old", 0), product_row("new", 30), product_row("mid", 10))

    rows = await FirestoreProducts(db).list()

    assert [r["id"] for r in rows] == ["new", "mid", "old"]
    assert db.collection("products").queries == [("created_at", gcf.Query.DESCENDING)]


async def test_insert_assigns_document_id_and_server_timestamps():
    db = FakeFirestore()
    repo = FirestoreProducts(db)

    row = await repo.insert({"name": "Tent", "price": 12.5})

    col = db.collection("products")
    doc_id, written = col.writes[0]
    assert doc_id == "auto_1"
    assert written["id"] == "auto_1"
    assert written["created_at"] is SERVER_TIMESTAMP
    assert written["updated_at"] is SERVER_TIMESTAMP
    assert row == {
        "name": "Tent",
        "price": 12.5,
        "id": "auto_1",
        "created_at": WRITE_TIME,
        "updated_at": WRITE_TIME,
    }


async def test_insert_does_not_mutate_caller_record():
    record = {"name": "Tent"}
    await FirestoreProducts(FakeFirestore()).insert(record)
    assert record == {"name": "Tent"}


async def test_delete_targets_document():
    db = FakeFirestore()
    seed(db, "products", product_row("a"), product_row("b"))

    await FirestoreProducts(db).delete("a")
    await FirestoreProducts(db).delete("missing")

    col = db.collection("products")
    assert col.deleted == ["a", "missing"]
    assert list(col.docs) == ["b"]


async def test_collection_prefix():
    db = FakeFirestore()
    seed(db, "test_products", product_row("a"))
    repo = FirestoreProducts(db, prefix="test_")

    assert [r["id"] for r in await repo.list()] == ["a"]
    await repo.insert({"name": "x"})
    assert "products" not in db.collections
    assert len(db.collection("test_products").docs) == 2


def test_with_id_prefers_stored_id_and_tolerates_empty_docs():
    assert _with_id(FakeSnapshot("doc", {"name": "n"})) == {"name": "n", "id": "doc"}
    assert _with_id(FakeSnapshot("doc", {"id": "kept"}))["id"] == "kept"
    assert _with_id(FakeSnapshot("doc", None)) == {"id": "doc"}
