import re

from rentshop.core.identity import USER_ID_KEY, get_current_user_id
from rentshop.core.local_storage import LocalStorage

USER_ID = re.compile(r"^user_\d{13}_[0-9a-z]{9}$")


def test_user_id_is_generated_once_and_persisted(storage):
    first = get_current_user_id(storage)
    assert USER_ID.match(first)
    assert get_current_user_id(storage) == first
    assert storage.get_item(USER_ID_KEY) == first


def test_user_id_survives_new_storage_handle(tmp_path):
    path = str(tmp_path / "s")
    first = get_current_user_id(LocalStorage(path))
    assert get_current_user_id(LocalStorage(path)) == first


def test_no_storage_means_fresh_token_each_call():
    ids = {get_current_user_id(None) for _ in range(5)}
    ids |= {get_current_user_id(LocalStorage(None)) for _ in range(5)}
    assert len(ids) == 10
    assert all(USER_ID.match(i) for i in ids)


def test_storage_round_trip_and_remove(storage):
    storage.set_item("k", {"a": [1, 2]})
    assert storage.get_item("k") == {"a": [1, 2]}
    storage.remove_item("k")
    assert storage.get_item("k") is None
    storage.remove_item("k")


def test_corrupt_snapshot_reads_as_missing(tmp_path):
    storage = LocalStorage(str(tmp_path))
    (tmp_path / "cart-storage.json").write_text("{not json", encoding="utf-8")
    assert storage.get_item("cart-storage") is None


def test_unavailable_storage():
    storage = LocalStorage(None)
    assert storage.available is False
    storage.set_item("k", 1)
    assert storage.get_item("k") is None


def test_failed_write_leaves_no_temp_files(tmp_path):
    storage = LocalStorage(str(tmp_path))
    storage.set_item("k", {"ok": True})
    storage.set_item("k", {"bad": object()})
    assert sorted(p.name for p in tmp_path.iterdir()) == ["k.json"]
    assert storage.get_item("k") == {"ok": True}
