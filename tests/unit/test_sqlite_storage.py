import pytest

from remember.host.sqlite import SqliteStorage
from remember.storage.position_store import PositionStore
from remember.types import DocumentContext, DocumentKind


def test_sqlite_storage_get_set_remove(tmp_path) -> None:
    storage = SqliteStorage(tmp_path / "remember.db")

    assert storage.get_item("missing") is None
    storage.set_item("k", "v1")
    storage.set_item("k", "v2")
    assert storage.get_item("k") == "v2"

    storage.remove_item("k")
    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_position_survives_new_storage_instance(tmp_path) -> None:
    context = DocumentContext(DocumentKind.PAGE, "/post.html", "/post.html")
    db = tmp_path / "remember.db"

    PositionStore(SqliteStorage(db), lambda: 1234).save(context, scroll_y=480, hash="#x")
    record = PositionStore(SqliteStorage(db), lambda: 9999).load(context)

    assert record is not None
    assert record.scroll_y == 480
    assert record.hash == "#x"
    assert record.timestamp == 1234


def test_rejects_unsafe_table_name(tmp_path) -> None:
    with pytest.raises(ValueError):
        SqliteStorage(tmp_path / "remember.db", table="kv; DROP TABLE kv")
