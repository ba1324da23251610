import json

from remember.config import StorageKeys
from remember.errors import StorageUnavailableError
from remember.host.memory import InMemoryStorage, ManualScheduler
from remember.storage.position_store import PositionStore
from remember.types import DocumentContext, DocumentKind, SlideIndices

PAGE = DocumentContext(kind=DocumentKind.PAGE, tracking_key="/post.html", current_path="/post.html")
OTHER = DocumentContext(kind=DocumentKind.PAGE, tracking_key="/other.html", current_path="/other.html")


def _store(storage: InMemoryStorage | None = None) -> tuple[PositionStore, ManualScheduler]:
    scheduler = ManualScheduler()
    return PositionStore(storage or InMemoryStorage(), scheduler.now), scheduler


def test_round_trip_under_same_key() -> None:
    store, scheduler = _store()
    saved_at = scheduler.now()

    store.save(PAGE, scroll_y=250, hash="#sec")
    record = store.load(PAGE)

    assert record is not None
    assert record.scroll_y == 250
    assert record.hash == "#sec"
    assert record.slide_indices is None
    assert record.source_url == "/post.html"
    assert record.timestamp >= saved_at


def test_record_for_other_key_is_ignored() -> None:
    store, _ = _store()
    store.save(PAGE, scroll_y=250, hash="#sec")

    assert store.load(OTHER) is None
    # The slot is untouched; the owner still sees it.
    assert store.load(PAGE) is not None


def test_single_slot_is_overwritten() -> None:
    store, _ = _store()
    store.save(PAGE, scroll_y=10)
    store.save(OTHER, scroll_y=20)

    assert store.load(PAGE) is None
    record = store.load(OTHER)
    assert record is not None and record.scroll_y == 20


def test_defaults_fill_missing_fields() -> None:
    store, _ = _store()
    store.save(PAGE, slide_indices=SlideIndices(h=3, v=1, f=0))

    record = store.load(PAGE)

    assert record is not None
    assert record.scroll_y == 0
    assert record.hash == ""
    assert record.slide_indices == SlideIndices(h=3, v=1, f=0)


def test_wire_format_uses_camel_case_and_separate_timestamp() -> None:
    storage = InMemoryStorage()
    store, scheduler = _store(storage)
    keys = StorageKeys()

    store.save(PAGE, scroll_y=120.5, hash="#intro")

    payload = json.loads(storage.get_item(keys.position) or "{}")
    assert payload == {
        "trackingKey": "/post.html",
        "sourceUrl": "/post.html",
        "scrollY": 120.5,
        "hash": "#intro",
        "slideIndices": None,
    }
    assert storage.get_item(keys.timestamp) == str(scheduler.now())


def test_clear_is_idempotent() -> None:
    store, _ = _store()
    store.save(PAGE, scroll_y=300)

    store.clear()
    store.clear()

    assert store.load(PAGE) is None


def test_disabled_storage_degrades_silently(caplog) -> None:
    store, _ = _store(InMemoryStorage(disabled=True))

    assert store.save(PAGE, scroll_y=300) is None
    assert store.load(PAGE) is None
    store.clear()

    assert any("Failed to save position" in message for message in caplog.messages)


def test_quota_failure_on_timestamp_rolls_back_position() -> None:
    storage = InMemoryStorage()
    keys = StorageKeys()
    store, _ = _store(storage)
    position_only = len(keys.position) + 120
    storage.quota = position_only

    store.save(PAGE, scroll_y=300)

    assert storage.get_item(keys.position) is None
    assert storage.get_item(keys.timestamp) is None
    assert store.load(PAGE) is None


def test_position_without_timestamp_reads_as_absent() -> None:
    storage = InMemoryStorage()
    store, _ = _store(storage)
    store.save(PAGE, scroll_y=300)
    storage.remove_item(StorageKeys().timestamp)

    assert store.load(PAGE) is None


def test_corrupt_payload_reads_as_absent() -> None:
    storage = InMemoryStorage()
    keys = StorageKeys()
    storage.set_item(keys.position, "{not json")
    storage.set_item(keys.timestamp, "123")
    store, _ = _store(storage)

    assert store.load(PAGE) is None


def test_backend_error_type_is_runtime_error() -> None:
    assert issubclass(StorageUnavailableError, RuntimeError)
