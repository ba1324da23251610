import logging

from remember.host.memory import EventBus, FakePresentation, InMemoryStorage, ManualScheduler
from remember.storage.position_store import PositionStore
from remember.trackers.slides import SlideTracker
from remember.types import DocumentContext, DocumentKind, PositionRecord, SlideIndices

DECK = DocumentContext(
    kind=DocumentKind.PRESENTATION, tracking_key="/deck.html", current_path="/deck.html"
)


def _setup(presentation: FakePresentation | None):
    scheduler = ManualScheduler()
    store = PositionStore(InMemoryStorage(), scheduler.now)
    events = EventBus()
    offers: list[PositionRecord] = []
    tracker = SlideTracker(presentation, events, store, DECK, offer_resume=offers.append)
    return tracker, store, events, offers


def test_missing_framework_logs_warning_and_does_not_start(caplog) -> None:
    tracker, _, events, _ = _setup(None)

    with caplog.at_level(logging.WARNING):
        assert tracker.start() is False

    assert "Presentation framework not found" in caplog.text
    assert events.listener_count("beforeunload") == 0


def test_nothing_happens_before_ready() -> None:
    deck = FakePresentation()
    tracker, store, _, _ = _setup(deck)
    tracker.start()

    deck.go_to(SlideIndices(h=2))

    assert store.load(DECK) is None


def test_slide_changes_and_unload_are_saved() -> None:
    deck = FakePresentation()
    tracker, store, events, offers = _setup(deck)
    tracker.start()
    deck.emit("ready")

    deck.go_to(SlideIndices(h=4, v=1, f=2))
    record = store.load(DECK)
    assert record is not None and record.slide_indices == SlideIndices(h=4, v=1, f=2)

    deck.indices = SlideIndices(h=5)
    events.emit("beforeunload")
    record = store.load(DECK)
    assert record is not None and record.slide_indices == SlideIndices(h=5)
    assert offers == []


def test_stored_slides_are_offered_on_ready() -> None:
    deck = FakePresentation()
    tracker, store, _, offers = _setup(deck)
    store.save(DECK, slide_indices=SlideIndices(h=7, v=0, f=1))
    tracker.start()

    deck.emit("ready")
    deck.emit("ready")

    assert len(offers) == 1
    assert offers[0].slide_indices == SlideIndices(h=7, v=0, f=1)


def test_scroll_only_record_is_not_offered() -> None:
    deck = FakePresentation()
    tracker, store, _, offers = _setup(deck)
    store.save(DECK, scroll_y=900)
    tracker.start()

    deck.emit("ready")

    assert offers == []
