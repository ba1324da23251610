"""Captures scroll, anchor and navigation intent on regular pages and books."""

from __future__ import annotations

import logging

from remember.config import TrackingConfig
from remember.host.interfaces import Event, EventSource, Page, Scheduler
from remember.storage.position_store import PositionStore
from remember.types import DocumentContext

logger = logging.getLogger(__name__)


class ScrollTracker:
    """Writes the page position through the store for the rest of the visit.

    - scroll: debounced, only the last position of a quiet window is saved
    - hashchange, link click, beforeunload: saved immediately
    - books also save once on start so the current chapter is recorded
    """

    def __init__(
        self,
        page: Page,
        events: EventSource,
        scheduler: Scheduler,
        store: PositionStore,
        context: DocumentContext,
        *,
        config: TrackingConfig | None = None,
    ) -> None:
        self._page = page
        self._events = events
        self._scheduler = scheduler
        self._store = store
        self.context = context
        self.config = config or TrackingConfig()
        self._pending: int | None = None
        self._started = False

    def start(self) -> None:
        if self._started:
            return
        self._started = True
        if self.context.is_book:
            self.capture()
        self._events.subscribe("scroll", self._on_scroll)
        self._events.subscribe("hashchange", self._on_immediate)
        self._events.subscribe("click", self._on_click)
        self._events.subscribe("beforeunload", self._on_immediate)
        logger.debug("Scroll tracking started for %s", self.context.current_path)

    def stop(self) -> None:
        self._scheduler.clear_timeout(self._pending)
        self._pending = None
        self._events.unsubscribe("scroll", self._on_scroll)
        self._events.unsubscribe("hashchange", self._on_immediate)
        self._events.unsubscribe("click", self._on_click)
        self._events.unsubscribe("beforeunload", self._on_immediate)
        self._started = False

    def capture(self) -> None:
        self._store.save(self.context, scroll_y=self._page.scroll_y, hash=self._page.hash)

    def _on_scroll(self, event: Event) -> None:
        self._scheduler.clear_timeout(self._pending)
        self._pending = self._scheduler.set_timeout(
            self._flush, self.config.scroll_debounce_ms
        )

    def _flush(self) -> None:
        self._pending = None
        self.capture()

    def _on_immediate(self, event: Event) -> None:
        self.capture()

    def _on_click(self, event: Event) -> None:
        if event.target is None:
            return
        link = event.target.closest("a")
        if link is not None and link.get_attribute("href"):
            self.capture()
