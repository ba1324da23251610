"""Slide-position capture for presentation documents."""

from __future__ import annotations

import logging
from collections.abc import Callable

from remember.host.interfaces import Event, EventSource, Presentation
from remember.storage.position_store import PositionStore
from remember.types import DocumentContext, PositionRecord

logger = logging.getLogger(__name__)


class SlideTracker:
    """Hooks the framework's ``ready`` signal, then records every slide change.

    ``offer_resume`` receives a stored record that carries slide indices; the
    orchestrator turns it into a prompt.
    """

    def __init__(
        self,
        presentation: Presentation | None,
        events: EventSource,
        store: PositionStore,
        context: DocumentContext,
        *,
        offer_resume: Callable[[PositionRecord], None],
    ) -> None:
        self._presentation = presentation
        self._events = events
        self._store = store
        self.context = context
        self._offer_resume = offer_resume
        self.ready = False

    def start(self) -> bool:
        if self._presentation is None:
            logger.warning("Presentation framework not found; slide tracking disabled")
            return False
        self._presentation.subscribe("ready", self._on_ready)
        return True

    def capture(self) -> None:
        if self._presentation is None:
            return
        self._store.save(self.context, slide_indices=self._presentation.get_indices())

    def _on_ready(self, event: Event) -> None:
        if self.ready or self._presentation is None:
            return
        self.ready = True

        stored = self._store.load(self.context)
        if stored is not None and stored.slide_indices is not None:
            self._offer_resume(stored)

        self._presentation.subscribe("slidechanged", self._on_change)
        self._events.subscribe("beforeunload", self._on_change)

    def _on_change(self, event: Event) -> None:
        self.capture()
