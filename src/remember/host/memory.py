"""Deterministic in-memory host used for tests and local prototyping."""

from __future__ import annotations

import heapq
import itertools
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from remember.errors import StorageUnavailableError
from remember.host.interfaces import BrowserHost, Event, EventHandler
from remember.types import SlideIndices


class InMemoryStorage:
    """Dict-backed key/value storage.

    ``disabled`` makes every call raise, mimicking a browser with storage
    turned off. ``quota`` caps the total number of stored characters.
    """

    def __init__(self, *, disabled: bool = False, quota: int | None = None) -> None:
        self._data: dict[str, str] = {}
        self.disabled = disabled
        self.quota = quota

    def get_item(self, key: str) -> str | None:
        self._check_enabled()
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._check_enabled()
        if self.quota is not None:
            used = sum(len(k) + len(v) for k, v in self._data.items() if k != key)
            if used + len(key) + len(value) > self.quota:
                raise StorageUnavailableError(f"Quota exceeded writing {key!r}")
        self._data[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._check_enabled()
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)

    def _check_enabled(self) -> None:
        if self.disabled:
            raise StorageUnavailableError("Storage is disabled")


class EventBus:
    """Synchronous event dispatcher; handlers run in subscription order."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)

    def listener_count(self, event_type: str) -> int:
        return len(self._handlers.get(event_type, []))

    def emit(self, event_type: str, **kwargs: Any) -> Event:
        event = Event(type=event_type, **kwargs)
        for handler in list(self._handlers.get(event_type, [])):
            handler(event)
        return event


class ManualScheduler:
    """Virtual clock with one-shot timers fired by ``advance``."""

    def __init__(self, start_ms: int = 1_700_000_000_000) -> None:
        self._now = start_ms
        self._ids = itertools.count(1)
        self._queue: list[tuple[int, int, Callable[[], None]]] = []
        self._cancelled: set[int] = set()

    def now(self) -> int:
        return self._now

    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> int:
        handle = next(self._ids)
        heapq.heappush(self._queue, (self._now + max(0, delay_ms), handle, callback))
        return handle

    def clear_timeout(self, handle: int | None) -> None:
        if handle is not None:
            self._cancelled.add(handle)

    def pending(self) -> int:
        return sum(1 for _, handle, _ in self._queue if handle not in self._cancelled)

    def advance(self, delta_ms: int) -> None:
        """Move time forward, firing due timers in deadline order."""
        target = self._now + delta_ms
        while self._queue and self._queue[0][0] <= target:
            due, handle, callback = heapq.heappop(self._queue)
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            self._now = max(self._now, due)
            callback()
        self._now = target


@dataclass(slots=True, eq=False)
class HtmlElement:
    """Tiny element tree node, enough for delegated click handling."""

    tag: str
    attributes: dict[str, str] = field(default_factory=dict)
    parent: HtmlElement | None = None

    def closest(self, tag: str) -> HtmlElement | None:
        node: HtmlElement | None = self
        while node is not None:
            if node.tag.lower() == tag.lower():
                return node
            node = node.parent
        return None

    def get_attribute(self, name: str) -> str | None:
        return self.attributes.get(name)


@dataclass(slots=True)
class InMemoryPage:
    """Scriptable page state."""

    path: str = "/index.html"
    hash: str = ""
    scroll_y: float = 0.0
    ready_state: str = "complete"
    page_navigation: bool = False
    chapter_sidebar: bool = False
    presentation_root: bool = False
    reduced_motion: bool = False
    scroll_calls: list[tuple[float, str]] = field(default_factory=list)
    navigations: list[str] = field(default_factory=list)

    def has_page_navigation(self) -> bool:
        return self.page_navigation

    def has_chapter_sidebar(self) -> bool:
        return self.chapter_sidebar

    def has_presentation_root(self) -> bool:
        return self.presentation_root

    def prefers_reduced_motion(self) -> bool:
        return self.reduced_motion

    def set_hash(self, value: str) -> None:
        self.hash = value if not value or value.startswith("#") else f"#{value}"

    def scroll_to(self, top: float, *, behavior: str) -> None:
        self.scroll_y = top
        self.scroll_calls.append((top, behavior))

    def navigate(self, url: str) -> None:
        self.navigations.append(url)


class InMemoryDialogHost:
    """Keeps mounted dialogs in a list and tracks the focused element."""

    def __init__(self, initial_focus: Any | None = None) -> None:
        self.mounted: list[Any] = []
        self.mount_count = 0
        self._focused = initial_focus

    @property
    def current(self) -> Any | None:
        return self.mounted[-1] if self.mounted else None

    def mount(self, dialog: Any) -> None:
        self.mounted.append(dialog)
        self.mount_count += 1

    def unmount(self, dialog: Any) -> None:
        if dialog in self.mounted:
            self.mounted.remove(dialog)

    def active_element(self) -> Any | None:
        return self._focused

    def focus(self, element: Any) -> None:
        self._focused = element


class FakePresentation(EventBus):
    """Stand-in for a slide framework with ``ready``/``slidechanged`` signals."""

    def __init__(self, indices: SlideIndices | None = None) -> None:
        super().__init__()
        self.indices = indices or SlideIndices()
        self.jumps: list[SlideIndices] = []

    def get_indices(self) -> SlideIndices:
        return self.indices

    def slide(self, h: int, v: int, f: int) -> None:
        self.indices = SlideIndices(h=h, v=v, f=f)
        self.jumps.append(self.indices)

    def go_to(self, indices: SlideIndices) -> Event:
        """Move to ``indices`` as a visitor would and fire ``slidechanged``."""
        self.indices = indices
        return self.emit("slidechanged")


@dataclass(slots=True)
class InMemoryHost:
    """All in-memory capabilities wired together, plus ``as_browser_host``."""

    page: InMemoryPage = field(default_factory=InMemoryPage)
    events: EventBus = field(default_factory=EventBus)
    local_storage: InMemoryStorage = field(default_factory=InMemoryStorage)
    session_storage: InMemoryStorage = field(default_factory=InMemoryStorage)
    scheduler: ManualScheduler = field(default_factory=ManualScheduler)
    dialogs: InMemoryDialogHost = field(default_factory=InMemoryDialogHost)
    presentation: FakePresentation | None = None

    def as_browser_host(self) -> BrowserHost:
        return BrowserHost(
            page=self.page,
            events=self.events,
            local_storage=self.local_storage,
            session_storage=self.session_storage,
            scheduler=self.scheduler,
            clock=self.scheduler.now,
            dialogs=self.dialogs,
            presentation=self.presentation,
        )

    def reload(self, *, path: str | None = None, new_session: bool = False) -> InMemoryHost:
        """Simulate a fresh page load sharing durable storage.

        Session storage survives unless ``new_session`` is set, mirroring a
        tab that stays open versus a new visit.
        """
        page = InMemoryPage(
            path=path or self.page.path,
            page_navigation=self.page.page_navigation,
            chapter_sidebar=self.page.chapter_sidebar,
            presentation_root=self.page.presentation_root,
            reduced_motion=self.page.reduced_motion,
        )
        presentation = None
        if self.presentation is not None:
            presentation = FakePresentation()
        return InMemoryHost(
            page=page,
            events=EventBus(),
            local_storage=self.local_storage,
            session_storage=InMemoryStorage() if new_session else self.session_storage,
            scheduler=self.scheduler,
            dialogs=InMemoryDialogHost(),
            presentation=presentation,
        )
