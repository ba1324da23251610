"""Capability interfaces the core needs from its host document."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Protocol

from remember.types import SlideIndices


class Element(Protocol):
    """Minimal element contract used for delegated link clicks."""

    def closest(self, tag: str) -> Element | None:
        """Return this element or the nearest ancestor with ``tag``."""

    def get_attribute(self, name: str) -> str | None:
        """Return an attribute value or ``None``."""


@dataclass(slots=True)
class Event:
    """A delivered host event."""

    type: str
    target: Element | None = None
    key: str = ""
    shift_key: bool = False
    detail: dict[str, Any] = field(default_factory=dict)
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


EventHandler = Callable[[Event], None]

# Milliseconds since epoch.
Clock = Callable[[], int]


class KeyValueStorage(Protocol):
    """String key/value storage (durable or session-scoped).

    Implementations raise ``StorageUnavailableError`` when disabled or full.
    """

    def get_item(self, key: str) -> str | None:
        """Return the stored value or ``None``."""

    def set_item(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``."""

    def remove_item(self, key: str) -> None:
        """Remove ``key`` if present."""


class EventSource(Protocol):
    """Subscription point for host signals."""

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Register ``handler`` for ``event_type``."""

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Remove a previously registered handler."""


class Scheduler(Protocol):
    """One-shot timers."""

    def set_timeout(self, callback: Callable[[], None], delay_ms: int) -> int:
        """Schedule ``callback`` and return a handle."""

    def clear_timeout(self, handle: int | None) -> None:
        """Cancel a pending timer; unknown or ``None`` handles are ignored."""


class Page(Protocol):
    """Location, scroll state and structural markers of the loaded document."""

    @property
    def path(self) -> str:
        """Current URL path."""

    @property
    def hash(self) -> str:
        """Current fragment including the leading ``#``, or ``""``."""

    @property
    def scroll_y(self) -> float:
        """Vertical scroll offset in pixels."""

    @property
    def ready_state(self) -> str:
        """``"loading"`` until the DOM is parsed."""

    def has_page_navigation(self) -> bool:
        """Whether previous/next page navigation is rendered."""

    def has_chapter_sidebar(self) -> bool:
        """Whether a chapter sidebar is rendered."""

    def has_presentation_root(self) -> bool:
        """Whether the document is a slide deck."""

    def prefers_reduced_motion(self) -> bool:
        """Whether the visitor asked for reduced motion."""

    def set_hash(self, value: str) -> None:
        """Jump to an in-page anchor."""

    def scroll_to(self, top: float, *, behavior: str) -> None:
        """Scroll vertically to ``top``."""

    def navigate(self, url: str) -> None:
        """Load another page."""


class DialogHost(Protocol):
    """Renders dialogs and owns keyboard focus."""

    def mount(self, dialog: Any) -> None:
        """Attach a dialog view to the document."""

    def unmount(self, dialog: Any) -> None:
        """Detach a dialog view; detaching twice is harmless."""

    def active_element(self) -> Any | None:
        """Element currently holding focus."""

    def focus(self, element: Any) -> None:
        """Move focus to ``element``."""


class Presentation(EventSource, Protocol):
    """Slide framework API: ``ready``/``slidechanged`` signals plus navigation."""

    def get_indices(self) -> SlideIndices:
        """Current slide position."""

    def slide(self, h: int, v: int, f: int) -> None:
        """Jump to the given slide position."""


@dataclass(slots=True)
class BrowserHost:
    """Bundle of host capabilities handed to the orchestrator."""

    page: Page
    events: EventSource
    local_storage: KeyValueStorage
    session_storage: KeyValueStorage
    scheduler: Scheduler
    clock: Clock
    dialogs: DialogHost
    presentation: Presentation | None = None
