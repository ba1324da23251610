"""Single modal confirmation dialog with cooldown and focus trap."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from remember.config import PromptConfig, StorageKeys
from remember.errors import StorageUnavailableError
from remember.host.interfaces import Clock, DialogHost, Event, EventSource, KeyValueStorage
from remember.prompt.dialog import DialogButton, DialogView, PromptAction, build_dialog

logger = logging.getLogger(__name__)


class PromptSession:
    """One displayed dialog; resolves exactly once.

    Teardown (unmount, keyboard detach, focus restore) runs before the chosen
    callback so the callback sees a clean document.
    """

    def __init__(
        self,
        view: DialogView,
        *,
        dialogs: DialogHost,
        events: EventSource,
        previously_focused: Any | None,
        on_accept: Callable[[], None],
        on_decline: Callable[[], None],
    ) -> None:
        self.view = view
        self._dialogs = dialogs
        self._events = events
        self._previously_focused = previously_focused
        self._callbacks = {
            PromptAction.ACCEPT: on_accept,
            PromptAction.DECLINE: on_decline,
        }
        self.outcome: PromptAction | None = None

    @property
    def is_open(self) -> bool:
        return self.outcome is None

    def open(self) -> None:
        self._dialogs.mount(self.view)
        self._dialogs.focus(self.view.decline_button)
        self._events.subscribe("keydown", self.handle_keydown)

    def press(self, action: PromptAction) -> None:
        """Button activation."""
        if not self.is_open:
            return
        self.outcome = action
        self._teardown()
        self._callbacks[action]()

    def accept(self) -> None:
        self.press(PromptAction.ACCEPT)

    def decline(self) -> None:
        self.press(PromptAction.DECLINE)

    def handle_keydown(self, event: Event) -> None:
        if not self.is_open:
            return
        if event.key == "Escape":
            self.decline()
        elif event.key == "Tab":
            # Handle every Tab so focus can only move between the two buttons.
            event.prevent_default()
            self._dialogs.focus(self._next_focus(reverse=event.shift_key))

    def _next_focus(self, *, reverse: bool) -> DialogButton:
        buttons = self.view.buttons
        current = self._dialogs.active_element()
        if current not in buttons:
            return buttons[-1] if reverse else buttons[0]
        index = buttons.index(current)
        step = -1 if reverse else 1
        return buttons[(index + step) % len(buttons)]

    def _teardown(self) -> None:
        self._dialogs.unmount(self.view)
        self._events.unsubscribe("keydown", self.handle_keydown)
        if self._previously_focused is not None:
            self._dialogs.focus(self._previously_focused)


class PromptController:
    """Shows resume dialogs, at most one per cooldown window."""

    def __init__(
        self,
        dialogs: DialogHost,
        events: EventSource,
        session_storage: KeyValueStorage,
        clock: Clock,
        *,
        keys: StorageKeys | None = None,
        config: PromptConfig | None = None,
    ) -> None:
        self._dialogs = dialogs
        self._events = events
        self._storage = session_storage
        self._clock = clock
        self._key = (keys or StorageKeys()).prompt_shown
        self.config = config or PromptConfig()

    def recently_shown(self) -> bool:
        try:
            last_shown = self._storage.get_item(self._key)
            if last_shown:
                return self._clock() - int(last_shown) < self.config.cooldown_ms
        except (StorageUnavailableError, ValueError):
            logger.debug("Prompt cooldown unreadable; allowing prompt")
        return False

    def show(
        self,
        message: str,
        on_accept: Callable[[], None],
        on_decline: Callable[[], None],
    ) -> PromptSession | None:
        """Display the dialog, or return ``None`` if still cooling down."""

        if self.recently_shown():
            logger.info("Resume prompt suppressed by cooldown")
            return None
        self._mark_shown()

        session = PromptSession(
            build_dialog(message, self.config),
            dialogs=self._dialogs,
            events=self._events,
            previously_focused=self._dialogs.active_element(),
            on_accept=on_accept,
            on_decline=on_decline,
        )
        session.open()
        return session

    def _mark_shown(self) -> None:
        try:
            self._storage.set_item(self._key, str(int(self._clock())))
        except StorageUnavailableError:
            logger.debug("Session storage unavailable; cooldown not recorded")
