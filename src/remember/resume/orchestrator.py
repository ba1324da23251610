"""Wires context, storage, prompts and trackers for one page load."""

from __future__ import annotations

import logging

from remember.config import RememberConfig
from remember.context.resolver import resolve_context
from remember.host.interfaces import BrowserHost, Event, Page
from remember.prompt.controller import PromptController, PromptSession
from remember.resume.machine import (
    Accept,
    ArmAbandonGuard,
    ClearRecord,
    Decline,
    DisarmAbandonGuard,
    Effect,
    Evaluate,
    JumpToSlide,
    MachineEvent,
    MachineState,
    MarkSessionActive,
    NavigateTo,
    PromptSuppressed,
    RestorePosition,
    ResumeInputs,
    ShowPrompt,
    Unload,
    transition,
)
from remember.session.tracker import SessionTracker
from remember.storage.position_store import PositionStore
from remember.trackers.scroll import ScrollTracker
from remember.trackers.slides import SlideTracker
from remember.types import DocumentContext, PositionRecord

logger = logging.getLogger(__name__)


def restore_position(page: Page, record: PositionRecord) -> None:
    """Apply a remembered anchor, or failing that a remembered scroll offset."""
    if record.hash:
        page.set_hash(record.hash)
    elif record.scroll_y > 0:
        behavior = "auto" if page.prefers_reduced_motion() else "smooth"
        page.scroll_to(record.scroll_y, behavior=behavior)


class ResumeOrchestrator:
    """Runs the decision machine for one load and interprets its effects."""

    def __init__(self, host: BrowserHost, *, config: RememberConfig | None = None) -> None:
        self.host = host
        self.config = config or RememberConfig()
        keys = self.config.storage_keys
        self.store = PositionStore(host.local_storage, host.clock, keys)
        self.session = SessionTracker(host.session_storage, keys)
        self.prompts = PromptController(
            host.dialogs,
            host.events,
            host.session_storage,
            host.clock,
            keys=keys,
            config=self.config.prompt,
        )
        self.state = MachineState()
        self.context: DocumentContext | None = None
        self.prompt_session: PromptSession | None = None
        self.scroll_tracker: ScrollTracker | None = None
        self.slide_tracker: SlideTracker | None = None

    def initialise(self) -> DocumentContext:
        if self.context is not None:
            return self.context
        context = resolve_context(self.host.page)
        self.context = context
        logger.debug("Resolved %s context with key %s", context.kind.value, context.tracking_key)
        if context.is_presentation:
            self._start_presentation(context)
        else:
            self._start_page(context)
        return context

    def offer_slide_resume(self, stored: PositionRecord) -> None:
        """Prompt path used by the slide tracker once the deck is ready."""
        if self.context is None:
            raise ValueError("offer_slide_resume called before initialise")
        self._dispatch(Evaluate(self._inputs(self.context, stored)))

    def _start_page(self, context: DocumentContext) -> None:
        stored = self.store.load(context)
        self._dispatch(Evaluate(self._inputs(context, stored)))

        self.scroll_tracker = ScrollTracker(
            self.host.page,
            self.host.events,
            self.host.scheduler,
            self.store,
            context,
            config=self.config.tracking,
        )
        self.scroll_tracker.start()
        # Subscribed after the tracker so its last-chance save runs first.
        self.host.events.subscribe("beforeunload", self._on_unload)

    def _start_presentation(self, context: DocumentContext) -> None:
        self.slide_tracker = SlideTracker(
            self.host.presentation,
            self.host.events,
            self.store,
            context,
            offer_resume=self.offer_slide_resume,
        )
        self.slide_tracker.start()

    def _inputs(self, context: DocumentContext, stored: PositionRecord | None) -> ResumeInputs:
        return ResumeInputs(
            context=context,
            stored=stored,
            session_active=self.session.is_active(),
            now=int(self.host.clock()),
        )

    def _on_unload(self, event: Event) -> None:
        self._dispatch(Unload())

    def _dispatch(self, event: MachineEvent) -> None:
        result = transition(self.state, event, config=self.config.tracking)
        logger.debug(
            "%s: %s -> %s",
            type(event).__name__,
            self.state.phase.value,
            result.state.phase.value,
        )
        self.state = result.state
        for effect in result.effects:
            self._apply(effect)

    def _apply(self, effect: Effect) -> None:
        if isinstance(effect, (ArmAbandonGuard, DisarmAbandonGuard)):
            # The guard lives in machine state; the unload listener is always attached.
            logger.debug("Abandonment guard %s", "armed" if self.state.guard_armed else "disarmed")
        elif isinstance(effect, MarkSessionActive):
            self.session.mark_active()
        elif isinstance(effect, ClearRecord):
            self.store.clear()
        elif isinstance(effect, ShowPrompt):
            self.prompt_session = self.prompts.show(
                effect.message,
                lambda: self._dispatch(Accept()),
                lambda: self._dispatch(Decline()),
            )
            if self.prompt_session is None:
                self._dispatch(PromptSuppressed())
        elif isinstance(effect, RestorePosition):
            restore_position(self.host.page, effect.record)
        elif isinstance(effect, NavigateTo):
            self.host.page.navigate(effect.url)
        elif isinstance(effect, JumpToSlide):
            if self.host.presentation is not None:
                indices = effect.indices
                self.host.presentation.slide(indices.h, indices.v, indices.f)
        else:
            raise ValueError(f"Unknown effect: {effect!r}")

    @property
    def guard_armed(self) -> bool:
        return self.state.guard_armed


def install(host: BrowserHost, *, config: RememberConfig | None = None) -> ResumeOrchestrator:
    """Initialise now, or once the DOM is parsed if the page is still loading."""

    orchestrator = ResumeOrchestrator(host, config=config)
    if host.page.ready_state == "loading":

        def _on_ready(event: Event) -> None:
            host.events.unsubscribe("DOMContentLoaded", _on_ready)
            orchestrator.initialise()

        host.events.subscribe("DOMContentLoaded", _on_ready)
    else:
        orchestrator.initialise()
    return orchestrator
