"""Resume decision state machine.

Every transition is a pure function of ``(state, event)`` returning the next
state plus an ordered tuple of effects. Nothing here touches storage or the
document; ``ResumeOrchestrator`` interprets the effects against a host.

Per load the machine goes ``IDLE`` -> (evaluation) -> one of ``PROMPTED``,
``SILENT_RESTORE`` or ``NO_OP``. A prompt then ends in ``RESUMED``,
``DECLINED`` or, when the visitor leaves without answering, ``ABANDONED``.
A prompt the host never displays falls back to ``NO_OP``.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Union

from remember.config import TrackingConfig
from remember.resume.messages import (
    different_chapter_message,
    presentation_message,
    same_page_message,
)
from remember.types import DocumentContext, PositionRecord, SlideIndices


class ResumePhase(str, Enum):
    IDLE = "idle"
    PROMPTED = "prompted"
    SILENT_RESTORE = "silent_restore"
    NO_OP = "no_op"
    RESUMED = "resumed"
    DECLINED = "declined"
    ABANDONED = "abandoned"


class PromptKind(str, Enum):
    DIFFERENT_CHAPTER = "different_chapter"
    SAME_PAGE = "same_page"
    PRESENTATION = "presentation"


@dataclass(frozen=True, slots=True)
class ResumeInputs:
    """Everything the decision needs, gathered at load time."""

    context: DocumentContext
    stored: PositionRecord | None
    session_active: bool
    now: int

    @property
    def source_url(self) -> str:
        if self.stored is None or not self.stored.source_url:
            return self.context.current_path
        return self.stored.source_url

    @property
    def is_different_page(self) -> bool:
        return self.source_url != self.context.current_path


# Events


@dataclass(frozen=True, slots=True)
class Evaluate:
    inputs: ResumeInputs


@dataclass(frozen=True, slots=True)
class Accept:
    pass


@dataclass(frozen=True, slots=True)
class Decline:
    pass


@dataclass(frozen=True, slots=True)
class Unload:
    pass


@dataclass(frozen=True, slots=True)
class PromptSuppressed:
    """The host declined to display the prompt, e.g. during the cooldown."""


MachineEvent = Union[Evaluate, Accept, Decline, Unload, PromptSuppressed]


# Effects


@dataclass(frozen=True, slots=True)
class ArmAbandonGuard:
    pass


@dataclass(frozen=True, slots=True)
class DisarmAbandonGuard:
    pass


@dataclass(frozen=True, slots=True)
class MarkSessionActive:
    pass


@dataclass(frozen=True, slots=True)
class ClearRecord:
    pass


@dataclass(frozen=True, slots=True)
class ShowPrompt:
    kind: PromptKind
    message: str


@dataclass(frozen=True, slots=True)
class RestorePosition:
    record: PositionRecord


@dataclass(frozen=True, slots=True)
class NavigateTo:
    url: str


@dataclass(frozen=True, slots=True)
class JumpToSlide:
    indices: SlideIndices


Effect = Union[
    ArmAbandonGuard,
    DisarmAbandonGuard,
    MarkSessionActive,
    ClearRecord,
    ShowPrompt,
    RestorePosition,
    NavigateTo,
    JumpToSlide,
]


@dataclass(frozen=True, slots=True)
class MachineState:
    phase: ResumePhase = ResumePhase.IDLE
    inputs: ResumeInputs | None = None
    prompt: PromptKind | None = None
    guard_armed: bool = False


@dataclass(frozen=True, slots=True)
class Transition:
    state: MachineState
    effects: tuple[Effect, ...] = ()


def transition(
    state: MachineState,
    event: MachineEvent,
    *,
    config: TrackingConfig | None = None,
) -> Transition:
    config = config or TrackingConfig()
    if isinstance(event, Evaluate):
        if state.phase is not ResumePhase.IDLE:
            raise ValueError(f"Cannot evaluate twice in one load (phase={state.phase.value})")
        return _evaluate(event.inputs, config)
    if isinstance(event, (Accept, Decline)):
        if state.phase is not ResumePhase.PROMPTED:
            raise ValueError(f"No prompt awaiting a response (phase={state.phase.value})")
        return _respond(state, accepted=isinstance(event, Accept))
    if isinstance(event, PromptSuppressed):
        if state.phase is not ResumePhase.PROMPTED:
            raise ValueError(f"No prompt to suppress (phase={state.phase.value})")
        return _suppress(state)
    if isinstance(event, Unload):
        return _unload(state)
    raise ValueError(f"Unknown event: {event!r}")


def _evaluate(inputs: ResumeInputs, config: TrackingConfig) -> Transition:
    stored = inputs.stored
    context = inputs.context
    if stored is None:
        return Transition(MachineState(ResumePhase.NO_OP, inputs))

    if context.is_presentation:
        if stored.slide_indices is None:
            return Transition(MachineState(ResumePhase.NO_OP, inputs))
        return _prompt(inputs, stored, PromptKind.PRESENTATION, guarded=False)

    if inputs.session_active:
        if inputs.is_different_page:
            return Transition(MachineState(ResumePhase.NO_OP, inputs))
        return Transition(
            MachineState(ResumePhase.SILENT_RESTORE, inputs),
            (RestorePosition(stored),),
        )

    if context.is_book:
        if inputs.is_different_page:
            return _prompt(inputs, stored, PromptKind.DIFFERENT_CHAPTER, guarded=True)
        return Transition(
            MachineState(ResumePhase.SILENT_RESTORE, inputs),
            (MarkSessionActive(), RestorePosition(stored)),
        )

    if stored.scroll_y > config.prompt_scroll_threshold or stored.hash:
        kind = PromptKind.DIFFERENT_CHAPTER if inputs.is_different_page else PromptKind.SAME_PAGE
        return _prompt(inputs, stored, kind, guarded=True)
    if inputs.is_different_page:
        return Transition(MachineState(ResumePhase.NO_OP, inputs))
    return Transition(
        MachineState(ResumePhase.SILENT_RESTORE, inputs),
        (RestorePosition(stored),),
    )


def _prompt(
    inputs: ResumeInputs,
    stored: PositionRecord,
    kind: PromptKind,
    *,
    guarded: bool,
) -> Transition:
    timestamp = stored.timestamp
    if kind is PromptKind.DIFFERENT_CHAPTER:
        message = different_chapter_message(timestamp, inputs.now)
    elif kind is PromptKind.SAME_PAGE:
        message = same_page_message(timestamp, inputs.now)
    else:
        message = presentation_message(timestamp, inputs.now)

    effects: tuple[Effect, ...] = (ShowPrompt(kind, message),)
    if guarded:
        effects = (ArmAbandonGuard(), *effects)
    return Transition(
        MachineState(ResumePhase.PROMPTED, inputs, prompt=kind, guard_armed=guarded),
        effects,
    )


def _respond(state: MachineState, *, accepted: bool) -> Transition:
    if state.inputs is None or state.inputs.stored is None:
        raise ValueError("Prompted state without a stored position")
    stored = state.inputs.stored

    effects: list[Effect] = []
    if state.guard_armed:
        # Disarm before marking so the unload cleanup cannot fire afterwards.
        effects += [DisarmAbandonGuard(), MarkSessionActive()]

    if not accepted:
        effects.append(ClearRecord())
        phase = ResumePhase.DECLINED
    else:
        phase = ResumePhase.RESUMED
        if state.prompt is PromptKind.DIFFERENT_CHAPTER:
            effects.append(NavigateTo(stored.target_url()))
        elif state.prompt is PromptKind.PRESENTATION and stored.slide_indices is not None:
            effects.append(JumpToSlide(stored.slide_indices))
        else:
            effects.append(RestorePosition(stored))

    return Transition(replace(state, phase=phase, guard_armed=False), tuple(effects))


def _unload(state: MachineState) -> Transition:
    if state.guard_armed:
        return Transition(
            replace(state, phase=ResumePhase.ABANDONED, guard_armed=False),
            (MarkSessionActive(), ClearRecord()),
        )
    return Transition(state, (MarkSessionActive(),))


def _suppress(state: MachineState) -> Transition:
    # No dialog was shown; a later unload keeps the record.
    effects: tuple[Effect, ...] = (DisarmAbandonGuard(),) if state.guard_armed else ()
    return Transition(replace(state, phase=ResumePhase.NO_OP, guard_armed=False), effects)
