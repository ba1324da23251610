"""FastAPI entrypoint exposing resume decisions and document activation."""

from __future__ import annotations

import time
from dataclasses import asdict
from typing import Any, Literal

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from remember.activation import REMEMBER_DEPENDENCY, inject_dependencies
from remember.config import RememberConfig
from remember.context.resolver import book_root
from remember.resume.machine import (
    Accept,
    Decline,
    Effect,
    Evaluate,
    MachineState,
    ResumeInputs,
    Transition,
    Unload,
    transition,
)
from remember.storage.position_store import StoredPosition
from remember.types import DocumentContext, DocumentKind


class PositionPayload(StoredPosition):
    timestamp: int = Field(default=0, ge=0)


class EvaluateRequest(BaseModel):
    current_path: str = Field(min_length=1)
    kind: DocumentKind = DocumentKind.PAGE
    tracking_key: str | None = None
    stored: PositionPayload | None = None
    session_active: bool = False
    now_ms: int | None = Field(default=None, ge=0)


class RespondRequest(EvaluateRequest):
    action: Literal["accept", "decline", "unload"]


class DependencyRequest(BaseModel):
    output_format: str = Field(min_length=1)
    meta: dict[str, Any] = Field(default_factory=dict)


app = FastAPI(title="Remember", version=REMEMBER_DEPENDENCY.version)

_config = RememberConfig()


def _context(request: EvaluateRequest) -> DocumentContext:
    key = request.tracking_key
    if key is None:
        if request.kind is DocumentKind.BOOK:
            key = book_root(request.current_path)
        else:
            key = request.current_path
    return DocumentContext(kind=request.kind, tracking_key=key, current_path=request.current_path)


def _inputs(request: EvaluateRequest) -> ResumeInputs:
    context = _context(request)
    stored = None
    if request.stored is not None:
        # Same key filter as PositionStore.load.
        if request.stored.tracking_key == context.tracking_key:
            stored = request.stored.to_record(request.stored.timestamp)
    now = request.now_ms if request.now_ms is not None else int(time.time() * 1000)
    return ResumeInputs(
        context=context,
        stored=stored,
        session_active=request.session_active,
        now=now,
    )


def _describe_effect(effect: Effect) -> dict[str, Any]:
    return {"type": type(effect).__name__, **asdict(effect)}


def _describe(result: Transition) -> dict[str, Any]:
    state = result.state
    return {
        "phase": state.phase.value,
        "prompt": state.prompt.value if state.prompt is not None else None,
        "guard_armed": state.guard_armed,
        "effects": [_describe_effect(effect) for effect in result.effects],
    }


@app.get("/health")
def health() -> dict[str, Any]:
    return {
        "status": "ok",
        "version": REMEMBER_DEPENDENCY.version,
        "prompt_cooldown_ms": _config.prompt.cooldown_ms,
        "scroll_debounce_ms": _config.tracking.scroll_debounce_ms,
    }


@app.post("/resume/evaluate")
def evaluate(request: EvaluateRequest) -> dict[str, Any]:
    result = transition(MachineState(), Evaluate(_inputs(request)), config=_config.tracking)
    return _describe(result)


@app.post("/resume/respond")
def respond(request: RespondRequest) -> dict[str, Any]:
    evaluated = transition(MachineState(), Evaluate(_inputs(request)), config=_config.tracking)
    event = {"accept": Accept(), "decline": Decline(), "unload": Unload()}[request.action]
    try:
        result = transition(evaluated.state, event, config=_config.tracking)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return _describe(result)


@app.post("/dependencies")
def dependencies(request: DependencyRequest) -> dict[str, Any]:
    meta = inject_dependencies(request.meta, request.output_format)
    return {"injected": meta is not request.meta, "meta": meta}
