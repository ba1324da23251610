"""Shared domain models."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DocumentKind(str, Enum):
    """How the current document is laid out."""

    PAGE = "page"
    BOOK = "book"
    PRESENTATION = "presentation"


@dataclass(frozen=True, slots=True)
class SlideIndices:
    """Horizontal/vertical/fragment position within a presentation."""

    h: int = 0
    v: int = 0
    f: int = 0


@dataclass(frozen=True, slots=True)
class DocumentContext:
    """Resolved once per load and passed to every component."""

    kind: DocumentKind
    tracking_key: str
    current_path: str

    @property
    def is_book(self) -> bool:
        return self.kind is DocumentKind.BOOK

    @property
    def is_presentation(self) -> bool:
        return self.kind is DocumentKind.PRESENTATION


@dataclass(frozen=True, slots=True)
class PositionRecord:
    """The single remembered position kept in durable storage."""

    tracking_key: str
    source_url: str
    scroll_y: float = 0.0
    hash: str = ""
    slide_indices: SlideIndices | None = None
    timestamp: int = 0

    def target_url(self) -> str:
        """Page path plus anchor, used to navigate back to another chapter."""
        return self.source_url + (self.hash or "")
