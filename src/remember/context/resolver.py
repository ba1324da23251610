"""Document classification and tracking-key derivation."""

from __future__ import annotations

from remember.host.interfaces import Page
from remember.types import DocumentContext, DocumentKind


def is_book_context(page: Page) -> bool:
    """A book renders both page navigation and a chapter sidebar."""
    return page.has_page_navigation() and page.has_chapter_sidebar()


def book_root(path: str) -> str:
    """Drop the chapter file from ``path``; all chapters share the result."""
    parts = path.split("/")
    parts.pop()
    return "/".join(parts) or "/"


def tracking_key(page: Page) -> str:
    if is_book_context(page):
        return book_root(page.path)
    return page.path


def resolve_context(page: Page) -> DocumentContext:
    """Classify the loaded document and compute its tracking key.

    Call once per load and pass the result along. A reload gets a fresh host
    page and therefore a fresh context.
    """

    path = page.path
    if page.has_presentation_root():
        kind = DocumentKind.PRESENTATION
    elif is_book_context(page):
        kind = DocumentKind.BOOK
    else:
        kind = DocumentKind.PAGE

    key = path if kind is DocumentKind.PRESENTATION else tracking_key(page)
    return DocumentContext(kind=kind, tracking_key=key, current_path=path)
