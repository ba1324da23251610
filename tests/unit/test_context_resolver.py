import pytest

from remember.context.resolver import book_root, is_book_context, resolve_context, tracking_key
from remember.host.memory import InMemoryPage
from remember.types import DocumentKind


def test_book_requires_both_navigation_and_sidebar() -> None:
    assert is_book_context(InMemoryPage(page_navigation=True, chapter_sidebar=True))
    assert not is_book_context(InMemoryPage(page_navigation=True))
    assert not is_book_context(InMemoryPage(chapter_sidebar=True))


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/book/ch1.html", "/book"),
        ("/docs/guide/intro.html", "/docs/guide"),
        ("/index.html", "/"),
        ("/", "/"),
    ],
)
def test_book_root_drops_chapter_file(path: str, expected: str) -> None:
    assert book_root(path) == expected


def test_all_chapters_share_one_tracking_key() -> None:
    first = InMemoryPage(path="/book/ch1.html", page_navigation=True, chapter_sidebar=True)
    second = InMemoryPage(path="/book/ch2.html", page_navigation=True, chapter_sidebar=True)

    assert tracking_key(first) == tracking_key(second) == "/book"


def test_standalone_page_keyed_by_full_path() -> None:
    context = resolve_context(InMemoryPage(path="/notes/post.html", page_navigation=True))

    assert context.kind is DocumentKind.PAGE
    assert context.tracking_key == "/notes/post.html"
    assert context.current_path == "/notes/post.html"


def test_presentation_detected_before_book_markers() -> None:
    page = InMemoryPage(
        path="/talks/deck.html",
        page_navigation=True,
        chapter_sidebar=True,
        presentation_root=True,
    )

    context = resolve_context(page)

    assert context.is_presentation
    assert context.tracking_key == "/talks/deck.html"


def test_context_is_recomputed_for_each_load() -> None:
    page = InMemoryPage(path="/a.html")
    first = resolve_context(page)
    page.path = "/b.html"
    second = resolve_context(page)

    assert first.tracking_key == "/a.html"
    assert second.tracking_key == "/b.html"


@pytest.mark.parametrize(
    "page",
    [
        InMemoryPage(path="/book/ch3.html", page_navigation=True, chapter_sidebar=True),
        InMemoryPage(path="/notes/post.html"),
    ],
)
def test_resolved_key_matches_tracking_key(page: InMemoryPage) -> None:
    assert resolve_context(page).tracking_key == tracking_key(page)
