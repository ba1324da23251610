import pytest

from remember.resume.messages import format_elapsed, same_page_message

NOW = 1_700_000_000_000


@pytest.mark.parametrize(
    ("elapsed_ms", "expected"),
    [
        (0, "just now"),
        (59_999, "just now"),
        (60_000, "1 minute ago"),
        (5 * 60_000, "5 minutes ago"),
        (3_600_000, "1 hour ago"),
        (23 * 3_600_000, "23 hours ago"),
        (86_400_000, "1 day ago"),
        (9 * 86_400_000, "9 days ago"),
    ],
)
def test_format_elapsed(elapsed_ms: int, expected: str) -> None:
    assert format_elapsed(NOW - elapsed_ms, NOW) == expected


def test_same_page_message_embeds_elapsed_time() -> None:
    assert same_page_message(NOW - 120_000, NOW) == (
        "You visited this page 2 minutes ago. Would you like to return to where you were?"
    )
