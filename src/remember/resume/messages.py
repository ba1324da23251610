"""Prompt wording."""

from __future__ import annotations

_MINUTE_MS = 60_000
_HOUR_MS = 3_600_000
_DAY_MS = 86_400_000


def format_elapsed(timestamp: int, now: int) -> str:
    """Render how long ago ``timestamp`` was, e.g. ``"3 hours ago"``."""
    diff = now - timestamp
    minutes = diff // _MINUTE_MS
    hours = diff // _HOUR_MS
    days = diff // _DAY_MS

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return _plural(minutes, "minute")
    if hours < 24:
        return _plural(hours, "hour")
    return _plural(days, "day")


def _plural(count: int, unit: str) -> str:
    return f"{count} {unit}{'s' if count > 1 else ''} ago"


def different_chapter_message(timestamp: int, now: int) -> str:
    return (
        f"You were reading a different chapter {format_elapsed(timestamp, now)}. "
        "Would you like to return to where you were?"
    )


def same_page_message(timestamp: int, now: int) -> str:
    return (
        f"You visited this page {format_elapsed(timestamp, now)}. "
        "Would you like to return to where you were?"
    )


def presentation_message(timestamp: int, now: int) -> str:
    return (
        f"You left this presentation {format_elapsed(timestamp, now)}. "
        "Would you like to resume where you left off?"
    )
