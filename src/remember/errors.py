"""Exceptions raised by storage backends."""

from __future__ import annotations


class StorageUnavailableError(RuntimeError):
    """Raised by a storage backend that is disabled, full, or unreachable."""
