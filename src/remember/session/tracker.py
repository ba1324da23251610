"""Tab-lifetime flag recording that the visitor already responded."""

from __future__ import annotations

import logging

from remember.config import StorageKeys
from remember.errors import StorageUnavailableError
from remember.host.interfaces import KeyValueStorage

logger = logging.getLogger(__name__)


class SessionTracker:
    """One-way latch kept in session storage; this class never clears it."""

    def __init__(self, storage: KeyValueStorage, keys: StorageKeys | None = None) -> None:
        self._storage = storage
        self._key = (keys or StorageKeys()).session_active

    def is_active(self) -> bool:
        try:
            return self._storage.get_item(self._key) == "true"
        except StorageUnavailableError:
            logger.debug("Session storage unavailable; treating session as new")
            return False

    def mark_active(self) -> None:
        try:
            self._storage.set_item(self._key, "true")
        except StorageUnavailableError:
            logger.debug("Session storage unavailable; session flag not recorded")
