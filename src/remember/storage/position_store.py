"""Durable single-slot persistence of the last reading position."""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict, Field

from remember.config import StorageKeys
from remember.errors import StorageUnavailableError
from remember.host.interfaces import Clock, KeyValueStorage
from remember.types import DocumentContext, PositionRecord, SlideIndices

logger = logging.getLogger(__name__)


class SlidePayload(BaseModel):
    h: int = 0
    v: int = 0
    f: int = 0


class StoredPosition(BaseModel):
    """JSON schema of the position entry (camelCase on the wire)."""

    model_config = ConfigDict(populate_by_name=True)

    tracking_key: str = Field(alias="trackingKey")
    source_url: str = Field(default="", alias="sourceUrl")
    scroll_y: float = Field(default=0.0, ge=0.0, alias="scrollY")
    hash: str = ""
    slide_indices: SlidePayload | None = Field(default=None, alias="slideIndices")

    @classmethod
    def from_record(cls, record: PositionRecord) -> StoredPosition:
        slides = record.slide_indices
        return cls(
            tracking_key=record.tracking_key,
            source_url=record.source_url,
            scroll_y=record.scroll_y,
            hash=record.hash,
            slide_indices=(
                SlidePayload(h=slides.h, v=slides.v, f=slides.f) if slides is not None else None
            ),
        )

    def to_record(self, timestamp: int) -> PositionRecord:
        slides = self.slide_indices
        return PositionRecord(
            tracking_key=self.tracking_key,
            source_url=self.source_url,
            scroll_y=self.scroll_y,
            hash=self.hash,
            slide_indices=(
                SlideIndices(h=slides.h, v=slides.v, f=slides.f) if slides is not None else None
            ),
            timestamp=timestamp,
        )


class PositionStore:
    """Reads and writes the one remembered position.

    The position JSON and its timestamp live in two entries that are written
    together. Any storage failure is logged and swallowed: the caller sees
    "nothing remembered" instead of an exception.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        clock: Clock,
        keys: StorageKeys | None = None,
    ) -> None:
        self._storage = storage
        self._clock = clock
        self.keys = keys or StorageKeys()

    def save(
        self,
        context: DocumentContext,
        *,
        scroll_y: float = 0.0,
        hash: str = "",
        slide_indices: SlideIndices | None = None,
    ) -> PositionRecord | None:
        record = PositionRecord(
            tracking_key=context.tracking_key,
            source_url=context.current_path,
            scroll_y=max(0.0, float(scroll_y or 0.0)),
            hash=hash or "",
            slide_indices=slide_indices,
            timestamp=int(self._clock()),
        )
        payload = StoredPosition.from_record(record).model_dump_json(by_alias=True)
        try:
            self._storage.set_item(self.keys.position, payload)
            try:
                self._storage.set_item(self.keys.timestamp, str(record.timestamp))
            except StorageUnavailableError:
                # Never leave a position without its timestamp.
                self._storage.remove_item(self.keys.position)
                raise
        except StorageUnavailableError:
            logger.error("Failed to save position for %s", context.tracking_key, exc_info=True)
            return None
        return record

    def load(self, context: DocumentContext) -> PositionRecord | None:
        try:
            data = self._storage.get_item(self.keys.position)
            raw_timestamp = self._storage.get_item(self.keys.timestamp)
            if not data or not raw_timestamp:
                return None
            stored = StoredPosition.model_validate_json(data)
            timestamp = int(raw_timestamp)
        except (StorageUnavailableError, ValueError):
            logger.error("Failed to retrieve stored position", exc_info=True)
            return None

        if stored.tracking_key != context.tracking_key:
            logger.debug(
                "Ignoring position for %s while on %s",
                stored.tracking_key,
                context.tracking_key,
            )
            return None
        return stored.to_record(timestamp)

    def clear(self) -> None:
        try:
            self._storage.remove_item(self.keys.position)
            self._storage.remove_item(self.keys.timestamp)
        except StorageUnavailableError:
            logger.error("Failed to clear stored position", exc_info=True)
