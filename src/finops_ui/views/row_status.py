"""
Transient per-row feedback after a mutation finishes.

Once an edit completes, the row shows a "saved" glyph for ``status_seconds``.
A delete goes through three steps:

1. the row keeps rendering from a ghost copy with a "deleted" glyph
2. it is flagged ``removing`` for ``fade_seconds`` so the table can fade it out
3. it is dropped

All of this is display state only. The record has already left the
collection slice when the delete succeeded.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable

from finops_ui import config

SAVED = "saved"
DELETED = "deleted"


@dataclass(slots=True)
class _Entry:
    kind: str
    started: float
    index: int = 0
    record: dict[str, Any] | None = None


class RowStatusTracker:
    """
    Ephemeral row states keyed by record id, expired against ``clock``.

    Attributes:
        status_seconds: How long the saved/deleted glyph shows.
        fade_seconds: How long a deleted row stays in the fade-out state.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        status_seconds: float = config.ROW_STATUS_SECONDS,
        fade_seconds: float = config.ROW_FADE_SECONDS,
    ) -> None:
        self.clock = clock
        self.status_seconds = status_seconds
        self.fade_seconds = fade_seconds
        self._entries: dict[int, _Entry] = {}

    @property
    def active(self) -> bool:
        return bool(self._entries)

    def mark_saved(self, record_id: int) -> None:
        self._entries[record_id] = _Entry(SAVED, self.clock())

    def mark_deleted(self, record_id: int, index: int, record: dict[str, Any]) -> None:
        """Keep ``record`` on screen at ``index`` while it plays the delete feedback."""
        self._entries[record_id] = _Entry(DELETED, self.clock(), index=index, record=dict(record))

    def status(self, record_id: int) -> str | None:
        """Return ``"saved"``/``"deleted"`` while the glyph is showing."""
        entry = self._entries.get(record_id)
        if entry is None or self._elapsed(entry) >= self.status_seconds:
            return None
        return entry.kind

    def is_removing(self, record_id: int) -> bool:
        entry = self._entries.get(record_id)
        if entry is None or entry.kind != DELETED:
            return False
        return self.status_seconds <= self._elapsed(entry) < self.status_seconds + self.fade_seconds

    def ghosts(self) -> list[tuple[int, dict[str, Any]]]:
        """Deleted rows still on screen, as ``(index, record)`` ordered by index."""
        return sorted(
            ((e.index, e.record) for e in self._entries.values() if e.kind == DELETED and e.record),
            key=lambda item: item[0],
        )

    def expire(self) -> list[int]:
        """
        Drop finished entries.

        Returns:
            Ids of deleted rows whose fade-out just completed.
        """
        removed: list[int] = []
        for record_id, entry in list(self._entries.items()):
            lifetime = self.status_seconds
            if entry.kind == DELETED:
                lifetime += self.fade_seconds
            if self._elapsed(entry) >= lifetime:
                del self._entries[record_id]
                if entry.kind == DELETED:
                    removed.append(record_id)
        return removed

    def clear(self) -> None:
        self._entries.clear()

    def _elapsed(self, entry: _Entry) -> float:
        return self.clock() - entry.started
