"""
Module: core.history

Purpose:
    Undo/redo over committed selection lists. Each entry is an immutable
    snapshot (a tuple of frozen Selections) so entries can be compared by
    value and never change after being pushed.

Key Classes:
    - SelectionHistory: Snapshot stack with a cursor

Used By:
    - core.store.SelectionStore
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from .models import Selection

logger = logging.getLogger(__name__)

Snapshot = Tuple[Selection, ...]


class SelectionHistory:
    """
    Ordered snapshots of committed selection lists plus a cursor.

    Invariants:
        - 0 <= cursor < length
        - the snapshot at cursor is the current store content

    Example:
        >>> history = SelectionHistory()
        >>> box = Selection("a", Point(0, 0), Point(10, 10))
        >>> history.push([box])
        True
        >>> history.undo()
        True
        >>> history.current
        ()
    """

    def __init__(self, initial: Iterable[Selection] = ()) -> None:
        self._entries: list[Snapshot] = [tuple(initial)]
        self._cursor = 0

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def current(self) -> Snapshot:
        return self._entries[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    # ─────────────────────────────────────────────────────────────────────────
    # Mutation
    # ─────────────────────────────────────────────────────────────────────────

    def push(self, snapshot: Iterable[Selection]) -> bool:
        """
        Record a committed selection list.

        Pushing a snapshot equal to the current entry is a no-op, so a click
        that produced nothing does not leave an empty undo step. Otherwise
        the redo branch is discarded and the snapshot becomes current.

        Returns:
            True if a new entry was added
        """
        entry = tuple(snapshot)
        if entry == self.current:
            return False

        del self._entries[self._cursor + 1:]
        self._entries.append(entry)
        self._cursor = len(self._entries) - 1
        logger.debug("History push: %d entries, cursor=%d", len(self._entries), self._cursor)
        return True

    def undo(self) -> bool:
        """Step back one entry. Returns False at the oldest entry."""
        if not self.can_undo:
            return False
        self._cursor -= 1
        logger.debug("History undo: cursor=%d", self._cursor)
        return True

    def redo(self) -> bool:
        """Step forward one entry. Returns False at the newest entry."""
        if not self.can_redo:
            return False
        self._cursor += 1
        logger.debug("History redo: cursor=%d", self._cursor)
        return True

    def reset(self, snapshot: Iterable[Selection] = ()) -> None:
        """Drop every entry and start over from ``snapshot`` at cursor 0."""
        self._entries = [tuple(snapshot)]
        self._cursor = 0
        logger.debug("History reset")
