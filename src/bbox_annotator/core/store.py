"""
Module: core.store

Purpose:
    The authoritative list of committed selections. Every change goes
    through one of this class's methods, which route it into the history,
    so undo/redo and the live view never disagree about what is current.

Key Classes:
    - SelectionStore: Commit, undo/redo, reset and per-box commands

Dependencies:
    - .history.SelectionHistory

Used By:
    - core.gesture.GestureController (commit on gesture end)
    - gui.main_window.MainWindow (undo/redo, lock, delete, clear, reset)
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, List, Optional

from .history import SelectionHistory, Snapshot
from .models import Selection

logger = logging.getLogger(__name__)

StoreListener = Callable[[Snapshot], None]


class SelectionStore:
    """
    Single-writer store of committed selections backed by a history.

    Listeners registered with ``add_listener`` are called with the new
    snapshot after every change (commit, undo, redo, reset).
    """

    def __init__(self) -> None:
        self._history = SelectionHistory()
        self._listeners: List[StoreListener] = []

    # ─────────────────────────────────────────────────────────────────────────
    # Queries
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def selections(self) -> Snapshot:
        return self._history.current

    @property
    def history(self) -> SelectionHistory:
        return self._history

    @property
    def can_undo(self) -> bool:
        return self._history.can_undo

    @property
    def can_redo(self) -> bool:
        return self._history.can_redo

    def get(self, selection_id: str) -> Optional[Selection]:
        for selection in self.selections:
            if selection.id == selection_id:
                return selection
        return None

    # ─────────────────────────────────────────────────────────────────────────
    # Writes
    # ─────────────────────────────────────────────────────────────────────────

    def commit(self, selections: Iterable[Selection]) -> bool:
        """
        Make ``selections`` the current list and record it for undo.

        Returns:
            True if the list differed from the current one
        """
        changed = self._history.push(selections)
        if changed:
            logger.debug("Committed %d selection(s)", len(self.selections))
            self._notify()
        return changed

    def undo(self) -> bool:
        changed = self._history.undo()
        if changed:
            self._notify()
        return changed

    def redo(self) -> bool:
        changed = self._history.redo()
        if changed:
            self._notify()
        return changed

    def reset(self) -> None:
        """Forget all selections and history (new image or image removed)."""
        self._history.reset()
        logger.debug("Selection store reset")
        self._notify()

    def toggle_lock(self, selection_id: str) -> bool:
        """Flip the lock state of one box as an undoable commit."""
        return self.commit(
            s.with_locked(not s.locked) if s.id == selection_id else s
            for s in self.selections
        )

    def delete(self, selection_id: str) -> bool:
        """Remove one box, locked or not, as an undoable commit."""
        return self.commit(s for s in self.selections if s.id != selection_id)

    def clear(self) -> bool:
        """Remove every box as a single undoable commit."""
        return self.commit(())

    # ─────────────────────────────────────────────────────────────────────────
    # Listeners
    # ─────────────────────────────────────────────────────────────────────────

    def add_listener(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        snapshot = self.selections
        for listener in list(self._listeners):
            listener(snapshot)
