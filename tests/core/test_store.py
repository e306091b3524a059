"""
Unit Tests for SelectionStore.
"""

from bbox_annotator.core.models import Point, Selection
from bbox_annotator.core.store import SelectionStore


def box(id, locked=False):
    return Selection(id, Point(0, 0), Point(10, 10), locked)


class TestSelectionStore:
    """Tests for committed state and listeners."""

    def test_commit_when_changed_then_notifies_listeners(self):
        store = SelectionStore()
        seen = []
        store.add_listener(seen.append)

        assert store.commit([box("a")])

        assert store.selections == (box("a"),)
        assert seen == [(box("a"),)]

    def test_commit_when_unchanged_then_no_notification(self):
        store = SelectionStore()
        store.commit([box("a")])
        seen = []
        store.add_listener(seen.append)

        assert not store.commit([box("a")])
        assert seen == []

    def test_undo_redo_when_available_then_restores_and_notifies(self):
        store = SelectionStore()
        store.commit([box("a")])
        seen = []
        store.add_listener(seen.append)

        assert store.undo()
        assert store.selections == ()
        assert store.can_redo
        assert store.redo()
        assert store.selections == (box("a"),)
        assert len(seen) == 2

    def test_undo_when_nothing_to_undo_then_false(self):
        store = SelectionStore()
        assert not store.undo()
        assert not store.redo()

    def test_toggle_lock_when_called_then_undoable(self):
        store = SelectionStore()
        store.commit([box("a"), box("b")])

        assert store.toggle_lock("a")
        assert store.get("a").locked
        assert not store.get("b").locked

        store.undo()
        assert not store.get("a").locked

    def test_delete_when_locked_then_still_removed(self):
        """Deleting ignores the lock state."""
        store = SelectionStore()
        store.commit([box("a", locked=True), box("b")])

        assert store.delete("a")
        assert store.selections == (box("b"),)

    def test_delete_when_unknown_id_then_false(self):
        store = SelectionStore()
        store.commit([box("a")])
        assert not store.delete("missing")

    def test_clear_when_called_then_undoable(self):
        store = SelectionStore()
        store.commit([box("a"), box("b")])

        assert store.clear()
        assert store.selections == ()
        store.undo()
        assert len(store.selections) == 2

    def test_reset_when_called_then_history_dropped_and_notified(self):
        store = SelectionStore()
        store.commit([box("a")])
        seen = []
        store.add_listener(seen.append)

        store.reset()

        assert store.selections == ()
        assert not store.can_undo
        assert seen == [()]

    def test_remove_listener_when_removed_then_not_called(self):
        store = SelectionStore()
        seen = []
        store.add_listener(seen.append)
        store.remove_listener(seen.append)
        store.commit([box("a")])
        assert seen == []
