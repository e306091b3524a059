"""
Unit Tests for SelectionHistory.
"""

from bbox_annotator.core.history import SelectionHistory
from bbox_annotator.core.models import Point, Selection


def box(id, x=0):
    return Selection(id, Point(x, 0), Point(x + 10, 10))


class TestSelectionHistory:
    """Tests for snapshot undo/redo."""

    def test_init_when_default_then_single_empty_entry(self):
        history = SelectionHistory()
        assert history.current == ()
        assert len(history) == 1
        assert history.cursor == 0
        assert not history.can_undo
        assert not history.can_redo

    def test_push_when_new_snapshot_then_becomes_current(self):
        history = SelectionHistory()
        assert history.push([box("a")])
        assert history.current == (box("a"),)
        assert history.cursor == 1

    def test_push_when_equal_to_current_then_no_op(self):
        """Committing an unchanged list does not add an undo step."""
        history = SelectionHistory()
        history.push([box("a")])
        assert not history.push([box("a")])
        assert len(history) == 2

    def test_undo_redo_when_round_trip_then_restores_snapshots(self):
        history = SelectionHistory()
        history.push([box("a")])
        history.push([box("a"), box("b", 20)])

        assert history.undo()
        assert history.current == (box("a"),)
        assert history.undo()
        assert history.current == ()
        assert not history.undo()

        assert history.redo()
        assert history.redo()
        assert history.current == (box("a"), box("b", 20))
        assert not history.redo()

    def test_push_after_undo_then_redo_branch_discarded(self):
        history = SelectionHistory()
        history.push([box("a")])
        history.push([box("b")])
        history.undo()

        history.push([box("c")])

        assert not history.can_redo
        assert history.current == (box("c"),)
        assert len(history) == 3

    def test_reset_when_called_then_single_entry(self):
        history = SelectionHistory()
        history.push([box("a")])
        history.reset()
        assert len(history) == 1
        assert history.current == ()
        assert history.cursor == 0
