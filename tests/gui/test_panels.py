"""Widget tests for the selection details and export panels."""

from PySide6.QtWidgets import QApplication

from bbox_annotator.core.models import PixelBox
from bbox_annotator.gui.widgets.export_panel import ExportPanel
from bbox_annotator.gui.widgets.selection_panel import SelectionPanel


class TestSelectionPanel:
    def test_set_boxes_when_one_empty_then_row_skipped(self, qtbot):
        panel = SelectionPanel()
        qtbot.addWidget(panel)

        panel.set_boxes([
            PixelBox("a", False, 10, 20, 30, 40),
            PixelBox("b", False, 5, 5, 0, 10),
            PixelBox("c", True, 1, 2, 3, 4),
        ])

        assert [row.title.text() for row in panel.rows] == ["Box 1", "Box 3"]
        assert panel.rows[1].lock_btn.text() == "Unlock"
        assert panel.empty_label.isHidden()

    def test_set_boxes_when_empty_then_placeholder_shown(self, qtbot):
        panel = SelectionPanel()
        qtbot.addWidget(panel)
        panel.set_boxes([PixelBox("a", False, 1, 1, 5, 5)])
        panel.set_boxes([])
        assert panel.rows == []
        assert not panel.empty_label.isHidden()

    def test_lock_button_when_clicked_then_emits_id(self, qtbot):
        panel = SelectionPanel()
        qtbot.addWidget(panel)
        panel.set_boxes([PixelBox("a", False, 10, 20, 30, 40)])

        with qtbot.waitSignal(panel.lockToggled, timeout=1000) as blocker:
            panel.rows[0].lock_btn.click()
        assert blocker.args == ["a"]

    def test_delete_button_when_clicked_then_emits_id(self, qtbot):
        panel = SelectionPanel()
        qtbot.addWidget(panel)
        panel.set_boxes([PixelBox("a", False, 10, 20, 30, 40)])

        with qtbot.waitSignal(panel.deleteRequested, timeout=1000) as blocker:
            panel.rows[0].delete_btn.click()
        assert blocker.args == ["a"]


class TestExportPanel:
    def test_set_text_when_none_then_buttons_disabled(self, qtbot):
        panel = ExportPanel()
        qtbot.addWidget(panel)
        panel.set_text(None)
        assert not panel.copy_btn.isEnabled()
        assert not panel.save_btn.isEnabled()

    def test_set_text_when_text_then_shown(self, qtbot):
        panel = ExportPanel()
        qtbot.addWidget(panel)
        panel.set_text("0 0.200000 0.200000 0.200000 0.200000")
        assert panel.text_view.toPlainText() == "0 0.200000 0.200000 0.200000 0.200000"
        assert panel.copy_btn.isEnabled()

    def test_copy_when_text_then_clipboard_set(self, qtbot):
        panel = ExportPanel()
        qtbot.addWidget(panel)
        panel.set_text("0 0.5 0.5 1 1")
        panel.copy_to_clipboard()
        assert QApplication.clipboard().text() == "0 0.5 0.5 1 1"
        assert panel.copy_btn.text() == "Copied!"

    def test_save_button_when_clicked_then_emits(self, qtbot):
        panel = ExportPanel()
        qtbot.addWidget(panel)
        panel.set_text("0 0.5 0.5 1 1")
        with qtbot.waitSignal(panel.saveRequested, timeout=1000):
            panel.save_btn.click()
