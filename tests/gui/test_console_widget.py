"""Widget tests for the log console."""

from bbox_annotator.gui.widgets.console_widget import ConsoleWidget


class TestConsoleWidget:
    def test_append_log_when_called_then_line_tagged_with_level(self, qtbot):
        console = ConsoleWidget()
        qtbot.addWidget(console)
        console.append_log("warning", "low disk")
        assert "[WARNING] low disk" in console.plain_text()

    def test_append_log_when_level_suppressed_then_dropped(self, qtbot):
        console = ConsoleWidget()
        qtbot.addWidget(console)
        console.suppressed_levels = {"info"}
        console.append_log("INFO", "chatter")
        assert console.plain_text() == ""

    def test_append_log_when_over_cap_then_oldest_trimmed(self, qtbot):
        console = ConsoleWidget(max_lines=5)
        qtbot.addWidget(console)
        for i in range(20):
            console.append_log("INFO", f"line {i}")
        text = console.plain_text()
        assert "line 19" in text
        assert "line 0\n" not in text
        assert console.text_edit.document().blockCount() <= 5

    def test_save_to_when_path_written_then_contains_log(self, qtbot, tmp_path):
        console = ConsoleWidget()
        qtbot.addWidget(console)
        console.append_log("ERROR", "boom")
        target = tmp_path / "log.txt"
        assert console.save_to(str(target)) is None
        assert "boom" in target.read_text(encoding="utf-8")

    def test_clear_when_called_then_empty(self, qtbot):
        console = ConsoleWidget()
        qtbot.addWidget(console)
        console.append_log("INFO", "x")
        console.clear()
        assert console.plain_text() == ""
