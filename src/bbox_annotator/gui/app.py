"""
Entry point for the Bounding Box Annotator GUI.
"""
import logging
import sys

from PySide6.QtWidgets import QApplication

from bbox_annotator.gui.main_window import MainWindow
from bbox_annotator.gui.models.settings import SettingsStore
from bbox_annotator.gui.styles.theme import GLOBAL_STYLESHEET
from bbox_annotator.gui.utils.paths import APP_NAME, get_settings_path


def run():
    """
    Main entry point for the GUI application.
    """
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    app.setApplicationName(APP_NAME)
    app.setApplicationDisplayName(APP_NAME)
    app.setOrganizationName(APP_NAME)
    app.setStyleSheet(GLOBAL_STYLESHEET)

    settings = SettingsStore(get_settings_path())
    window = MainWindow(settings)
    window.show()

    # Optional image path on the command line
    if len(sys.argv) > 1:
        window.open_image(sys.argv[1])

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
