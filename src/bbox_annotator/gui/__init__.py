"""PySide6 front end for the annotator."""
