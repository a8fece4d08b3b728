"""Application entry point for the devcover desktop window."""
from __future__ import annotations

from pathlib import Path

from PySide6.QtWidgets import QApplication

from .gui.main_window import MainWindow


def main(project: Path | None = None) -> int:
    app = QApplication.instance() or QApplication([])
    window = MainWindow()
    if project is not None:
        window.open_project(project)
    window.show()
    return app.exec()


if __name__ == "__main__":
    main()
