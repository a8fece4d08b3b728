"""Main window for the devcover GUI."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List

from PIL import Image
from PySide6.QtCore import QSettings, Qt
from PySide6.QtGui import QAction, QKeySequence, QPixmap
from PySide6.QtWidgets import (
    QFileDialog,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QMenu,
    QMenuBar,
    QMessageBox,
    QPushButton,
    QSplitter,
    QStackedWidget,
    QTreeWidget,
    QTreeWidgetItem,
    QVBoxLayout,
    QWidget,
)

from ..core.errors import DevCoverError
from ..core.processor import IconSetManager

logger = logging.getLogger(__name__)

_PATH_ROLE = Qt.ItemDataRole.UserRole


class MainWindow(QMainWindow):
    """Shows a project's icon slots and exposes the overwrite/revert triggers."""

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle("devcover - Development Icon Cover")
        self.resize(1024, 680)

        self._manager: IconSetManager | None = None
        self._project_path: Path | None = None
        self._settings_store = QSettings("devcover", "devcover")
        self._recent_projects: List[str] = []
        self._recent_menu: QMenu | None = None
        self._recent_list: QListWidget | None = None

        self._icon_tree = QTreeWidget()
        self._icon_tree.setHeaderHidden(True)
        self._icon_tree.currentItemChanged.connect(self._handle_tree_selection)
        self._preview_label = QLabel()
        self._preview_caption = QLabel()
        self._preview_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_caption.setWordWrap(True)

        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_placeholder_view())
        self._stack.addWidget(self._build_project_view())
        self.setCentralWidget(self._stack)

        self._load_recent_projects()
        self._create_actions()
        self._create_menus()
        self._refresh_recent_ui()

    # ------------------------------------------------------------------
    # UI construction helpers
    def _build_placeholder_view(self) -> QWidget:
        widget = QWidget()
        layout = QVBoxLayout(widget)
        layout.addStretch()
        title = QLabel("devcover")
        title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        title.setStyleSheet("font-size: 24px; font-weight: bold;")
        subtitle = QLabel("Open a project file to cover its icons for a development build.")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignCenter)
        subtitle.setWordWrap(True)
        layout.addWidget(title)
        layout.addWidget(subtitle)

        button_row = QHBoxLayout()
        open_button = QPushButton("Open project…")
        open_button.clicked.connect(self._choose_project)
        button_row.addStretch()
        button_row.addWidget(open_button)
        button_row.addStretch()
        layout.addLayout(button_row)
        layout.addSpacing(24)

        recent_label = QLabel("Recent projects")
        recent_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        recent_label.setStyleSheet("font-weight: bold;")
        layout.addWidget(recent_label)

        self._recent_list = QListWidget()
        self._recent_list.itemActivated.connect(self._handle_recent_item_activation)
        layout.addWidget(self._recent_list)
        layout.addStretch()
        return widget

    def _build_project_view(self) -> QWidget:
        splitter = QSplitter()
        tree_panel = QWidget()
        tree_layout = QVBoxLayout(tree_panel)
        header = QLabel("Icon slots")
        header.setStyleSheet("font-weight: bold;")
        tree_layout.addWidget(header)
        tree_layout.addWidget(self._icon_tree)
        splitter.addWidget(tree_panel)

        preview = QGroupBox("Preview")
        preview_layout = QVBoxLayout(preview)
        self._preview_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._preview_label.setMinimumSize(320, 320)
        preview_layout.addStretch()
        preview_layout.addWidget(self._preview_label, alignment=Qt.AlignmentFlag.AlignCenter)
        preview_layout.addWidget(self._preview_caption)
        preview_layout.addStretch()
        splitter.addWidget(preview)
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)
        return splitter

    def _create_actions(self) -> None:
        self._open_action = QAction("Open Project…", self)
        self._open_action.setShortcut(QKeySequence.StandardKey.Open)
        self._open_action.triggered.connect(self._choose_project)

        self._quit_action = QAction("Quit", self)
        self._quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        self._quit_action.triggered.connect(self.close)

        self._overwrite_action = QAction("Overwrite Icons", self)
        self._overwrite_action.triggered.connect(self._overwrite_icons)

        self._revert_action = QAction("Revert Icons", self)
        self._revert_action.triggered.connect(self._revert_icons)

    def _create_menus(self) -> None:
        menubar: QMenuBar = self.menuBar()
        file_menu = menubar.addMenu("&File")
        file_menu.addAction(self._open_action)
        self._recent_menu = file_menu.addMenu("Open Recent")
        file_menu.addSeparator()
        file_menu.addAction(self._quit_action)

        build_menu = menubar.addMenu("&Build")
        build_menu.addAction(self._overwrite_action)
        build_menu.addAction(self._revert_action)
        self._update_action_states()

    def _update_action_states(self) -> None:
        loaded = self._manager is not None
        self._overwrite_action.setEnabled(loaded)
        self._revert_action.setEnabled(loaded and self._manager.is_overwritten)

    # ------------------------------------------------------------------
    # Recent project helpers
    def _load_recent_projects(self) -> None:
        stored = self._settings_store.value("recentProjects", [])
        if isinstance(stored, str):
            entries = [stored]
        elif isinstance(stored, (list, tuple)):
            entries = [str(item) for item in stored]
        else:
            entries = []
        self._recent_projects = [entry for entry in entries if entry][:10]

    def _refresh_recent_ui(self) -> None:
        if self._recent_list is not None:
            self._recent_list.clear()
            for path in self._recent_projects:
                item = QListWidgetItem(path)
                item.setData(_PATH_ROLE, path)
                self._recent_list.addItem(item)
        if self._recent_menu is not None:
            self._recent_menu.clear()
            self._recent_menu.setEnabled(bool(self._recent_projects))
            for path in self._recent_projects:
                action = self._recent_menu.addAction(path)
                action.triggered.connect(lambda _checked=False, p=path: self.open_project(Path(p)))

    def _record_recent_project(self, path: Path) -> None:
        entry = str(path)
        if entry in self._recent_projects:
            self._recent_projects.remove(entry)
        self._recent_projects.insert(0, entry)
        self._recent_projects = self._recent_projects[:10]
        self._settings_store.setValue("recentProjects", self._recent_projects)
        self._refresh_recent_ui()

    def _handle_recent_item_activation(self, item: QListWidgetItem | None) -> None:
        if item is None:
            return
        self.open_project(Path(item.data(_PATH_ROLE)))

    # ------------------------------------------------------------------
    # Project handling
    def _choose_project(self) -> None:
        selected, _ = QFileDialog.getOpenFileName(
            self, "Open devcover project", "", "Project files (*.yaml *.yml)"
        )
        if selected:
            self.open_project(Path(selected))

    def open_project(self, path: Path) -> None:
        if self._manager is not None and self._manager.is_overwritten:
            QMessageBox.warning(
                self,
                "Icons overwritten",
                "Revert the icons of the current project before opening another one.",
            )
            return
        if not path.exists():
            QMessageBox.warning(self, "Missing project", f"The project '{path}' does not exist.")
            return
        try:
            manager = IconSetManager.for_project(path)
        except DevCoverError as exc:
            QMessageBox.critical(self, "Unable to open project", exc.message)
            return
        self._manager = manager
        self._project_path = path
        self.setWindowTitle(f"devcover - {path.name}")
        self._record_recent_project(path)
        self._stack.setCurrentIndex(1)
        self._refresh_icon_tree()
        self._update_action_states()
        self.statusBar().showMessage(f"Loaded {path} (target: {manager.build_target})", 5000)

    def _refresh_icon_tree(self) -> None:
        self._icon_tree.clear()
        self._preview_label.clear()
        self._preview_caption.clear()
        if self._manager is None:
            return
        store = self._manager.store

        default_node = QTreeWidgetItem(["Default icons"])
        self._icon_tree.addTopLevelItem(default_node)
        self._add_image_items(default_node, store.get_default_icons())

        for kind in store.get_supported_icon_kinds():
            kind_node = QTreeWidgetItem([f"{self._manager.build_target} / {kind}"])
            self._icon_tree.addTopLevelItem(kind_node)
            for index, slot in enumerate(store.get_platform_icon_slots(kind)):
                size = getattr(slot, "size", None)
                label = f"Slot {index}" + (f" ({size}px)" if size else "")
                slot_node = QTreeWidgetItem([label])
                kind_node.addChild(slot_node)
                self._add_image_items(slot_node, slot.get_images())
        self._icon_tree.expandAll()

    def _add_image_items(self, parent: QTreeWidgetItem, images: List[Image.Image | None]) -> None:
        for index, image in enumerate(images):
            filename = getattr(image, "filename", "") if image is not None else ""
            if image is None:
                text = f"{index}: (empty)"
            else:
                text = f"{index}: {Path(filename).name or 'unsaved'} {image.size[0]}x{image.size[1]}"
            item = QTreeWidgetItem([text])
            item.setData(0, _PATH_ROLE, filename)
            parent.addChild(item)

    def _handle_tree_selection(self, current: QTreeWidgetItem | None, previous: QTreeWidgetItem | None) -> None:  # noqa: ARG002 - unused
        filename = current.data(0, _PATH_ROLE) if current is not None else None
        if not filename:
            self._preview_label.clear()
            self._preview_caption.clear()
            return
        pixmap = QPixmap(filename)
        if pixmap.isNull():
            self._preview_label.setText("Preview unavailable")
        else:
            self._preview_label.setPixmap(
                pixmap.scaled(
                    320,
                    320,
                    Qt.AspectRatioMode.KeepAspectRatio,
                    Qt.TransformationMode.SmoothTransformation,
                )
            )
        self._preview_caption.setText(filename)

    # ------------------------------------------------------------------
    # Build actions
    def _overwrite_icons(self) -> None:
        if self._manager is None:
            return
        if self._manager.is_overwritten:
            answer = QMessageBox.question(
                self,
                "Icons already overwritten",
                "The icons are already covered. Overwriting again means a revert restores the "
                "covered icons, not the originals. Continue?",
            )
            if answer != QMessageBox.StandardButton.Yes:
                return
        self._run_build_action(self._manager.run_overwrite, "Icons overwritten")

    def _revert_icons(self) -> None:
        if self._manager is None:
            return
        self._run_build_action(self._manager.run_revert, "Icons reverted")

    def _run_build_action(self, action, message: str) -> None:
        try:
            action()
        except DevCoverError as exc:
            logger.error("%s", exc.message)
            QMessageBox.critical(self, "Icon processing failed", exc.message)
        else:
            self.statusBar().showMessage(message, 5000)
        self._refresh_icon_tree()
        self._update_action_states()

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        if self._manager is not None and self._manager.is_overwritten:
            answer = QMessageBox.question(
                self,
                "Revert icons?",
                "The project icons are still covered. Revert them before quitting?",
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No | QMessageBox.StandardButton.Cancel,
            )
            if answer == QMessageBox.StandardButton.Cancel:
                event.ignore()
                return
            if answer == QMessageBox.StandardButton.Yes:
                self._run_build_action(self._manager.run_revert, "Icons reverted")
        super().closeEvent(event)
