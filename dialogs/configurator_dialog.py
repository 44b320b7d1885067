# dialogs/configurator_dialog.py
import os
import logging
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLineEdit, QPushButton, QGroupBox,
    QFileDialog, QStyle, QApplication, QMessageBox
)
from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QIcon

import config
from utils import resource_path, normalize_dir


def pick_directory(initial_path, parent=None):
    """Ask the user for a directory. Returns the chosen path, or None if cancelled."""
    start_dir = initial_path if initial_path and os.path.isdir(initial_path) else ""
    directory = QFileDialog.getExistingDirectory(parent, "Select Directory", start_dir)
    if not directory:
        return None
    return normalize_dir(directory)


class ConfiguratorDialog(QDialog):
    """Configuration window. All state lives in the ConfiguratorController."""

    TEXT_WIDTH = 420

    def __init__(self, controller, parent=None):
        super().__init__(parent)
        self._controller = controller
        self._destroying = False
        self.setWindowTitle(f"{config.APP_NAME} - Configuration")
        self.setWindowIcon(QIcon(resource_path(config.WINDOW_ICON)))
        self.setModal(False)

        style = QApplication.instance().style()
        browse_icon = style.standardIcon(QStyle.StandardPixmap.SP_DirOpenIcon)

        layout = QVBoxLayout(self)

        # --- Download Directory Group ---
        self.download_group = QGroupBox("Download Directory - Monitored Directory")
        download_layout = QHBoxLayout()
        self.download_edit = QLineEdit()
        self.download_edit.setReadOnly(True)
        self.download_edit.setMinimumWidth(self.TEXT_WIDTH)
        self.download_browse_button = QPushButton("...")
        self.download_browse_button.setIcon(browse_icon)
        download_layout.addWidget(self.download_edit)
        download_layout.addWidget(self.download_browse_button)
        self.download_group.setLayout(download_layout)
        layout.addWidget(self.download_group)

        # --- Sims Directory Group ---
        self.sims_group = QGroupBox("Sims Data Directory - Usually: <Documents>\\Electronic Arts\\The Sims 4")
        sims_layout = QHBoxLayout()
        self.sims_edit = QLineEdit()
        self.sims_edit.setReadOnly(True)
        self.sims_edit.setMinimumWidth(self.TEXT_WIDTH)
        self.sims_browse_button = QPushButton("...")
        self.sims_browse_button.setIcon(browse_icon)
        sims_layout.addWidget(self.sims_edit)
        sims_layout.addWidget(self.sims_browse_button)
        self.sims_group.setLayout(sims_layout)
        layout.addWidget(self.sims_group)

        # --- Apply ---
        self.apply_button = QPushButton("Apply")
        layout.addWidget(self.apply_button)

        self.download_browse_button.clicked.connect(self.browse_download_dir)
        self.sims_browse_button.clicked.connect(self.browse_sims_dir)
        self.apply_button.clicked.connect(self.apply_changes)

        self.refresh()
        logging.debug("[SymBLink:Conf] Configurator initialized!")

    # --- Surface interface used by the controller ---
    def show_surface(self):
        self.show()

    def hide_surface(self):
        self.hide()

    def raise_surface(self):
        self.setWindowState(self.windowState() & ~Qt.WindowState.WindowMinimized | Qt.WindowState.WindowActive)
        self.raise_()
        self.activateWindow()

    def refresh(self):
        self.download_edit.setText(self._controller.displayed_download_dir() or "")
        self.sims_edit.setText(self._controller.displayed_sims_dir() or "")

    def destroy_surface(self):
        self._destroying = True
        self.reject()
        self.deleteLater()

    # --- Slots ---
    @Slot()
    def browse_download_dir(self):
        self._controller.request_download_dir()

    @Slot()
    def browse_sims_dir(self):
        self._controller.request_sims_dir()

    @Slot()
    def apply_changes(self):
        if not self._controller.apply():
            QMessageBox.warning(
                None,
                "Save Failed",
                "The configuration could not be saved.\nThe changes are active until the application exits."
            )

    def reject(self):
        # Window closed (Esc or title bar): pending edits are discarded
        if not self._destroying and self._controller.surface is self:
            self._controller.on_surface_closed(self)
            return
        super().reject()
