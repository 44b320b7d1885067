# tray_app.py
# -*- coding: utf-8 -*-
import logging
from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QApplication, QMenu, QSystemTrayIcon

import config
import settings_validator
from activity_indicator import ActivityIndicator, LoadLevel, build_icon_cache
from configurator import ConfiguratorController
from settings_manager import Configuration, SettingsStore


class SymBLinkApp(QObject):
    """Tray-resident application shell.

    Consumers of the configuration (the link engine) connect to
    `reinitialized`, which fires after every successful apply.
    """
    reinitialized = Signal(object)

    def __init__(self, store: SettingsStore, icon_cache=None, surface_factory=None, picker=None, parent=None):
        super().__init__(parent)
        self.store = store
        self.tray_icon = QSystemTrayIcon(self)
        self.tray_icon.setToolTip(config.APP_NAME)
        self.indicator = ActivityIndicator(self.tray_icon, icon_cache if icon_cache is not None else build_icon_cache())
        self.indicator.set_level(LoadLevel.IDLE)
        self.configurator = ConfiguratorController(
            store,
            on_reinitialize=self.reinitialize,
            surface_factory=surface_factory,
            picker=picker,
        )
        self._setup_menu()

    # ---- System tray helpers ----
    def _setup_menu(self):
        self.tray_menu = QMenu()
        act_configure = self.tray_menu.addAction("Configure...")
        act_exit = self.tray_menu.addAction("Exit")
        act_configure.triggered.connect(self.toggle_configurator)
        act_exit.triggered.connect(self.quit)
        self.tray_icon.setContextMenu(self.tray_menu)
        self.tray_icon.activated.connect(self._on_tray_activated)

    def show(self):
        if not QSystemTrayIcon.isSystemTrayAvailable():
            logging.warning("[SymBLink:Tray] System tray not available on this system.")
        self.tray_icon.show()

    @Slot(QSystemTrayIcon.ActivationReason)
    def _on_tray_activated(self, reason):
        if reason == QSystemTrayIcon.ActivationReason.Trigger:
            self.toggle_configurator()

    @Slot()
    def toggle_configurator(self):
        self.configurator.toggle()

    @Slot()
    def quit(self):
        self.configurator.close()
        self.tray_icon.hide()
        app = QApplication.instance()
        if app is not None:
            app.quit()

    # ---- Configuration state ----
    def check_configuration(self) -> bool:
        """Validate the live configuration and reflect it on the tray icon."""
        result = settings_validator.validate(self.store.current_config)
        if result.overall:
            self.indicator.set_level(LoadLevel.IDLE)
            self.tray_icon.setToolTip(config.APP_NAME)
        else:
            # Degraded: nothing can be linked until the directories are fixed
            self.indicator.set_level(LoadLevel.HIGH)
            self.tray_icon.setToolTip(f"{config.APP_NAME} - not configured")
        return result.overall

    def start(self, open_configurator=False):
        """Show the tray icon and open the configurator if the setup is unusable."""
        self.show()
        valid = self.check_configuration()
        if not valid:
            logging.warning("[SymBLink:Conf] Configuration is incomplete, opening the Configurator.")
        if open_configurator or not valid:
            self.configurator.toggle()
        return valid

    def reinitialize(self, configuration: Configuration):
        logging.info("[SymBLink:Tray] Re-initializing with the new configuration...")
        self.check_configuration()
        self.reinitialized.emit(configuration)
