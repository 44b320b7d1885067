# configurator.py
# -*- coding: utf-8 -*-
"""
Lifecycle controller for the configuration window.

The controller owns at most one surface (the dialog) at a time and keeps
the edits made on it in a scratch copy until they are applied:

    CLOSED --toggle--> OPEN --toggle--> HIDDEN --toggle--> OPEN
    OPEN/HIDDEN --apply/close--> CLOSED
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from settings_manager import Configuration, SettingsStore


class ConfiguratorState(Enum):
    CLOSED = "closed"
    OPEN = "open"
    HIDDEN = "hidden"


@dataclass
class PendingEdits:
    """Directories picked on the surface but not applied yet (None = unchanged)."""
    download_dir: Optional[str] = None
    sims_dir: Optional[str] = None


def _default_surface_factory(controller):
    # Imported here so the controller can run without a GUI
    from dialogs.configurator_dialog import ConfiguratorDialog
    return ConfiguratorDialog(controller)


def _default_picker(initial_path):
    from dialogs.configurator_dialog import pick_directory
    return pick_directory(initial_path)


class ConfiguratorController:
    """
    Owns the single configuration surface and mediates edits to the store.

    Args:
        store: the SettingsStore the edits are applied to
        on_reinitialize: called once per successful apply with the live configuration
        surface_factory: builds a surface for this controller. The surface must
            provide show_surface(), hide_surface(), raise_surface(), refresh()
            and destroy_surface()
        picker: pick_directory(initial_path) -> Optional[str]
    """

    def __init__(self, store: SettingsStore,
                 on_reinitialize: Callable[[Configuration], None],
                 surface_factory: Optional[Callable] = None,
                 picker: Optional[Callable[[Optional[str]], Optional[str]]] = None):
        self._store = store
        self._on_reinitialize = on_reinitialize
        self._surface_factory = surface_factory or _default_surface_factory
        self._picker = picker or _default_picker
        self._state = ConfiguratorState.CLOSED
        self._surface = None
        self._pending = None

    # --- State inspection ---
    @property
    def state(self) -> ConfiguratorState:
        return self._state

    @property
    def surface(self):
        return self._surface

    @property
    def pending(self) -> Optional[PendingEdits]:
        return self._pending

    def displayed_download_dir(self) -> Optional[str]:
        if self._pending and self._pending.download_dir:
            return self._pending.download_dir
        return self._store.download_dir

    def displayed_sims_dir(self) -> Optional[str]:
        if self._pending and self._pending.sims_dir:
            return self._pending.sims_dir
        return self._store.sims_dir

    # --- Lifecycle ---
    def toggle(self) -> ConfiguratorState:
        if self._state is ConfiguratorState.OPEN:
            self._surface.hide_surface()
            self._state = ConfiguratorState.HIDDEN
            logging.info("[SymBLink:Conf] Collapsed Configurator")
        elif self._state is ConfiguratorState.HIDDEN:
            self._surface.show_surface()
            self._surface.raise_surface()
            self._state = ConfiguratorState.OPEN
            logging.info("[SymBLink:Conf] Opened existing Configurator")
        else:
            logging.info("[SymBLink:Conf] New Configurator is required")
            self._pending = PendingEdits()
            self._surface = self._surface_factory(self)
            self._state = ConfiguratorState.OPEN
            self._surface.show_surface()
            self._surface.raise_surface()
            logging.info("[SymBLink:Conf] Activated new Configurator")
        return self._state

    def close(self) -> None:
        """Discard pending edits and tear the surface down without saving."""
        if self._state is ConfiguratorState.CLOSED:
            return
        logging.info("[SymBLink:Conf] Configurator closed, pending changes discarded.")
        self._teardown()

    def on_surface_closed(self, surface) -> None:
        """Called by a surface that was closed by the user."""
        if surface is self._surface:
            self.close()

    def _teardown(self) -> None:
        surface = self._surface
        self._surface = None
        self._pending = None
        self._state = ConfiguratorState.CLOSED
        if surface is not None:
            surface.destroy_surface()

    # --- Edits ---
    def set_pending_download_dir(self, path: Optional[str]) -> None:
        if self._pending is None or not path:
            return
        self._pending.download_dir = path
        self._surface.refresh()

    def set_pending_sims_dir(self, path: Optional[str]) -> None:
        if self._pending is None or not path:
            return
        self._pending.sims_dir = path
        self._surface.refresh()

    def request_download_dir(self) -> Optional[str]:
        """Ask the picker for a download directory. None means cancelled."""
        if self._pending is None:
            return None
        path = self._picker(self.displayed_download_dir())
        self.set_pending_download_dir(path)
        return path

    def request_sims_dir(self) -> Optional[str]:
        if self._pending is None:
            return None
        path = self._picker(self.displayed_sims_dir())
        self.set_pending_sims_dir(path)
        return path

    # --- Apply ---
    def apply(self) -> bool:
        """
        Write pending edits into the store, persist, notify and close.

        Returns:
            bool: True if the configuration was saved. On a failed save the
                  surface is still closed and no re-initialization happens.
        """
        if self._state is ConfiguratorState.CLOSED:
            logging.warning("[SymBLink:Conf] Apply requested with no open Configurator, ignoring.")
            return False

        pending = self._pending
        try:
            if pending.download_dir:
                self._store.set_download_dir(pending.download_dir)
            if pending.sims_dir:
                self._store.set_sims_dir(pending.sims_dir)

            saved = self._store.persist()
            if saved:
                logging.info("[SymBLink:Conf] Changes applied, re-initializing...")
                self._on_reinitialize(self._store.current_config)
            else:
                logging.error("[SymBLink:Conf] Changes applied in memory but could not be saved.")
            return saved
        finally:
            self._teardown()
