# activity_indicator.py
# -*- coding: utf-8 -*-
import logging
import os
from enum import IntEnum
from typing import Callable, Dict

from PySide6.QtGui import QIcon

import config
from utils import resource_path


class LoadLevel(IntEnum):
    """Activity level shown by the tray icon."""
    IDLE = 0
    LOW = 1
    HIGH = 2


ICON_RESOURCES = {
    LoadLevel.IDLE: config.ICON_IDLE,
    LoadLevel.LOW: config.ICON_LOW,
    LoadLevel.HIGH: config.ICON_HIGH,
}


def build_icon_cache(resolver: Callable[[str], str] = resource_path) -> Dict[LoadLevel, QIcon]:
    """Load every tray icon up front so level changes never touch the disk."""
    cache = {}
    for level, relative_path in ICON_RESOURCES.items():
        icon_path = resolver(relative_path)
        if not os.path.exists(icon_path):
            logging.warning(f"[SymBLink:Tray] Icon for {level.name} not found at {icon_path}")
        cache[level] = QIcon(icon_path)
    logging.debug(f"[SymBLink:Tray] Icon cache ready ({len(cache)} icons).")
    return cache


class ActivityIndicator:
    """Maps the current LoadLevel onto the tray host's icon slot."""

    def __init__(self, host, icon_cache: Dict[LoadLevel, QIcon]):
        self._host = host
        self._icon_cache = icon_cache
        self._level = LoadLevel.IDLE

    @property
    def level(self) -> LoadLevel:
        return self._level

    def set_level(self, level: LoadLevel) -> None:
        self._host.setIcon(self._icon_cache[level])
        self._level = level
