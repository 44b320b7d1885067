# directory_discovery.py
# -*- coding: utf-8 -*-
"""
Best-effort discovery of default directories on first launch.

Every probe is read-only and never raises: a missing folder is reported
as None and the validator will flag the field later.
"""

import os
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from PySide6.QtCore import QStandardPaths

import config


# =============================================================================
# WELL-KNOWN USER FOLDERS
# =============================================================================

def _standard_location(location: QStandardPaths.StandardLocation, fallback_name: str) -> Optional[str]:
    """Ask Qt for a well-known user folder, falling back to ~/<fallback_name> if it exists."""
    try:
        path = QStandardPaths.writableLocation(location)
        if path:
            return os.path.normpath(path)
    except Exception as e:
        logging.debug(f"[SymBLink:Discovery] QStandardPaths lookup failed for {location}: {e}")

    candidate = os.path.join(os.path.expanduser("~"), fallback_name)
    if os.path.isdir(candidate):
        return candidate
    return None


def get_downloads_folder() -> Optional[str]:
    return _standard_location(QStandardPaths.StandardLocation.DownloadLocation, "Downloads")


def get_documents_folder() -> Optional[str]:
    return _standard_location(QStandardPaths.StandardLocation.DocumentsLocation, "Documents")


# =============================================================================
# DISCOVERY FUNCTIONS
# =============================================================================

def discover_download_dir() -> Optional[str]:
    """Return the current user's Downloads folder, or None if the OS reports none."""
    path = get_downloads_folder()
    if path:
        logging.debug(f"[SymBLink:Discovery] Download directory candidate: {path}")
    else:
        logging.debug("[SymBLink:Discovery] No Downloads folder reported by the OS.")
    return path


def find_sims_folder(ea_dir: str) -> Optional[str]:
    """
    Return the first immediate subdirectory of ea_dir whose name contains
    config.SIMS_FOLDER_PATTERN, ignoring case (like the Windows "*Sims 4*" glob).

    Directories are taken in filesystem enumeration order, not sorted: the
    first match is good enough and is not guaranteed to be the newest one.
    """
    pattern = config.SIMS_FOLDER_PATTERN.casefold()
    try:
        with os.scandir(ea_dir) as entries:
            for entry in entries:
                try:
                    if entry.is_dir() and pattern in entry.name.casefold():
                        return entry.path
                except OSError:
                    continue
    except FileNotFoundError:
        logging.debug(f"[SymBLink:Discovery] '{ea_dir}' does not exist.")
    except OSError as e:
        logging.debug(f"[SymBLink:Discovery] Unable to list '{ea_dir}': {e}")
    return None


def discover_sims_dir(documents_dir: Optional[str] = None) -> Optional[str]:
    """Locate <Documents>/Electronic Arts/<*Sims 4*>, or None."""
    if documents_dir is None:
        documents_dir = get_documents_folder()
    if not documents_dir:
        logging.debug("[SymBLink:Discovery] Documents folder unavailable, cannot look for the Sims directory.")
        return None

    ea_dir = os.path.join(documents_dir, config.EA_FOLDER_NAME)
    if not os.path.isdir(ea_dir):
        logging.debug(f"[SymBLink:Discovery] No '{config.EA_FOLDER_NAME}' folder in {documents_dir}")
        return None

    path = find_sims_folder(ea_dir)
    if path:
        logging.debug(f"[SymBLink:Discovery] Sims directory candidate: {path}")
    else:
        logging.debug(f"[SymBLink:Discovery] No folder matching '{config.SIMS_FOLDER_PATTERN}' in {ea_dir}")
    return path


# =============================================================================
# PROVIDERS
# =============================================================================

@dataclass(frozen=True)
class DiscoveryProvider:
    """A named default-value provider for one configuration field."""
    name: str
    provider: Callable[[], Optional[str]]

    def __call__(self) -> Optional[str]:
        try:
            return self.provider() or None
        except Exception as e:
            # A broken probe must never stop startup
            logging.warning(f"[SymBLink:Discovery] Provider '{self.name}' failed: {e}")
            return None


DOWNLOAD_DIR_PROVIDER = DiscoveryProvider("download-default", discover_download_dir)
SIMS_DIR_PROVIDER = DiscoveryProvider("sims-default", discover_sims_dir)
