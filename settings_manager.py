# settings_manager.py
# -*- coding: utf-8 -*-
"""
Owner of the application configuration (download + Sims directories).

The configuration is loaded once at startup (missing fields are filled by
directory discovery), mutated only through the store, and written back to
disk on apply and when the store is closed.
"""

import json
import os
import logging
from dataclasses import dataclass
from typing import Optional

import config
from directory_discovery import DiscoveryProvider, DOWNLOAD_DIR_PROVIDER, SIMS_DIR_PROVIDER


# --- JSON keys of the persisted file ---
KEY_VERSION = "version"
KEY_DOWNLOAD_DIR = "downloadDir"
KEY_SIMS_DIR = "simsDir"


class ConfigurationLoadError(ValueError):
    """The persisted configuration exists but cannot be understood."""

    def __init__(self, path, reason):
        super().__init__(f"Unable to read configuration '{path}': {reason}")
        self.path = path
        self.reason = reason


@dataclass
class Configuration:
    version: int = config.SCHEMA_VERSION
    download_dir: Optional[str] = None
    sims_dir: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            KEY_VERSION: max(self.version, config.SCHEMA_VERSION),
            KEY_DOWNLOAD_DIR: self.download_dir,
            KEY_SIMS_DIR: self.sims_dir,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Configuration":
        """Build a Configuration from decoded JSON. Unknown keys are ignored,
        values of the wrong type are treated as missing."""
        version = data.get(KEY_VERSION)
        if not isinstance(version, int) or isinstance(version, bool):
            version = config.SCHEMA_VERSION
        return cls(
            version=version,
            download_dir=_path_or_none(data.get(KEY_DOWNLOAD_DIR)),
            sims_dir=_path_or_none(data.get(KEY_SIMS_DIR)),
        )


def _path_or_none(value) -> Optional[str]:
    if isinstance(value, str) and value:
        return value
    return None


# =============================================================================
# LOAD / SAVE
# =============================================================================

def load_configuration(path: str,
                       download_provider: DiscoveryProvider = DOWNLOAD_DIR_PROVIDER,
                       sims_provider: DiscoveryProvider = SIMS_DIR_PROVIDER) -> Configuration:
    """
    Load the configuration from path, discovering any missing directory.

    Raises:
        ConfigurationLoadError: the file exists but cannot be read or is not a JSON object.
            User choices are never silently replaced by defaults.
    """
    if os.path.isfile(path):
        logging.debug(f"[SymBLink:Conf] Reading configuration from: {path}")
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigurationLoadError(path, f"malformed JSON ({e})") from e
        except UnicodeDecodeError as e:
            raise ConfigurationLoadError(path, f"not a text file ({e})") from e
        except OSError as e:
            raise ConfigurationLoadError(path, f"unreadable ({e})") from e
        if not isinstance(data, dict):
            raise ConfigurationLoadError(path, f"expected a JSON object, found {type(data).__name__}")
        configuration = Configuration.from_dict(data)
        logging.info(f"[SymBLink:Conf] Configuration loaded from '{path}'.")
    else:
        logging.info(f"[SymBLink:Conf] Configuration file '{path}' not found, using discovered defaults.")
        configuration = Configuration()

    # Discovery runs once per missing field
    if configuration.download_dir is None:
        configuration.download_dir = download_provider()
        logging.info(f"[SymBLink:Conf] Download directory discovered: {configuration.download_dir}")
    if configuration.sims_dir is None:
        configuration.sims_dir = sims_provider()
        logging.info(f"[SymBLink:Conf] Sims directory discovered: {configuration.sims_dir}")

    return configuration


def save_configuration(configuration: Configuration, path: str) -> None:
    """
    Write the configuration as indented JSON, atomically replacing path.

    Raises:
        OSError: the file could not be written.
    """
    parent = os.path.dirname(os.path.abspath(path))
    os.makedirs(parent, exist_ok=True)

    data = configuration.to_dict()
    temp_path = path + ".tmp"
    try:
        with open(temp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=4)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except OSError:
        try:
            if os.path.exists(temp_path):
                os.remove(temp_path)
        except OSError:
            pass
        raise

    configuration.version = data[KEY_VERSION]
    logging.info(f"[SymBLink:Conf] Configuration saved to '{path}'.")


# =============================================================================
# STORE
# =============================================================================

class SettingsStore:
    """Sole owner of the process configuration.

    Use as a context manager (or call close()) so that the final save runs
    on every exit path.
    """

    def __init__(self, path: str, configuration: Configuration):
        self.path = path
        self._config = configuration
        self._closed = False

    @classmethod
    def open(cls, path: Optional[str] = None,
             download_provider: DiscoveryProvider = DOWNLOAD_DIR_PROVIDER,
             sims_provider: DiscoveryProvider = SIMS_DIR_PROVIDER) -> "SettingsStore":
        if path is None:
            path = config.get_default_config_path()
        configuration = load_configuration(path, download_provider, sims_provider)
        return cls(path, configuration)

    @property
    def current_config(self) -> Configuration:
        """The live configuration instance (shared by reference)."""
        return self._config

    @property
    def download_dir(self) -> Optional[str]:
        return self._config.download_dir

    @property
    def sims_dir(self) -> Optional[str]:
        return self._config.sims_dir

    # Setters do not save: writes are batched until apply or shutdown
    def set_download_dir(self, path: Optional[str]) -> None:
        self._config.download_dir = path

    def set_sims_dir(self, path: Optional[str]) -> None:
        self._config.sims_dir = path

    def save(self) -> None:
        save_configuration(self._config, self.path)

    def persist(self) -> bool:
        """Save and report success instead of raising. Returns bool."""
        try:
            self.save()
            return True
        except OSError:
            logging.error(f"[SymBLink:Conf] Error saving configuration to '{self.path}'.", exc_info=True)
            return False

    def close(self) -> None:
        """Final save. Safe to call more than once; only the first call writes."""
        if self._closed:
            return
        self._closed = True
        logging.debug("[SymBLink:Conf] Closing settings store, writing final configuration...")
        self.persist()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
        return False
