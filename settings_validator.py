# settings_validator.py
# -*- coding: utf-8 -*-
"""
Checks whether a configuration points at usable directories.

Validity is recomputed on every call: the folders can disappear while
the application is running.
"""

import os
import logging
from dataclasses import dataclass
from typing import List


# Field name used in diagnostics -> attribute on the Configuration
FIELD_LABELS = {
    "download_dir": "Download directory",
    "sims_dir": "TS4 directory",
}


@dataclass(frozen=True)
class ValidationResult:
    download_valid: bool
    sims_valid: bool

    @property
    def overall(self) -> bool:
        return self.download_valid and self.sims_valid

    @property
    def invalid_fields(self) -> List[str]:
        fields = []
        if not self.download_valid:
            fields.append("download_dir")
        if not self.sims_valid:
            fields.append("sims_dir")
        return fields

    def __bool__(self):
        return self.overall


def is_valid_dir(path) -> bool:
    """True if path is a non-empty string naming an existing directory."""
    if not path or not isinstance(path, str):
        return False
    return os.path.isdir(path)


def validate(configuration) -> ValidationResult:
    """
    Validate both directories of a configuration.

    Args:
        configuration: object exposing download_dir and sims_dir

    Returns:
        ValidationResult with per-field and overall validity. Invalid fields
        are also reported on the log channel (advisory only).
    """
    download_valid = is_valid_dir(configuration.download_dir)
    sims_valid = is_valid_dir(configuration.sims_dir)

    if not download_valid:
        logging.warning(f"[SymBLink:Conf] {FIELD_LABELS['download_dir']} invalid: {configuration.download_dir}")
    if not sims_valid:
        logging.warning(f"[SymBLink:Conf] {FIELD_LABELS['sims_dir']} invalid: {configuration.sims_dir}")

    return ValidationResult(download_valid=download_valid, sims_valid=sims_valid)
