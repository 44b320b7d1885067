# utils.py
import os
import sys
import logging


def resource_path(relative_path):
    """ Get absolute path to resource, works for dev and for PyInstaller """
    try:
        # PyInstaller creates a temp folder and stores path in _MEIPASS
        base_path = sys._MEIPASS
    except AttributeError:
        # Not running in a PyInstaller bundle: resources live next to this module
        base_path = os.path.dirname(os.path.abspath(__file__))
    except Exception as e:
        logging.error(f"Error accessing sys._MEIPASS: {e}. Falling back to the module directory.")
        base_path = os.path.dirname(os.path.abspath(__file__))
    return os.path.join(base_path, relative_path)


def normalize_dir(path):
    """Return an absolute, normalized directory path, or None for empty values."""
    if not path or not isinstance(path, str):
        return None
    return os.path.normpath(os.path.abspath(os.path.expanduser(path)))
