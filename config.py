# config.py
import os
import logging
import platform


# --- Application Name (used for the AppData folder) ---
APP_NAME = "SymBLink"
APP_VERSION = "1.0.0"

# --- Persisted configuration ---
SCHEMA_VERSION = 1
CONFIG_FILENAME = "config.json"
LOG_FILENAME = "symblink.log"

# --- Auto-discovery of the Sims data directory ---
# <Documents>/Electronic Arts/<first folder containing "Sims 4">
EA_FOLDER_NAME = "Electronic Arts"
SIMS_FOLDER_PATTERN = "Sims 4"

# --- Tray icons (relative to the resource root) ---
ICON_IDLE = os.path.join("icons", "icon-green.svg")
ICON_LOW = os.path.join("icons", "icon-yellow.svg")
ICON_HIGH = os.path.join("icons", "icon-red.svg")
WINDOW_ICON = ICON_IDLE


def get_app_data_folder():
    """Return the application data folder (%LOCALAPPDATA% on Windows)
       and create it if missing. Falls back to the current directory."""
    system = platform.system()
    base_path = None
    app_folder = None

    try:
        if system == "Windows":
            base_path = os.getenv('LOCALAPPDATA')
        elif system == "Darwin": # macOS
            base_path = os.path.expanduser('~/Library/Application Support')
        else:
            # XDG Base Directory Specification
            base_path = os.getenv('XDG_DATA_HOME') or os.path.expanduser('~/.local/share')

        if not base_path:
            logging.error("Unable to determine the user data folder. Using the current directory as fallback.")
            app_folder = os.path.abspath(APP_NAME)
        else:
            app_folder = os.path.join(base_path, APP_NAME)

        if not os.path.exists(app_folder):
            try:
                os.makedirs(app_folder, exist_ok=True)
                logging.info(f"Created application data folder: {app_folder}")
            except OSError as e:
                # load/save will report the error on their own
                logging.error(f"Unable to create data folder {app_folder}: {e}.")

    except Exception as e:
        logging.error(f"Unexpected error in get_app_data_folder: {e}. Falling back to CWD.", exc_info=True)
        app_folder = os.path.abspath(APP_NAME)

    return app_folder


def get_default_config_path():
    """Full path of the persisted configuration file."""
    return os.path.join(get_app_data_folder(), CONFIG_FILENAME)


def get_log_file_path():
    return os.path.join(get_app_data_folder(), LOG_FILENAME)
