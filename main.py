# main.py
# -*- coding: utf-8 -*-
import sys
import logging
import argparse
import config
# --- PySide6 Imports ---
from PySide6.QtWidgets import QApplication, QMessageBox
from PySide6.QtGui import QIcon

# --- App Imports ---
import settings_validator
from settings_manager import ConfigurationLoadError, SettingsStore, load_configuration
from tray_app import SymBLinkApp
from utils import resource_path

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(message)s'
LOG_DATEFMT = '%H:%M:%S'


def setup_logging(debug=False, log_file=None):
    """Configure the root logger: console on stderr plus a log file in the data folder."""
    log_formatter = logging.Formatter(LOG_FORMAT, LOG_DATEFMT)
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove existing handlers (e.g. in PyInstaller)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(log_formatter)
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    root_logger.addHandler(console_handler)

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, encoding='utf-8')
            file_handler.setFormatter(log_formatter)
            file_handler.setLevel(logging.DEBUG)
            root_logger.addHandler(file_handler)
        except OSError as e:
            logging.warning(f"Unable to open log file '{log_file}': {e}")

    logging.debug("Logging configured.")
    return console_handler


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description=f'{config.APP_NAME} tray companion.')
    parser.add_argument("--config", help="Path of the configuration file (default: application data folder).")
    parser.add_argument("--configure", action="store_true", help="Open the configuration window at startup.")
    parser.add_argument("--validate", action="store_true", help="Validate the configuration and exit.")
    parser.add_argument("--debug", action="store_true", help="Verbose console logging.")
    return parser.parse_args(argv)


def run_validate(config_path=None):
    """Load and validate the configuration without starting the GUI. Returns an exit code."""
    path = config_path or config.get_default_config_path()
    try:
        configuration = load_configuration(path)
    except ConfigurationLoadError as e:
        logging.critical(str(e))
        return 1
    result = settings_validator.validate(configuration)
    print(f"Download directory: {configuration.download_dir} ({'ok' if result.download_valid else 'invalid'})")
    print(f"Sims directory:     {configuration.sims_dir} ({'ok' if result.sims_valid else 'invalid'})")
    return 0 if result.overall else 1


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.debug, config.get_log_file_path())

    if args.validate:
        return run_validate(args.config)

    app = QApplication.instance()
    if not app:
        app = QApplication(sys.argv if sys.argv else [config.APP_NAME])
    QApplication.setApplicationName(config.APP_NAME)
    QApplication.setApplicationVersion(config.APP_VERSION)
    app.setWindowIcon(QIcon(resource_path(config.WINDOW_ICON)))
    # Closing the configurator must not end a tray application
    app.setQuitOnLastWindowClosed(False)

    logging.info("Loading configuration...")
    try:
        store = SettingsStore.open(args.config)
    except ConfigurationLoadError as e:
        logging.critical(f"[SymBLink:Conf] {e}")
        QMessageBox.critical(
            None, f"{config.APP_NAME} - Startup Error",
            f"{e}\n\nFix or remove the file and start {config.APP_NAME} again."
        )
        return 1

    # The store writes the final configuration on every exit path
    with store:
        tray = SymBLinkApp(store)
        tray.start(open_configurator=args.configure)
        logging.info(f"{config.APP_NAME} {config.APP_VERSION} running.")
        exit_code = app.exec()

    logging.info(f"{config.APP_NAME} exited with code {exit_code}.")
    return exit_code


# --- Main Execution Block ---
if __name__ == "__main__":
    sys.exit(main())
