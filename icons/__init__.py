# icons/__init__.py
# Tray and window icons, shipped as package data so resource_path() finds them when installed.
