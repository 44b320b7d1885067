"""Pytest configuration and fixtures."""
import json
import os

# Qt must not try to reach a real display
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from directory_discovery import DiscoveryProvider


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication
    app = QApplication.instance() or QApplication([])
    app.setQuitOnLastWindowClosed(False)
    yield app


class CountingProvider(DiscoveryProvider):
    """DiscoveryProvider that remembers how many times it was asked."""

    def __init__(self, name, value):
        calls = []

        def provide():
            calls.append(1)
            return value

        super().__init__(name, provide)
        object.__setattr__(self, "calls", calls)

    @property
    def call_count(self):
        return len(self.calls)


@pytest.fixture
def make_provider():
    return CountingProvider


class FakeSurface:
    """Headless stand-in for the configurator dialog."""
    created = []

    def __init__(self, controller):
        self.controller = controller
        self.visible = False
        self.raised = 0
        self.refreshed = 0
        self.destroyed = False
        FakeSurface.created.append(self)

    def show_surface(self):
        self.visible = True

    def hide_surface(self):
        self.visible = False

    def raise_surface(self):
        self.raised += 1

    def refresh(self):
        self.refreshed += 1

    def destroy_surface(self):
        self.visible = False
        self.destroyed = True


@pytest.fixture
def fake_surface_factory():
    FakeSurface.created = []
    return FakeSurface


@pytest.fixture
def dirs(tmp_path):
    download = tmp_path / "Downloads"
    sims = tmp_path / "Documents" / "Electronic Arts" / "The Sims 4"
    download.mkdir()
    sims.mkdir(parents=True)
    return str(download), str(sims)


@pytest.fixture
def write_config(tmp_path):
    def _write(data, name="config.json"):
        path = tmp_path / name
        if isinstance(data, str):
            path.write_text(data, encoding="utf-8")
        else:
            path.write_text(json.dumps(data), encoding="utf-8")
        return str(path)
    return _write
