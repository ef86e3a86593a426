"""
Shared fixtures.
"""

import pytest


@pytest.fixture(scope="session")
def qapp():
    """A core application for tests that need a Qt event loop."""
    QtCore = pytest.importorskip("PyQt6.QtCore")
    app = QtCore.QCoreApplication.instance()
    if app is None:
        app = QtCore.QCoreApplication([])
    yield app


@pytest.fixture
def write_text(tmp_path):
    """Write a text file under tmp_path and return its path."""
    def _write(name, text):
        path = tmp_path / name
        path.write_bytes(text.encode("utf-8"))
        return path
    return _write
