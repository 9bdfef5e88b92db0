import os
import sys

import pytest

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from PySide6.QtCore import QCoreApplication


@pytest.fixture(scope="session", autouse=True)
def qt_app():
    """One QCoreApplication for the whole run (signals need no event loop)."""
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


class RecordingRouter:
    """Router stand-in that records requests and never notifies on its own."""

    def __init__(self):
        self.requests = []

    def navigate_to(self, location, replace=False):
        self.requests.append((location, replace))


@pytest.fixture
def router():
    return RecordingRouter()
