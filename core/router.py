"""
Router.py

In-process router: the single source of "what is displayed now".

Emits locationChanged for every change of the active view, whatever the
cause. Subscribers register through subscribe() and get back a teardown
callable that removes them again.
"""

from PySide6.QtCore import QObject, Signal, Slot, Property
from collections import deque
from typing import Callable

from core.location import split_location

HOME_LOCATION = "/"
SESSION_LIMIT = 50


class Router(QObject):
    """
    Keeps the most recent visited locations (like a browser session),
    bounded by session_limit. That list is router bookkeeping and is not
    introspected by the history.
    """

    # Signals
    locationChanged = Signal(str, str)  # (path, query)

    def __init__(self, initial_location: str = HOME_LOCATION, session_limit: int = SESSION_LIMIT, parent=None):
        super().__init__(parent)
        if session_limit < 1:
            raise ValueError(f"session_limit must be a positive integer, got {session_limit}")
        self._entries: deque[str] = deque([initial_location], maxlen=session_limit)

    @Property(str, notify=locationChanged)
    def currentLocation(self) -> str:
        return self._entries[-1]

    @property
    def current_location(self) -> str:
        return self._entries[-1]

    @property
    def session_length(self) -> int:
        return len(self._entries)

    @Slot(str, bool)
    def navigate_to(self, location: str, replace: bool = False):
        """Make `location` active and notify subscribers synchronously."""
        if replace:
            self._entries[-1] = location
        else:
            self._entries.append(location)

        path, query = split_location(location)
        self.locationChanged.emit(path, query)

    def subscribe(self, callback: Callable[[str, str], None]) -> Callable[[], None]:
        """
        Registers callback(path, query) for every location change.
        Returns the teardown function; calling it again is harmless.
        """
        self.locationChanged.connect(callback)
        connected = True

        def teardown():
            nonlocal connected
            if not connected:
                return
            connected = False
            try:
                self.locationChanged.disconnect(callback)
            except (RuntimeError, TypeError) as e:
                # Router already destroyed on the C++ side
                print(f"[Router] Teardown after router shutdown: {e}")

        return teardown
