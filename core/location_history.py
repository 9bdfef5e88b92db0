"""
LocationHistory.py

Back/Forward history on top of a router that can only "go to location".

Every location notification is classified here:
- Replay: the answer to our own go_back()/go_forward() request.
  Moves the cursor, never touches the stack.
- New navigation: anything else. Truncates forward history and appends.

The only thing that tells them apart is the pending ReplayMarker,
set right before we ask the router to navigate.
"""

from PySide6.QtCore import QObject, Signal, Slot
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from core.location import (
    is_inside_folder,
    make_location,
    normalize_location,
    resource_path,
)

DEFAULT_MAX_SIZE = 30


@dataclass(frozen=True)
class ReplayMarker:
    """A back/forward request still waiting for its notification."""
    target: int         # Cursor value to land on
    location: str       # Key expected in the notification
    generation: int     # Increments per request (last request wins)


class LocationHistory(QObject):
    """
    Bounded navigation stack with a cursor.

    The router is an injected collaborator exposing
    navigate_to(location, replace=False). Notifications come back in through
    record_location() / onLocationChanged().
    """

    # Signals
    historyChanged = Signal()         # Any stack/cursor mutation
    stackChanged = Signal(bool, bool) # (can_go_back, can_go_forward), on change only

    def __init__(self, router=None, max_size: int = DEFAULT_MAX_SIZE, parent=None):
        super().__init__(parent)
        if max_size < 1:
            raise ValueError(f"max_size must be a positive integer, got {max_size}")

        self._router = router
        self._max_size = max_size

        self._stack: List[str] = []
        self._cursor = -1

        self._marker: Optional[ReplayMarker] = None
        self._generation = 0

    def setRouter(self, router):
        """Swap the router. A pending marker belongs to the old one."""
        self._router = router
        self._marker = None

    # -------------------------------------------------------------------------
    # STATE
    # -------------------------------------------------------------------------

    @property
    def entries(self) -> Tuple[str, ...]:
        return tuple(self._stack)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def current_location(self) -> Optional[str]:
        if self._cursor < 0:
            return None
        return self._stack[self._cursor]

    @property
    def pending_marker(self) -> Optional[ReplayMarker]:
        return self._marker

    @property
    def pending_target(self) -> Optional[int]:
        return self._marker.target if self._marker else None

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def can_go_back(self) -> bool:
        return self._cursor > 0

    @property
    def can_go_forward(self) -> bool:
        return self._cursor < len(self._stack) - 1

    # -------------------------------------------------------------------------
    # NOTIFICATIONS (Location Source)
    # -------------------------------------------------------------------------

    @Slot(str, str)
    def onLocationChanged(self, path: str, query: str):
        """Router subscription callback."""
        self.record_location(make_location(path, query))

    def record_location(self, location: str) -> None:
        location = normalize_location(location)

        # Same place: re-render, query noise, or our own no-op
        if self.current_location == location:
            return

        flags = self._flags()
        marker = self._marker
        self._marker = None

        if marker is not None:
            if self._is_replay(marker, location):
                self._cursor = marker.target
                self._publish(flags)
                return
            print(f"[History] Discarding stale replay marker #{marker.generation}: "
                  f"expected {marker.location}, got {location}")

        # New navigation: forward history is gone
        del self._stack[self._cursor + 1:]
        self._stack.append(location)
        self._cursor = len(self._stack) - 1
        self._evict_overflow()
        self._publish(flags)

    def _is_replay(self, marker: ReplayMarker, location: str) -> bool:
        return (
            marker.location == location
            and 0 <= marker.target < len(self._stack)
            and self._stack[marker.target] == location
        )

    # -------------------------------------------------------------------------
    # CONTROLLER
    # -------------------------------------------------------------------------

    def go_back(self) -> bool:
        """Ask the router for the previous entry. False if there is none."""
        if not self.can_go_back:
            return False
        return self._request_replay(self._cursor - 1)

    def go_forward(self) -> bool:
        """Ask the router for the next entry. False if there is none."""
        if not self.can_go_forward:
            return False
        return self._request_replay(self._cursor + 1)

    def _request_replay(self, target: int) -> bool:
        if self._router is None:
            print("[History] No router attached, ignoring back/forward request")
            return False

        location = self._stack[target]
        self._generation += 1
        # Marker first: a synchronous router notifies before navigate_to returns
        self._marker = ReplayMarker(target, location, self._generation)
        self._router.navigate_to(location, replace=False)
        return True

    def clear(self) -> None:
        """Forget everything (e.g. the working folder changed)."""
        flags = self._flags()
        had_entries = bool(self._stack)

        self._stack = []
        self._cursor = -1
        self._marker = None

        if had_entries:
            print("[History] Cleared")
        self._publish(flags)

    def set_max_size(self, max_size: int) -> None:
        """Apply a new bound now, evicting the oldest entries if needed."""
        if max_size < 1:
            raise ValueError(f"max_size must be a positive integer, got {max_size}")
        if max_size == self._max_size:
            return

        flags = self._flags()
        self._max_size = max_size
        if self._evict_overflow():
            self._publish(flags)

    def _evict_overflow(self) -> int:
        overflow = len(self._stack) - self._max_size
        if overflow <= 0:
            return 0

        del self._stack[:overflow]
        self._cursor = max(0, self._cursor - overflow)

        # Keep an in-flight replay aimed at the same entry
        if self._marker is not None:
            target = self._marker.target - overflow
            if target < 0:
                self._marker = None
            else:
                self._marker = ReplayMarker(target, self._marker.location, self._marker.generation)

        print(f"[History] Evicted {overflow} oldest entr{'y' if overflow == 1 else 'ies'} "
              f"(max {self._max_size})")
        return overflow

    # -------------------------------------------------------------------------
    # PRUNER
    # -------------------------------------------------------------------------

    def remove_entries_for_file(self, path: str) -> int:
        """Drop every entry showing exactly `path`. Returns the count removed."""
        return self._prune(lambda location: resource_path(location) == path, path)

    def remove_entries_for_folder(self, folder: str) -> int:
        """Drop every entry showing `folder` or anything beneath it."""
        return self._prune(lambda location: is_inside_folder(resource_path(location), folder), folder)

    def _prune(self, matches: Callable[[str], bool], label: str) -> int:
        survivors = [
            (index, location)
            for index, location in enumerate(self._stack)
            if not matches(location)
        ]
        removed = len(self._stack) - len(survivors)
        if removed == 0:
            return 0

        flags = self._flags()

        # Current entry if it survived, else the nearest one before it
        landing = -1
        for new_index, (old_index, _) in enumerate(survivors):
            if old_index > self._cursor:
                break
            landing = new_index
        if landing == -1 and survivors:
            landing = 0

        # Removal can bring equal entries together: collapse them
        stack: List[str] = []
        cursor = -1
        for new_index, (_, location) in enumerate(survivors):
            if not stack or stack[-1] != location:
                stack.append(location)
            if new_index == landing:
                cursor = len(stack) - 1

        self._stack = stack
        self._cursor = cursor
        # Indices were renumbered under any in-flight replay
        self._marker = None

        print(f"[History] Pruned {removed} entr{'y' if removed == 1 else 'ies'} for {label}")
        self._publish(flags)
        return removed

    # -------------------------------------------------------------------------
    # INTERNAL
    # -------------------------------------------------------------------------

    def _flags(self) -> Tuple[bool, bool]:
        return self.can_go_back, self.can_go_forward

    def _publish(self, before: Tuple[bool, bool]):
        self.historyChanged.emit()
        after = self._flags()
        if after != before:
            self.stackChanged.emit(*after)
