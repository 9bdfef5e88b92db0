"""
NavigationManager — Back/Forward for the QML shell

Handles:
- Router subscription (attach / cleanup)
- canGoBack / canGoForward / currentLocation properties
- Pruning history after file and folder deletes or moves
"""

from PySide6.QtCore import QObject, Signal, Slot, Property

from core.history_settings import HistorySettings
from core.location_history import DEFAULT_MAX_SIZE, LocationHistory


class NavigationManager(QObject):
    """
    Owns one LocationHistory and wires it to a router.
    Passed by reference to whatever needs back/forward or pruning.
    """
    canGoBackChanged = Signal()
    canGoForwardChanged = Signal()
    currentLocationChanged = Signal(str)

    def __init__(self, settings: HistorySettings | None = None, parent=None):
        super().__init__(parent)
        self._settings = settings
        max_size = settings.max_size() if settings else DEFAULT_MAX_SIZE
        self._history = LocationHistory(max_size=max_size, parent=self)

        self._router = None
        self._teardown = None
        self._root_folder = ""

        self._can_go_back = False
        self._can_go_forward = False
        self._current_location = ""

        self._history.historyChanged.connect(self._sync_state)
        if self._settings:
            self._settings.configChanged.connect(self._on_config_changed)

    @property
    def history(self) -> LocationHistory:
        return self._history

    @Property(bool, notify=canGoBackChanged)
    def canGoBack(self) -> bool:
        return self._can_go_back

    @Property(bool, notify=canGoForwardChanged)
    def canGoForward(self) -> bool:
        return self._can_go_forward

    @Property(str, notify=currentLocationChanged)
    def currentLocation(self) -> str:
        return self._current_location

    # -------------------------------------------------------------------------
    # LIFECYCLE
    # -------------------------------------------------------------------------

    def attach(self, router) -> None:
        """Subscribe to a router and record where it currently is."""
        self.cleanup()

        self._router = router
        self._history.setRouter(router)
        self._teardown = router.subscribe(self._history.onLocationChanged)
        self._history.record_location(router.current_location)

    def cleanup(self) -> None:
        """Unsubscribe and forget history. Safe to call repeatedly."""
        if self._teardown:
            self._teardown()
            self._teardown = None
        self._router = None
        self._history.setRouter(None)
        self._history.clear()

    @Slot(str)
    def setRootFolder(self, path: str):
        """History from another working folder is meaningless here."""
        path = path.rstrip("/") or "/"
        if path == self._root_folder:
            return
        if self._root_folder:
            print(f"[Navigation] Root changed {self._root_folder} -> {path}, clearing history")
            self._history.clear()
        self._root_folder = path

    # -------------------------------------------------------------------------
    # BACK / FORWARD
    # -------------------------------------------------------------------------

    @Slot()
    def goBack(self) -> None:
        self._history.go_back()

    @Slot()
    def goForward(self) -> None:
        self._history.go_forward()

    @Slot()
    def clear(self) -> None:
        self._history.clear()

    # -------------------------------------------------------------------------
    # PRUNING (called by delete / move flows)
    # -------------------------------------------------------------------------

    @Slot(str)
    def onFileRemoved(self, path: str):
        self._history.remove_entries_for_file(path)

    @Slot(str)
    def onFolderRemoved(self, path: str):
        self._history.remove_entries_for_folder(path)

    @Slot(str, str)
    def onFileMoved(self, old_path: str, new_path: str):
        self._history.remove_entries_for_file(old_path)

    @Slot(str, str)
    def onFolderMoved(self, old_path: str, new_path: str):
        self._history.remove_entries_for_folder(old_path)

    # -------------------------------------------------------------------------
    # INTERNAL
    # -------------------------------------------------------------------------

    @Slot()
    def _on_config_changed(self):
        self._history.set_max_size(self._settings.max_size())

    @Slot()
    def _sync_state(self):
        can_go_back = self._history.can_go_back
        if can_go_back != self._can_go_back:
            self._can_go_back = can_go_back
            self.canGoBackChanged.emit()

        can_go_forward = self._history.can_go_forward
        if can_go_forward != self._can_go_forward:
            self._can_go_forward = can_go_forward
            self.canGoForwardChanged.emit()

        current = self._history.current_location or ""
        if current != self._current_location:
            self._current_location = current
            self.currentLocationChanged.emit(current)
