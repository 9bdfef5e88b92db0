"""
History Settings — Navigation Configuration

Features:
- QSettings persistence
- Single tunable: maxSize (entries kept in the back/forward stack)
"""

from PySide6.QtCore import QObject, Signal, QSettings
from typing import Optional

from core.location_history import DEFAULT_MAX_SIZE


class HistorySettings(QObject):
    """
    Reads and writes the history bound.
    Invalid stored values fall back to the default.
    """

    # Emitted when configuration changes (e.g. from Settings Dialog)
    configChanged = Signal()

    def __init__(self, settings: Optional[QSettings] = None, parent=None):
        super().__init__(parent)
        self._settings = settings if settings is not None else QSettings("Locus", "Navigation")
        self._max_size = DEFAULT_MAX_SIZE
        self.load()

    # -------------------------------------------------------------------------
    # PUBLIC API
    # -------------------------------------------------------------------------

    def max_size(self) -> int:
        return self._max_size

    def set_max_size(self, value: int):
        """Change and persist the bound."""
        if value < 1:
            raise ValueError(f"maxSize must be a positive integer, got {value}")
        if value == self._max_size:
            return
        self._max_size = value
        self.save()
        self.configChanged.emit()

    def reset(self):
        """Back to the default bound."""
        self.set_max_size(DEFAULT_MAX_SIZE)

    def save(self):
        """Persist current settings to QSettings."""
        self._settings.beginGroup("History")
        self._settings.setValue("maxSize", self._max_size)
        self._settings.endGroup()
        self._settings.sync()

    def load(self):
        """Load settings from QSettings."""
        self._settings.beginGroup("History")
        stored = self._settings.value("maxSize")
        self._settings.endGroup()

        if stored is None:
            return
        try:
            value = int(stored)
        except (TypeError, ValueError):
            print(f"[Settings] Ignoring invalid History/maxSize: {stored!r}")
            return
        if value < 1:
            print(f"[Settings] Ignoring non-positive History/maxSize: {value}")
            return
        self._max_size = value
