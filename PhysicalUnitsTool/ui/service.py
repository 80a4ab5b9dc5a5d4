from __future__ import annotations

from PySide6 import QtCore


class Debounce(QtCore.QObject):
    """Collapse bursts of edits into one trigger after `ms` of quiet."""
    triggered = QtCore.Signal()
    def __init__(self, ms: int = 200):
        super().__init__()
        self.timer = QtCore.QTimer(self)
        self.timer.setInterval(ms)
        self.timer.setSingleShot(True)
        self.timer.timeout.connect(self.triggered)

    def pulse(self):
        self.timer.start()
