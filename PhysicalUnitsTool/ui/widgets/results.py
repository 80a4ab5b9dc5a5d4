from __future__ import annotations

from PySide6 import QtWidgets, QtGui
from ..theme import COLORS, THRESHOLDS


class QuantityCard(QtWidgets.QFrame):
    """A magnitude with its unit symbol; optionally badged by its auto-range score."""

    BADGES = {"ok": "IN WINDOW", "warn": "OUT", "crit": "FAR OUT"}

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setObjectName("QuantityCard")
        self.setFrameShape(QtWidgets.QFrame.StyledPanel)
        self.title = QtWidgets.QLabel(title)
        self.quantity = QtWidgets.QLabel("—")
        font = self.quantity.font()
        font.setPointSizeF(font.pointSizeF() * 1.6)
        self.quantity.setFont(font)
        self.badge = QtWidgets.QLabel("")
        layout = QtWidgets.QVBoxLayout(self)
        for w in (self.title, self.quantity, self.badge):
            layout.addWidget(w)

    def set_quantity(self, value: float, symbol: str = "", score: float | None = None):
        self.quantity.setText(f"{value:.6g} {symbol}".rstrip())
        if score is None:
            level = ""
        elif score < THRESHOLDS["score_crit"]:
            level = "crit"
        elif score < THRESHOLDS["score_warn"]:
            level = "warn"
        else:
            level = "ok"
        self.badge.setText(self.BADGES.get(level, ""))
        pal = self.badge.palette()
        pal.setColor(QtGui.QPalette.WindowText, QtGui.QColor(COLORS.get(level, COLORS["neutral"])))
        self.badge.setPalette(pal)
