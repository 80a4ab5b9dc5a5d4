from __future__ import annotations

import csv
from typing import Any, List, Optional
from PySide6 import QtCore, QtGui
from ..theme import COLORS, THRESHOLDS


class SimpleTableModel(QtCore.QAbstractTableModel):
    """Read-only rows. Score columns are shaded by THRESHOLDS; dimmed rows
    (pruned auto-range candidates) are drawn in the neutral color."""

    def __init__(self, headers: List[str], rows: List[List[Any]], *,
                 score_cols: Optional[List[int]] = None,
                 highlight_row: Optional[int] = None,
                 dimmed_rows: Optional[List[int]] = None):
        super().__init__()
        self.headers = headers
        self.rows = rows
        self.score_cols = set(score_cols or [])
        self.highlight_row = highlight_row
        self.dimmed_rows = set(dimmed_rows or [])

    def rowCount(self, parent=QtCore.QModelIndex()):
        return len(self.rows)

    def columnCount(self, parent=QtCore.QModelIndex()):
        return len(self.headers)

    def _score_color(self, score: float) -> Optional[QtGui.QColor]:
        if score < THRESHOLDS["score_crit"]:
            return QtGui.QColor(COLORS["crit"]).lighter(180)
        if score < THRESHOLDS["score_warn"]:
            return QtGui.QColor(COLORS["warn"]).lighter(180)
        return None

    def data(self, index, role=QtCore.Qt.DisplayRole):
        if not index.isValid():
            return None
        row, col = index.row(), index.column()
        val = self.rows[row][col]
        if role == QtCore.Qt.DisplayRole:
            if val is None:
                return "—"
            return f"{val:.6g}" if isinstance(val, float) else str(val)
        if role == QtCore.Qt.BackgroundRole:
            if row == self.highlight_row:
                return QtGui.QColor(COLORS["winner"]).lighter(180)
            if col in self.score_cols and isinstance(val, float):
                return self._score_color(val)
        if role == QtCore.Qt.ForegroundRole and row in self.dimmed_rows:
            return QtGui.QColor(COLORS["neutral"])
        return None

    def headerData(self, section, orientation, role=QtCore.Qt.DisplayRole):
        if role == QtCore.Qt.DisplayRole and orientation == QtCore.Qt.Horizontal:
            return self.headers[section]
        return None

    def export_csv(self, path: str):
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.headers)
            writer.writerows(["" if v is None else v for v in r] for r in self.rows)
