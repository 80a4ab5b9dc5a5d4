from __future__ import annotations

from typing import Iterable, Optional
from PySide6 import QtGui, QtWidgets

from ...units import Unit


class LabeledNumber(QtWidgets.QWidget):
    """Label + free-text float field (scientific notation allowed, unlike QDoubleSpinBox)."""

    def __init__(self, label: str, value: float = 0.0, parent=None):
        super().__init__(parent)
        layout = QtWidgets.QHBoxLayout(self)
        self.lbl = QtWidgets.QLabel(label)
        self.edit = QtWidgets.QLineEdit(f"{value:g}")
        validator = QtGui.QDoubleValidator(self)
        validator.setNotation(QtGui.QDoubleValidator.ScientificNotation)
        self.edit.setValidator(validator)
        layout.addWidget(self.lbl)
        layout.addWidget(self.edit)

    def value(self) -> float:
        return float(self.edit.text().replace(",", ".") or 0.0)

    def setValue(self, v: float):
        self.edit.setText(f"{v:g}")


class UnitCombo(QtWidgets.QComboBox):
    """Combo of units showing display symbols; the Unit is kept as item data."""

    def __init__(self, units: Iterable[Unit] = (), parent=None):
        super().__init__(parent)
        self.set_units(units)

    def set_units(self, units: Iterable[Unit], select: Optional[Unit] = None):
        self.blockSignals(True)
        self.clear()
        for u in units:
            self.addItem(u.symbol or "(none)", u)
        if select is not None:
            idx = self.findData(select)
            if idx >= 0:
                self.setCurrentIndex(idx)
        self.blockSignals(False)

    def unit(self) -> Optional[Unit]:
        return self.currentData()
