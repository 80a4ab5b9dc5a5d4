from __future__ import annotations

from typing import List
from PySide6 import QtWidgets

from ..widgets.inputs import LabeledNumber, UnitCombo
from ..widgets.results import QuantityCard
from ..service import Debounce
from ..state import UIState
from ... import api
from ...properties import BaseProperty, convertible_properties
from ...units import Unit, units_of


class ConvertTab(QtWidgets.QWidget):
    def __init__(self, state: UIState, parent=None):
        super().__init__(parent)
        self.state = state
        self._debounce = Debounce(200)
        self._debounce.triggered.connect(self.on_convert)
        self._build_ui()

    def _build_ui(self):
        layout = QtWidgets.QHBoxLayout(self)
        left = QtWidgets.QVBoxLayout()
        right = QtWidgets.QVBoxLayout()

        self.prop = QtWidgets.QComboBox()
        self.prop.addItems([p.name for p in BaseProperty])
        self.prop.setCurrentText(self.state.base_property)
        self.magnitude = LabeledNumber("Value", 1.0)
        self.from_unit = UnitCombo()
        self.to_unit = UnitCombo()

        form = QtWidgets.QFormLayout()
        form.addRow("Property", self.prop)
        form.addRow(self.magnitude)
        form.addRow("From", self.from_unit)
        form.addRow("To", self.to_unit)
        left.addLayout(form)
        left.addStretch(1)

        self.card_result = QuantityCard("Result")
        self.card_si = QuantityCard("SI pivot")
        self.error = QtWidgets.QLabel("")
        right.addWidget(self.card_result)
        right.addWidget(self.card_si)
        right.addWidget(self.error)
        right.addStretch(1)

        layout.addLayout(left)
        layout.addLayout(right)

        self.prop.currentTextChanged.connect(self.on_property)
        self.magnitude.edit.textChanged.connect(lambda _: self._debounce.pulse())
        self.from_unit.currentIndexChanged.connect(lambda _: self._debounce.pulse())
        self.to_unit.currentIndexChanged.connect(lambda _: self._debounce.pulse())
        self.on_property(self.prop.currentText())

    def on_property(self, name: str):
        prop = BaseProperty[name]
        self.state.base_property = name
        self.from_unit.set_units(units_of(prop), select=prop.si_unit)
        # cross-kind targets too (s -> Hz)
        targets: List[Unit] = [u for q in convertible_properties(prop) for u in units_of(q)]
        self.to_unit.set_units(targets, select=prop.si_unit)
        self._debounce.pulse()

    def on_convert(self):
        try:
            data = api.convert_quantity({
                "magnitude": self.magnitude.value(),
                "from_unit": self.from_unit.unit(),
                "to_unit": self.to_unit.unit(),
            })
        except ValueError as e:
            self.error.setText(str(e))
            return
        self.error.setText("")
        self.card_result.set_quantity(data["value"], data["unit"])
        self.card_si.set_quantity(data["si_value"], data["si_unit"])
