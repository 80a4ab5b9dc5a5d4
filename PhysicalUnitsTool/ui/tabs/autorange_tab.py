from __future__ import annotations

from typing import List
from PySide6 import QtCore, QtWidgets

from ..widgets.inputs import LabeledNumber, UnitCombo
from ..widgets.plots import ScorePlot
from ..widgets.results import QuantityCard
from ..widgets.tables import SimpleTableModel
from ..state import UIState
from ... import api
from ...autorange import AutoRangePolicy, score_magnitude
from ...properties import BaseProperty, convertible_properties
from ...units import Unit, units_of


def score_curve(policy: AutoRangePolicy, decades: tuple[int, int] = (-5, 5), per_decade: int = 40):
    """Sample score_magnitude over log-spaced |x| for the plot."""
    lo, hi = decades
    xs = [10 ** (lo + i / per_decade) for i in range((hi - lo) * per_decade + 1)]
    return xs, [score_magnitude(policy, x) for x in xs]


class AutoRangeTab(QtWidgets.QWidget):
    def __init__(self, state: UIState, parent=None):
        super().__init__(parent)
        self.state = state
        self._build_ui()

    def _build_ui(self) -> None:
        layout = QtWidgets.QHBoxLayout(self)
        left = QtWidgets.QVBoxLayout()
        right = QtWidgets.QVBoxLayout()

        self.policy = QtWidgets.QComboBox()
        self.policy.addItems(list(AutoRangePolicy.__members__))
        self.policy.setCurrentText(self.state.policy)
        self.prop = QtWidgets.QComboBox()
        self.prop.addItems([p.name for p in BaseProperty])
        self.prop.setCurrentText(self.state.base_property)
        self.magnitude = LabeledNumber("Value", 0.0045)
        self.from_unit = UnitCombo()
        self.candidates = QtWidgets.QListWidget()
        self.strict = QtWidgets.QCheckBox("Same property only")
        self.strict.setChecked(self.state.strict_property)
        self.round = QtWidgets.QCheckBox("Round before scoring")
        self.round.setChecked(self.state.round_magnitude)
        self.btn = QtWidgets.QPushButton("Auto-range")

        form = QtWidgets.QFormLayout()
        form.addRow("Policy", self.policy)
        form.addRow("Property", self.prop)
        form.addRow(self.magnitude)
        form.addRow("From", self.from_unit)
        left.addLayout(form)
        left.addWidget(QtWidgets.QLabel("Candidates (checked, in order)"))
        left.addWidget(self.candidates)
        left.addWidget(self.strict)
        left.addWidget(self.round)
        left.addWidget(self.btn)

        self.card = QuantityCard("Best unit")
        self.table = QtWidgets.QTableView()
        self.plot = ScorePlot()
        self.btn_export = QtWidgets.QPushButton("Save plot PNG")
        right.addWidget(self.card)
        right.addWidget(self.table)
        right.addWidget(self.plot.widget)
        right.addWidget(self.btn_export)

        layout.addLayout(left, 1)
        layout.addLayout(right, 2)

        self.prop.currentTextChanged.connect(self.on_property)
        self.policy.currentTextChanged.connect(lambda _: self.on_autorange())
        self.btn.clicked.connect(self.on_autorange)
        self.btn_export.clicked.connect(self.on_export)
        self.on_property(self.prop.currentText())

    def on_property(self, name: str) -> None:
        prop = BaseProperty[name]
        self.state.base_property = name
        self.from_unit.set_units(units_of(prop), select=prop.si_unit)
        self.candidates.clear()
        for q in convertible_properties(prop):
            for u in units_of(q):
                item = QtWidgets.QListWidgetItem(u.symbol or "(none)")
                item.setData(QtCore.Qt.UserRole, u)
                item.setFlags(item.flags() | QtCore.Qt.ItemIsUserCheckable)
                checked = q is prop and u.is_multiplicative
                item.setCheckState(QtCore.Qt.Checked if checked else QtCore.Qt.Unchecked)
                self.candidates.addItem(item)
        self.on_autorange()

    def _checked_units(self) -> List[Unit]:
        out: List[Unit] = []
        for i in range(self.candidates.count()):
            item = self.candidates.item(i)
            if item.checkState() == QtCore.Qt.Checked:
                out.append(item.data(QtCore.Qt.UserRole))
        return out

    def on_autorange(self) -> None:
        self.state.policy = self.policy.currentText()
        self.state.strict_property = self.strict.isChecked()
        self.state.round_magnitude = self.round.isChecked()
        try:
            data = api.auto_range_quantity({
                "magnitude": self.magnitude.value(),
                "from_unit": self.from_unit.unit(),
                "candidates": self._checked_units(),
                "policy": self.state.policy,
                "strict_property": self.state.strict_property,
                "round_magnitude": self.state.round_magnitude,
                "include_scores": True,
            })
        except ValueError as e:
            QtWidgets.QMessageBox.warning(self, "Auto-range", str(e))
            return

        scores = data["scores"]
        winner_row = next((i for i, s in enumerate(scores) if s["unit"] == data["unit"]), None)
        self.card.set_quantity(data["value"], data["unit"], scores[winner_row]["score"] if winner_row is not None else None)
        headers = ["Unit", "Value", "Score", "Kept"]
        rows = [[s["unit"] or "(none)", s["value"], s["score"], "yes" if s["kept"] else "pruned"] for s in scores]
        pruned = [i for i, s in enumerate(scores) if not s["kept"]]
        self.table.setModel(SimpleTableModel(headers, rows, score_cols=[2], highlight_row=winner_row, dimmed_rows=pruned))

        policy = AutoRangePolicy[self.state.policy]
        xs, ys = score_curve(policy)
        self.plot.reset()
        self.plot.show_curve(policy.name, xs, ys)
        self.plot.show_points("candidates", [(s["value"], s["score"]) for s in scores], "origin")
        if winner_row is not None:
            self.plot.show_points("winner", [(data["value"], scores[winner_row]["score"])], "winner", symbol="star")
        self.plot.show_window(*policy.window)

    def on_export(self) -> None:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Save plot", "autorange.png", "PNG Files (*.png)")
        if path:
            self.plot.export_png(path)
