from __future__ import annotations

from PySide6 import QtWidgets

from ..widgets.tables import SimpleTableModel
from ..state import UIState
from ... import api
from ...properties import BaseProperty


class CatalogTab(QtWidgets.QWidget):
    def __init__(self, state: UIState, parent=None):
        super().__init__(parent)
        self.state = state
        layout = QtWidgets.QVBoxLayout(self)
        self.prop = QtWidgets.QComboBox()
        self.prop.addItems(["(all)"] + [p.name for p in BaseProperty])
        self.table = QtWidgets.QTableView()
        self.btn_export_csv = QtWidgets.QPushButton("Export CSV")
        layout.addWidget(self.prop)
        layout.addWidget(self.table)
        layout.addWidget(self.btn_export_csv)
        self.prop.currentTextChanged.connect(self.on_refresh)
        self.btn_export_csv.clicked.connect(self.on_export_csv)
        self.on_refresh(self.prop.currentText())

    def on_refresh(self, name: str):
        listing = api.list_units(None if name == "(all)" else name)
        headers = ["Property", "Name", "Symbol", "SI", "Multiplicative"]
        rows = [[e["base_property"], e["name"], e["symbol"], "yes" if e["si_unit"] else "", "yes" if e["multiplicative"] else "no"]
                for entries in listing.values() for e in entries]
        self.table.setModel(SimpleTableModel(headers, rows))

    def on_export_csv(self):
        path, _ = QtWidgets.QFileDialog.getSaveFileName(self, "Export catalog", "units.csv", "CSV Files (*.csv)")
        if path:
            self.table.model().export_csv(path)
