from __future__ import annotations

from PySide6 import QtWidgets

from .state import UIState
from .tabs.convert_tab import ConvertTab
from .tabs.autorange_tab import AutoRangeTab
from .tabs.catalog_tab import CatalogTab


class App(QtWidgets.QMainWindow):
    def __init__(self):
        super().__init__()
        self.setWindowTitle("PhysicalUnitsTool")
        self.state = UIState()
        tabs = QtWidgets.QTabWidget()
        tabs.addTab(ConvertTab(self.state), "Convert")
        tabs.addTab(AutoRangeTab(self.state), "Auto-Range")
        tabs.addTab(CatalogTab(self.state), "Catalog")
        self.setCentralWidget(tabs)
