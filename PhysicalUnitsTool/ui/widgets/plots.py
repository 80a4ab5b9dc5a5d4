from __future__ import annotations

import math
from typing import List, Optional, Sequence, Tuple
from PySide6 import QtCore
import pyqtgraph as pg
from pyqtgraph.exporters import ImageExporter
from ..theme import COLORS


class ScorePlot(QtCore.QObject):
    """Policy score against |magnitude| (log x axis), with candidates and the preferred window."""

    def __init__(self, parent=None):
        super().__init__(parent)
        pg.setConfigOptions(antialias=True)
        self.widget = pg.PlotWidget(background=COLORS["bg"])
        self.widget.setLogMode(x=True, y=False)
        self.widget.showGrid(x=True, y=True, alpha=0.3)
        item = self.widget.getPlotItem()
        for side in ("left", "bottom"):
            item.getAxis(side).setPen(COLORS["neutral"])
        self.widget.setLabel("bottom", "|magnitude|")
        self.widget.setLabel("left", "score")
        self.legend = self.widget.addLegend()

        # readout follows the mouse; x is shown back in linear units
        self._cursor = pg.InfiniteLine(angle=90, movable=False, pen=pg.mkPen(COLORS["grid"]))
        self._cursor.setZValue(10)
        self._readout = pg.TextItem("", color=COLORS["neutral"])  # type: ignore[arg-type]
        self._readout.setAnchor((0, 1))
        self._readout.setZValue(1000)
        self._add_overlays()
        self._mouse_proxy = pg.SignalProxy(self.widget.scene().sigMouseMoved, rateLimit=60, slot=self._on_mouse_moved)

    def _add_overlays(self) -> None:
        self.widget.addItem(self._cursor, ignoreBounds=True)
        self.widget.addItem(self._readout, ignoreBounds=True)

    def _pen(self, token: str, width: int = 1):
        return pg.mkPen(COLORS.get(token, COLORS["neutral"]), width=width)

    def reset(self) -> None:
        self.widget.clear()
        self.legend = self.widget.addLegend()
        self._add_overlays()

    def show_curve(self, name: str, xs: Sequence[float], ys: Sequence[float]) -> None:
        self.widget.plot(list(xs), list(ys), name=name, pen=self._pen("score", 2))

    def show_points(self, name: str, points: List[Tuple[float, float]], token: str, symbol: str = "o") -> None:
        """Scatter (|value|, score) pairs; zero, infinite and NaN entries cannot sit on a log axis."""
        pts = [(x, y) for x, y in points if math.isfinite(x) and x != 0 and math.isfinite(y)]
        if not pts:
            return
        color = COLORS.get(token, COLORS["neutral"])
        self.widget.plot([abs(x) for x, _ in pts], [y for _, y in pts], name=name, pen=None,
                         symbol=symbol, symbolBrush=color, symbolPen=color)

    def show_window(self, lo: float, hi: float) -> None:
        for x in (lo, hi):
            # log axis: positions are log10
            self.widget.addItem(pg.InfiniteLine(pos=math.log10(x), angle=90, movable=False, pen=self._pen("window", 2)))
        zero = pg.InfiniteLine(pos=0.0, angle=0, movable=False, pen=self._pen("warn"),
                               label="in window above", labelOpts={"position": 0.95, "color": COLORS["warn"]})
        self.widget.addItem(zero)

    def export_png(self, path: str) -> None:
        ImageExporter(self.widget.plotItem).export(path)

    def _on_mouse_moved(self, args) -> None:
        pos: Optional[QtCore.QPointF] = args[0] if isinstance(args, (list, tuple)) and args else args
        vb = self.widget.plotItem.vb
        if vb is None or pos is None:
            return
        p = vb.mapSceneToView(pos)
        self._cursor.setPos(p.x())
        self._readout.setText(f"|x|={10 ** p.x():.4g}  score={p.y():.4g}")
        (x0, _), (_, y1) = vb.viewRange()
        self._readout.setPos(x0, y1)
