"""
Timeline chart — pyqtgraph rendering of :mod:`gridconn.projection.timeline`.

The plot runs in the projector's pixel space: the view box is pinned to
``[0, width] × [0, height]`` with y inverted, so projected coordinates are
drawn as-is.  Axis ticks come from the projector too.  Geometry is
recomputed whenever the widget is resized.
"""
from __future__ import annotations

import logging
from typing import Optional, Sequence

import pyqtgraph as pg
from PyQt5 import QtCore, QtWidgets

from ..config import CONFIG
from ..model import Timeline
from ..projection.timeline import TimelineGeometry, project_timeline

log = logging.getLogger(__name__)


class TimelineChartWidget(pg.PlotWidget):
    """Line + dot chart of the national under-review total over time."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent=parent)
        self._labels: Sequence[str] = ()
        self._values: Sequence[float] = ()
        self._geometry: Optional[TimelineGeometry] = None

        self.setMenuEnabled(False)
        self.hideButtons()
        self.setMouseEnabled(x=False, y=False)
        self.getViewBox().invertY(True)
        self.showGrid(x=False, y=True, alpha=0.15)
        self.setMinimumHeight(140)

        color = CONFIG.palette.under_review
        self._line = pg.PlotDataItem(pen=pg.mkPen(color, width=2))
        self._dots = pg.ScatterPlotItem(
            size=CONFIG.timeline.dot_radius * 2,
            pen=pg.mkPen(color, width=1),
            brush=pg.mkBrush(color),
        )
        self.addItem(self._line)
        self.addItem(self._dots)

    @property
    def geometry_model(self) -> Optional[TimelineGeometry]:
        return self._geometry

    def set_timeline(self, timeline: Timeline) -> None:
        self._labels = timeline.labels
        self._values = timeline.total_under_review
        self._redraw()

    def _inner_size(self):
        tl = CONFIG.timeline
        width = self.width() - tl.margin_left - tl.margin_right
        height = self.height() - tl.margin_top - tl.margin_bottom
        return max(width, 1.0), max(height, 1.0)

    def _redraw(self) -> None:
        width, height = self._inner_size()
        geom = project_timeline(self._labels, self._values, width, height)
        self._geometry = geom

        if geom.is_empty:
            self._line.setData([], [])
            self._dots.setData([], [])
            self.getAxis("bottom").setTicks([[]])
            self.getAxis("left").setTicks([[]])
            log.debug("Timeline empty, chart cleared")
            return

        xs, ys = geom.sample_line()
        self._line.setData(xs, ys)
        self._dots.setData([p.x for p in geom.points], [p.y for p in geom.points])
        self.getAxis("bottom").setTicks([[(t.position, t.label) for t in geom.x_ticks]])
        self.getAxis("left").setTicks([[(t.position, t.label) for t in geom.y_ticks]])
        self.setRange(
            xRange=(0, geom.width), yRange=(0, geom.height), padding=0.02,
        )

    def resizeEvent(self, event):
        super().resizeEvent(event)
        # GraphicsView.__init__ calls resizeEvent(None) before our attributes exist
        if getattr(self, "_labels", ()):
            self._redraw()

    def sizeHint(self) -> QtCore.QSize:
        return QtCore.QSize(420, 180)
