"""
Region detail panel.

Displays a :class:`~gridconn.projection.summary.RegionDetail` document:
VRE ratio and curtailment (red when elevated), the three battery statuses
with their comparison bar, renewable application counts and the free-text
characteristics.  An unresolved document shows the placeholder prompt.
"""
from __future__ import annotations

import html
import logging
from typing import Optional

from PyQt5 import QtCore, QtWidgets

from ..config import CONFIG
from ..projection.summary import ComparisonBar, RegionDetail

log = logging.getLogger(__name__)


class ComparisonBarWidget(QtWidgets.QWidget):
    """Stacked horizontal bar; segment widths are percentages of the bar."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.setFixedHeight(10)
        self._bar = ComparisonBar()
        pal = CONFIG.palette
        self._segments = []
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        for color in (pal.under_review, pal.contracted, pal.connected):
            seg = QtWidgets.QFrame()
            seg.setStyleSheet(f"background: {color}; border: none;")
            layout.addWidget(seg)
            self._segments.append(seg)
        self._spacer = QtWidgets.QWidget()
        layout.addWidget(self._spacer)
        self.set_bar(self._bar)

    @property
    def bar(self) -> ComparisonBar:
        return self._bar

    def set_bar(self, bar: ComparisonBar) -> None:
        self._bar = bar
        layout = self.layout()
        # Stretch factors in tenths of a percent; an empty bar is all spacer
        widths = (bar.under_review, bar.contracted, bar.connected)
        for i, (seg, width) in enumerate(zip(self._segments, widths)):
            stretch = int(round(width * 10))
            layout.setStretch(i, stretch)
            seg.setVisible(stretch > 0)
        layout.setStretch(3, 1000 if bar.is_empty else 0)
        self._spacer.setVisible(bar.is_empty)


class RegionDetailPanel(QtWidgets.QFrame):
    """Detail view for the selected region."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        pal = CONFIG.palette
        self._detail: Optional[RegionDetail] = None
        self.setStyleSheet(
            f"QFrame {{ background: {pal.panel}; border: 1px solid {pal.panel_border}; "
            f"border-radius: 6px; }} QLabel {{ border: none; background: transparent; "
            f"color: {pal.text}; }}"
        )

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(12, 10, 12, 10)
        layout.setSpacing(6)

        self._placeholder = QtWidgets.QLabel()
        self._placeholder.setWordWrap(True)
        self._placeholder.setStyleSheet(f"color: {pal.text_muted}; font-style: italic;")
        layout.addWidget(self._placeholder)

        self._body = QtWidgets.QWidget()
        body = QtWidgets.QVBoxLayout(self._body)
        body.setContentsMargins(0, 0, 0, 0)
        body.setSpacing(6)

        self._title = QtWidgets.QLabel()
        self._title.setTextFormat(QtCore.Qt.PlainText)
        self._title.setStyleSheet("font-size: 16px; font-weight: 700;")
        body.addWidget(self._title)

        self._stats = QtWidgets.QLabel()
        self._stats.setTextFormat(QtCore.Qt.RichText)
        body.addWidget(self._stats)

        self._bar = ComparisonBarWidget()
        body.addWidget(self._bar)

        self._renewables = QtWidgets.QLabel()
        self._renewables.setTextFormat(QtCore.Qt.RichText)
        body.addWidget(self._renewables)

        self._characteristics = QtWidgets.QLabel()
        self._characteristics.setWordWrap(True)
        self._characteristics.setTextFormat(QtCore.Qt.RichText)
        body.addWidget(self._characteristics)
        body.addStretch(1)

        layout.addWidget(self._body, 1)
        self.set_detail(RegionDetail(found=False))

    @property
    def detail(self) -> Optional[RegionDetail]:
        return self._detail

    @property
    def showing_placeholder(self) -> bool:
        return self._body.isHidden()

    def set_detail(self, detail: RegionDetail) -> None:
        self._detail = detail
        if not detail.found:
            self._placeholder.setText(detail.placeholder)
            self._placeholder.show()
            self._body.hide()
            return

        pal = CONFIG.palette
        curtail_color = pal.curtailment_elevated if detail.curtailment_elevated else pal.curtailment_normal
        self._placeholder.hide()
        self._body.show()
        self._title.setText(detail.title)
        self._stats.setText(
            "<table cellspacing='6'>"
            f"<tr><td>VRE ratio</td><td style='color:{pal.vre}; font-size:15px;'><b>{detail.vre_text}</b></td>"
            f"<td>Curtailment</td><td style='color:{curtail_color}; font-size:15px;'><b>{detail.curtailment_text}</b></td></tr>"
            f"<tr><td>Under review</td><td style='color:{pal.under_review};'><b>{detail.under_review_text}</b></td>"
            f"<td>Contracted</td><td style='color:{pal.contracted};'><b>{detail.contracted_text}</b></td></tr>"
            f"<tr><td>Connected</td><td style='color:{pal.connected};'><b>{detail.connected_text}</b></td>"
            "<td colspan='2' style='color:#7a8aa0;'>battery capacity, 10 MW</td></tr>"
            "</table>"
        )
        self._bar.set_bar(detail.bar)
        self._renewables.setText(
            "Renewable applications: "
            f"<span style='color:{pal.solar};'>solar <b>{detail.solar_text}</b></span> · "
            f"<span style='color:{pal.wind};'>wind <b>{detail.wind_text}</b></span>"
        )
        self._characteristics.setText(
            f"<b>Characteristics:</b><br>{html.escape(detail.characteristics)}"
        )
