from __future__ import annotations

from typing import Dict, Optional

from PyQt5 import QtCore, QtWidgets

from ..config import CONFIG
from ..projection.summary import NationalSummary


class NationalSummaryPanel(QtWidgets.QFrame):
    """Three national totals, shown exactly as published in the dataset."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        pal = CONFIG.palette
        self.setStyleSheet(
            f"QFrame {{ background: {pal.panel}; border: 1px solid {pal.panel_border}; "
            f"border-radius: 6px; }} QLabel {{ border: none; background: transparent; }}"
        )
        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(10, 6, 10, 6)
        layout.setSpacing(18)

        self._values: Dict[str, QtWidgets.QLabel] = {}
        for key, title, color in (
            ("under_review", "Under review (10 MW)", pal.under_review),
            ("contracted", "Contracted (10 MW)", pal.contracted),
            ("connected", "Connected (10 MW)", pal.connected),
        ):
            box = QtWidgets.QVBoxLayout()
            box.setSpacing(0)
            t = QtWidgets.QLabel(title)
            t.setStyleSheet(f"color: {pal.text_muted}; font-size: 11px;")
            v = QtWidgets.QLabel("–")
            v.setStyleSheet(f"color: {color}; font-size: 20px; font-weight: 700;")
            v.setAlignment(QtCore.Qt.AlignLeft | QtCore.Qt.AlignVCenter)
            box.addWidget(t)
            box.addWidget(v)
            layout.addLayout(box)
            self._values[key] = v
        layout.addStretch(1)

    def set_summary(self, summary: NationalSummary) -> None:
        self._values["under_review"].setText(summary.under_review_text)
        self._values["contracted"].setText(summary.contracted_text)
        self._values["connected"].setText(summary.connected_text)

    def value_text(self, key: str) -> str:
        return self._values[key].text()
