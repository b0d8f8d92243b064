"""
Area card strip: one clickable card per region, in dataset order.

Cards show the VRE ratio and the three capacity figures; clicking a card
emits ``region_activated`` with the region id.  Exactly one card (or none)
is highlighted at a time, driven by :meth:`AreaCardStrip.highlight_region`.
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from PyQt5 import QtCore, QtWidgets

from ..config import CONFIG
from ..model import Region
from ..projection.summary import AreaCard, project_area_card

log = logging.getLogger(__name__)

_CARD_SS = (
    "QFrame#areaCard {{ background: {bg}; border: {width}px solid {border}; border-radius: 6px; }}"
    "QLabel {{ background: transparent; color: {text}; }}"
)


class AreaCardWidget(QtWidgets.QFrame):
    """One region card."""

    clicked = QtCore.pyqtSignal(str)

    def __init__(self, card: AreaCard, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.card = card
        self._active = False
        pal = CONFIG.palette
        self.setObjectName("areaCard")
        self.setCursor(QtCore.Qt.PointingHandCursor)
        self._apply_style()

        grid = QtWidgets.QGridLayout(self)
        grid.setContentsMargins(8, 6, 8, 6)
        grid.setHorizontalSpacing(10)
        grid.setVerticalSpacing(2)

        name = QtWidgets.QLabel(card.name)
        name.setStyleSheet("font-weight: 600; font-size: 13px;")
        grid.addWidget(name, 0, 0, 1, 2)

        rows = (
            ("VRE", card.vre_text, pal.vre, "Variable renewable energy ratio"),
            ("Review", card.under_review_text, pal.under_review, "Battery connections under review (10 MW)"),
            ("Contract", card.contracted_text, pal.contracted, "Battery connections contracted (10 MW)"),
            ("Online", card.connected_text, pal.connected, "Batteries in operation (10 MW)"),
        )
        for row, (label, value, color, tip) in enumerate(rows, start=1):
            lbl = QtWidgets.QLabel(label)
            lbl.setStyleSheet(f"color: {pal.text_muted}; font-size: 11px;")
            val = QtWidgets.QLabel(value)
            val.setAlignment(QtCore.Qt.AlignRight | QtCore.Qt.AlignVCenter)
            val.setStyleSheet(f"color: {color}; font-size: 12px; font-weight: 600;")
            lbl.setToolTip(tip)
            val.setToolTip(tip)
            grid.addWidget(lbl, row, 0)
            grid.addWidget(val, row, 1)

    @property
    def region_id(self) -> str:
        return self.card.region_id

    @property
    def is_active(self) -> bool:
        return self._active

    def set_active(self, active: bool) -> None:
        if active == self._active:
            return
        self._active = active
        self._apply_style()

    def _apply_style(self) -> None:
        pal = CONFIG.palette
        self.setStyleSheet(_CARD_SS.format(
            bg=pal.panel,
            width=2 if self._active else 1,
            border=pal.highlight if self._active else pal.panel_border,
            text=pal.text,
        ))

    def mousePressEvent(self, event):
        if event.button() == QtCore.Qt.LeftButton:
            self.clicked.emit(self.card.region_id)
            event.accept()
            return
        super().mousePressEvent(event)


class AreaCardStrip(QtWidgets.QScrollArea):
    """Horizontally scrolling row of area cards.

    Signals
    -------
    region_activated(str)
        Emitted when a card is clicked (region id).
    """

    region_activated = QtCore.pyqtSignal(str)

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self._cards: Dict[str, AreaCardWidget] = {}
        self._order: List[str] = []
        self._active_region: Optional[str] = None

        self.setWidgetResizable(True)
        self.setFrameShape(QtWidgets.QFrame.NoFrame)
        self.setVerticalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        self.setHorizontalScrollBarPolicy(QtCore.Qt.ScrollBarAsNeeded)

        self._container = QtWidgets.QWidget()
        self._row = QtWidgets.QHBoxLayout(self._container)
        self._row.setContentsMargins(4, 4, 4, 4)
        self._row.setSpacing(6)
        self._row.addStretch(1)
        self.setWidget(self._container)

    # ── Population ────────────────────────────────────────────────────

    def set_regions(self, regions: Sequence[Region]) -> None:
        """Rebuild every card from scratch, keeping the current highlight."""
        for card in self._cards.values():
            self._row.removeWidget(card)
            card.deleteLater()
        self._cards.clear()
        self._order.clear()

        for region in regions:
            card = AreaCardWidget(project_area_card(region), self._container)
            card.clicked.connect(self.region_activated)
            # Insert before the trailing stretch
            self._row.insertWidget(self._row.count() - 1, card)
            self._cards[region.id] = card
            self._order.append(region.id)

        self.highlight_region(self._active_region)
        log.debug("Area cards built: %d", len(self._cards))

    # ── Highlight ─────────────────────────────────────────────────────

    def highlight_region(self, region_id: Optional[str]) -> None:
        """Clear every card, then highlight the one for *region_id* (if any)."""
        self._active_region = region_id
        for card in self._cards.values():
            card.set_active(False)
        card = self._cards.get(region_id) if region_id is not None else None
        if card is not None:
            card.set_active(True)
            self.ensureWidgetVisible(card, 40, 0)

    def active_region_ids(self) -> List[str]:
        return [rid for rid in self._order if self._cards[rid].is_active]

    def card(self, region_id: str) -> Optional[AreaCardWidget]:
        return self._cards.get(region_id)

    @property
    def region_ids(self) -> List[str]:
        return list(self._order)
