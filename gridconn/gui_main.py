"""
Grid Connection Map — battery storage grid-connection dashboard.

Built with PyQt5 + pyqtgraph.

Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │  load_dataset (JSON file or URL, one attempt)            │
    │    └──▶ AppState.load ── scale + layers ── dataset_replaced
    │                                                          │
    │  RegionMapWidget.region_activated ─┐                     │
    │  AreaCardStrip.region_activated ───┴─▶ SelectionController
    │      ├── selection_changed ──▶ map + cards highlight     │
    │      ├── focus_requested   ──▶ map fly-to                │
    │      └── detail_changed    ──▶ RegionDetailPanel         │
    └──────────────────────────────────────────────────────────┘
"""
from __future__ import annotations

import argparse
import logging
import os
import signal
import sys
from pathlib import Path
from typing import List, Optional

# Force pyqtgraph to use PyQt5 (not PySide6 which may also be installed)
os.environ["PYQTGRAPH_QT_LIB"] = "PyQt5"

import pyqtgraph as pg
import requests
from PyQt5 import QtCore, QtGui, QtWidgets

from . import __version__
from .config import CONFIG, DATA_ENV_VAR, resolve_data_location
from .gui.area_cards import AreaCardStrip
from .gui.detail_panel import RegionDetailPanel
from .gui.map_widget import RegionMapWidget
from .gui.summary_panel import NationalSummaryPanel
from .gui.timeline_chart import TimelineChartWidget
from .ingest.battery_client import load_dataset
from .logger import setup_logging
from .model import Dataset
from .projection.summary import RegionDetail, project_national
from .selection import SelectionController
from .state import AppState

log = logging.getLogger(__name__)


class MainWindow(QtWidgets.QMainWindow):
    """Map on the left, national figures + detail + timeline on the right,
    area cards along the bottom."""

    def __init__(self, state: AppState, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self.state = state
        self.controller = SelectionController(state, self)

        self.setWindowTitle("Battery Grid Connection Map")
        self.resize(1400, 860)
        pal = CONFIG.palette
        self.setStyleSheet(f"""
            QMainWindow, QWidget {{ background: #060a10; color: {pal.text}; }}
            QSplitter::handle {{ background: #0c1a2e; }}
            QScrollBar:horizontal {{ height: 8px; background: #060a10; }}
            QScrollBar::handle:horizontal {{ background: {pal.panel_border}; }}
        """)

        self._build_ui()
        self._connect_signals()

        if state.is_loaded:
            self._on_dataset_replaced(state.dataset)

    # --- UI construction ---

    def _build_ui(self) -> None:
        self.map_widget = RegionMapWidget()
        self.summary_panel = NationalSummaryPanel()
        self.detail_panel = RegionDetailPanel()
        self.timeline_chart = TimelineChartWidget()
        self.card_strip = AreaCardStrip()
        self.card_strip.setFixedHeight(120)

        timeline_title = QtWidgets.QLabel("Under review nationwide (10 MW)")
        timeline_title.setStyleSheet(
            f"color: {CONFIG.palette.text_muted}; font-size: 11px; font-weight: 600;"
        )

        right = QtWidgets.QWidget()
        rl = QtWidgets.QVBoxLayout(right)
        rl.setContentsMargins(6, 6, 6, 6)
        rl.setSpacing(8)
        rl.addWidget(self.summary_panel)
        rl.addWidget(self.detail_panel, 1)
        rl.addWidget(timeline_title)
        rl.addWidget(self.timeline_chart)

        hsplit = QtWidgets.QSplitter(QtCore.Qt.Horizontal)
        hsplit.addWidget(self.map_widget)
        hsplit.addWidget(right)
        hsplit.setStretchFactor(0, 3)
        hsplit.setStretchFactor(1, 2)

        central = QtWidgets.QWidget()
        cl = QtWidgets.QVBoxLayout(central)
        cl.setContentsMargins(0, 0, 0, 0)
        cl.setSpacing(0)
        cl.addWidget(hsplit, 1)
        cl.addWidget(self.card_strip)
        self.setCentralWidget(central)

        self._status = QtWidgets.QLabel()
        self._status.setStyleSheet(f"color: {CONFIG.palette.text_muted}; font-size: 11px;")
        self.statusBar().addWidget(self._status, 1)

    def _connect_signals(self) -> None:
        self.state.dataset_replaced.connect(self._on_dataset_replaced)

        self.map_widget.region_activated.connect(
            lambda rid: self.controller.select_region(rid, source="map")
        )
        self.card_strip.region_activated.connect(
            lambda rid: self.controller.select_region(rid, source="card")
        )

        self.controller.selection_changed.connect(self.map_widget.highlight_region)
        self.controller.selection_changed.connect(self.card_strip.highlight_region)
        self.controller.focus_requested.connect(self.map_widget.focus_on)
        self.controller.detail_changed.connect(self._on_detail_changed)

    # --- Dataset / selection handlers ---

    @QtCore.pyqtSlot(object)
    def _on_dataset_replaced(self, dataset: Dataset) -> None:
        self.map_widget.set_layers(self.state.layers)
        self.card_strip.set_regions(dataset.regions)
        self.summary_panel.set_summary(project_national(dataset.summary))
        self.timeline_chart.set_timeline(dataset.timeline)
        self._status.setText(f"{len(dataset.regions)} areas · {dataset.source}")
        # Views were rebuilt from scratch; put the current selection back on them
        self.controller.refresh()

    @QtCore.pyqtSlot(object)
    def _on_detail_changed(self, detail: RegionDetail) -> None:
        self.detail_panel.set_detail(detail)
        if detail.requested_id is not None and not detail.found:
            self._status.setText(f"No region found: {detail.requested_id}")

    # --- Keyboard shortcuts ---

    def keyPressEvent(self, event: QtGui.QKeyEvent) -> None:
        if event.key() == QtCore.Qt.Key_Escape:
            self.controller.clear_selection()
        elif event.key() == QtCore.Qt.Key_F:
            if self.isFullScreen():
                self.showNormal()
            else:
                self.showFullScreen()
        else:
            super().keyPressEvent(event)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gridconn",
        description="Battery storage grid-connection map dashboard",
    )
    parser.add_argument(
        "--data",
        default=None,
        help=f"Dataset location: JSON file path or http(s) URL "
             f"(default: ${DATA_ENV_VAR}, then the bundled sample)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    parser.add_argument("--log-file", type=Path, default=None, help="Also write logs to this file")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _apply_dark_palette(app: QtWidgets.QApplication) -> None:
    palette = QtGui.QPalette()
    palette.setColor(QtGui.QPalette.Window, QtGui.QColor("#060a10"))
    palette.setColor(QtGui.QPalette.WindowText, QtGui.QColor("#c0d0e0"))
    palette.setColor(QtGui.QPalette.Base, QtGui.QColor("#080c14"))
    palette.setColor(QtGui.QPalette.AlternateBase, QtGui.QColor("#060a10"))
    palette.setColor(QtGui.QPalette.Text, QtGui.QColor("#c0d0e0"))
    palette.setColor(QtGui.QPalette.Button, QtGui.QColor("#0c1624"))
    palette.setColor(QtGui.QPalette.ButtonText, QtGui.QColor("#c0d0e0"))
    palette.setColor(QtGui.QPalette.Highlight, QtGui.QColor("#00ccff"))
    app.setPalette(palette)


def main(argv: Optional[List[str]] = None) -> int:
    args, remaining = build_parser().parse_known_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)

    location = resolve_data_location(args.data)
    try:
        dataset = load_dataset(location)
    except (requests.RequestException, OSError, ValueError):
        log.exception("Could not load dataset from %s", location)
        return 1

    pg.setConfigOption("background", "#060a10")
    pg.setConfigOption("foreground", "#a0b8d0")
    pg.setConfigOption("antialias", True)

    app = QtWidgets.QApplication(sys.argv[:1] + remaining)
    app.setStyle("Fusion")
    _apply_dark_palette(app)

    state = AppState()
    win = MainWindow(state)
    state.load(dataset)
    win.show()

    # ── Graceful Ctrl+C / SIGTERM shutdown ──
    def _sigint_handler(*_args):
        log.info("Signal received — closing window")
        win.close()

    signal.signal(signal.SIGINT, _sigint_handler)
    signal.signal(signal.SIGTERM, _sigint_handler)

    # Timer gives the interpreter a chance to run the handler
    _sig_timer = QtCore.QTimer()
    _sig_timer.timeout.connect(lambda: None)
    _sig_timer.start(200)

    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
