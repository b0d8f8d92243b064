"""
Selection controller — the one writer of the "selected region" cursor.

States::

    Unselected  ──select_region(id)──▶  Selected(id)
    Selected(a) ──select_region(b)──▶  Selected(b)      (b may equal a)
    any         ──clear_selection()─▶  Unselected

Every ``select_region`` call is a full transition, even when *id* is
already active, and runs synchronously in this order:

  1. ``selection_changed(id)``: cards clear their highlight and the one
     matching *id* lights up.
  2. ``focus_requested(FocusRequest)``: the map flies to the region.
     Skipped when the id does not resolve.  A new request simply replaces
     an animation still in flight.
  3. ``detail_changed(RegionDetail)``: the detail panel is re-projected
     for that one region (or shows "no region found").

Map markers and area cards both emit a region id; both are connected to
:meth:`SelectionController.select_region`, so where the click came from
never changes what happens.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from PyQt5 import QtCore

from .config import CONFIG
from .projection.summary import RegionDetail, project_region_detail
from .state import AppState

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class FocusRequest:
    """Camera target for one selection."""
    region_id: str
    center: Tuple[float, float]   # (lon, lat)
    zoom: float = CONFIG.focus.zoom
    duration_s: float = CONFIG.focus.duration_s


class SelectionCursor:
    """Read-only view of the active region id.

    Only the owning :class:`SelectionController` moves it.
    """

    def __init__(self) -> None:
        self._region_id: Optional[str] = None

    @property
    def region_id(self) -> Optional[str]:
        return self._region_id

    @property
    def is_selected(self) -> bool:
        return self._region_id is not None

    def _move(self, region_id: Optional[str]) -> None:
        self._region_id = region_id

    def __repr__(self) -> str:
        if self._region_id is None:
            return "SelectionCursor(Unselected)"
        return f"SelectionCursor(Selected({self._region_id!r}))"


class SelectionController(QtCore.QObject):
    """Owns the selection cursor and fans each transition out to the views.

    Signals
    -------
    selection_changed(object)
        New active region id, or None after :meth:`clear_selection`.
    focus_requested(object)
        A :class:`FocusRequest` for the selected region.
    detail_changed(object)
        The :class:`~gridconn.projection.summary.RegionDetail` to display.
    """

    selection_changed = QtCore.pyqtSignal(object)
    focus_requested = QtCore.pyqtSignal(object)
    detail_changed = QtCore.pyqtSignal(object)

    def __init__(self, state: AppState, parent: Optional[QtCore.QObject] = None):
        super().__init__(parent)
        self._state = state
        self._cursor = SelectionCursor()
        self._detail = project_region_detail(None)

    @property
    def cursor(self) -> SelectionCursor:
        return self._cursor

    @property
    def active_region_id(self) -> Optional[str]:
        return self._cursor.region_id

    @property
    def detail(self) -> RegionDetail:
        return self._detail

    # ── Transitions ───────────────────────────────────────────────────

    def select_region(self, region_id: str, source: str = "api") -> None:
        """Make *region_id* the selected region (always re-applied)."""
        self._cursor._move(region_id)
        region = self._state.find_region(region_id)
        log.info(
            "Select %s (from %s)%s",
            region_id, source, "" if region else " — no such region",
        )

        self.selection_changed.emit(region_id)

        if region is not None:
            self.focus_requested.emit(FocusRequest(region_id=region.id, center=region.center))

        self._detail = project_region_detail(region, requested_id=region_id)
        self.detail_changed.emit(self._detail)

    def clear_selection(self) -> None:
        """Return to Unselected and show the placeholder detail view."""
        self._cursor._move(None)
        log.info("Selection cleared")
        self.selection_changed.emit(None)
        self._detail = project_region_detail(None)
        self.detail_changed.emit(self._detail)

    def refresh(self) -> None:
        """Re-apply the current selection, e.g. after the dataset changed."""
        if self._cursor.is_selected:
            self.select_region(self._cursor.region_id, source="refresh")
        else:
            self._detail = project_region_detail(None)
            self.detail_changed.emit(self._detail)
