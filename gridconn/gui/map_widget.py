"""
Region map widget — QGraphicsScene bubble map.

Renders every region as up to three concentric status bubbles plus a name
label, using the markers produced by :func:`gridconn.viz.layers.build_layers`:

  - under review  (z=10)   the clickable bubble; emits ``region_activated``
  - contracted    (z=20)   decorative, transparent to the mouse
  - connected     (z=30)   decorative, transparent to the mouse
  - label         (z=1000) above the bubble, never interactive

Bubbles and labels keep their pixel size at every zoom level
(``ItemIgnoresTransformations``); only their anchor point moves with the map.

Coordinate system: Web Mercator (EPSG:3857) kilometres, y flipped
(see :mod:`gridconn.geo.projection`).  Zoom follows web-map levels and is
clamped to the configured bounds.
"""
from __future__ import annotations

import logging
import math
import time
from typing import Dict, List, Optional, Tuple

from PyQt5 import QtCore, QtGui, QtWidgets

from ..config import CONFIG
from ..geo.projection import (
    focus_rect,
    lonlat_to_scene,
    px_per_scene_at,
    zoom_to_scene_per_px,
)
from ..selection import FocusRequest
from ..viz.layers import MarkerKind, VisualMarker

log = logging.getLogger(__name__)

_BUBBLE_ALPHA = {
    MarkerKind.UNDER_REVIEW: 110,
    MarkerKind.CONTRACTED: 150,
    MarkerKind.CONNECTED: 200,
}


# ── Marker graphics items ─────────────────────────────────────────────

class BubbleItem(QtWidgets.QGraphicsObject):
    """One status bubble, drawn at constant pixel size around its anchor."""

    def __init__(self, marker: VisualMarker, parent_widget: "RegionMapWidget"):
        super().__init__()
        self.marker = marker
        self._parent_widget = parent_widget
        self._hovered = False
        self._active = False
        r = marker.radius
        self._local_rect = QtCore.QRectF(-r, -r, 2 * r, 2 * r)

        color = QtGui.QColor(CONFIG.palette.status_colors()[marker.kind.value])
        self._stroke = QtGui.QColor(color)
        color.setAlpha(_BUBBLE_ALPHA[marker.kind])
        self._fill = color

        self.setPos(*lonlat_to_scene(*marker.center))
        self.setZValue(marker.z_index)
        self.setFlag(QtWidgets.QGraphicsItem.ItemIgnoresTransformations, True)

        if marker.interactive:
            self.setAcceptHoverEvents(True)
            self.setCursor(QtCore.Qt.PointingHandCursor)
        else:
            # Higher z-order, but clicks fall through to the under-review bubble
            self.setAcceptedMouseButtons(QtCore.Qt.NoButton)
            self.setAcceptHoverEvents(False)

    def boundingRect(self) -> QtCore.QRectF:
        return self._local_rect.adjusted(-2, -2, 2, 2)

    def shape(self) -> QtGui.QPainterPath:
        path = QtGui.QPainterPath()
        path.addEllipse(self._local_rect)
        return path

    def set_active(self, active: bool) -> None:
        if active != self._active:
            self._active = active
            self.update()

    def paint(self, painter: QtGui.QPainter, option, widget=None) -> None:
        painter.setRenderHint(QtGui.QPainter.Antialiasing, True)
        if self._active or self._hovered:
            pen = QtGui.QPen(QtGui.QColor(CONFIG.palette.highlight))
            pen.setWidthF(2.0)
        else:
            pen = QtGui.QPen(self._stroke)
            pen.setWidthF(1.0)
        painter.setPen(pen)
        painter.setBrush(QtGui.QBrush(self._fill))
        painter.drawEllipse(self._local_rect)

    def hoverEnterEvent(self, event):
        self._hovered = True
        self.update()
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self._hovered = False
        self.update()
        super().hoverLeaveEvent(event)

    def mousePressEvent(self, event):
        if self.marker.select_target is not None:
            self._parent_widget.region_activated.emit(self.marker.select_target)
            event.accept()
            return
        super().mousePressEvent(event)


class LabelItem(QtWidgets.QGraphicsObject):
    """Region name with a dark halo, anchored above the region's bubble."""

    def __init__(self, marker: VisualMarker):
        super().__init__()
        self.marker = marker
        w, h = marker.size
        ox, oy = marker.offset
        self._local_rect = QtCore.QRectF(ox, oy, w, h)
        self._font = QtGui.QFont("Helvetica Neue", 10)
        self._font.setBold(True)

        self.setPos(*lonlat_to_scene(*marker.center))
        self.setZValue(marker.z_index)
        self.setFlag(QtWidgets.QGraphicsItem.ItemIgnoresTransformations, True)
        self.setAcceptedMouseButtons(QtCore.Qt.NoButton)
        self.setAcceptHoverEvents(False)

    def boundingRect(self) -> QtCore.QRectF:
        return self._local_rect

    def paint(self, painter: QtGui.QPainter, option, widget=None) -> None:
        painter.setFont(self._font)
        flags = QtCore.Qt.AlignHCenter | QtCore.Qt.AlignBottom
        painter.setPen(QtGui.QColor(0, 0, 0, 180))
        painter.drawText(self._local_rect.translated(1, 1), flags, self.marker.text)
        painter.setPen(QtGui.QColor(240, 245, 250, 230))
        painter.drawText(self._local_rect, flags, self.marker.text)


# ── Main map widget ───────────────────────────────────────────────────

class RegionMapWidget(QtWidgets.QWidget):
    """Interactive bubble map of grid-connection regions.

    Signals
    -------
    region_activated(str)
        Emitted when a region's under-review bubble is clicked (region id).
    """

    region_activated = QtCore.pyqtSignal(str)

    _WHEEL_STEP = 0.25   # zoom levels per wheel notch

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None):
        super().__init__(parent)
        self._bubble_items: Dict[str, List[BubbleItem]] = {}
        self._label_items: Dict[str, LabelItem] = {}
        self._active_region: Optional[str] = None
        self._zoom = CONFIG.map.zoom

        self._scene = QtWidgets.QGraphicsScene(self)
        self._scene.setBackgroundBrush(QtGui.QBrush(QtGui.QColor(CONFIG.map.background)))

        self._view = QtWidgets.QGraphicsView(self._scene, self)
        self._view.setRenderHints(
            QtGui.QPainter.Antialiasing | QtGui.QPainter.TextAntialiasing
        )
        self._view.setDragMode(QtWidgets.QGraphicsView.ScrollHandDrag)
        self._view.setTransformationAnchor(QtWidgets.QGraphicsView.AnchorViewCenter)
        self._view.setResizeAnchor(QtWidgets.QGraphicsView.AnchorViewCenter)
        self._view.setHorizontalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        self._view.setVerticalScrollBarPolicy(QtCore.Qt.ScrollBarAlwaysOff)
        self._view.setStyleSheet(f"border: none; background: {CONFIG.map.background};")
        # Let wheel events reach this widget so zoom stays within bounds
        self._view.viewport().installEventFilter(self)

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self._view, 1)

        _BTN_SS = (
            "QPushButton { background: rgba(6,10,16,180); color: #8098b0; "
            "border: 1px solid rgba(28,44,68,200); padding: 2px 8px; "
            "font-size: 12px; min-width: 22px; }"
            "QPushButton:hover { background: rgba(16,42,64,200); color: #00ccff; }"
        )

        # ── Bottom-right floating zoom controls ──
        self._overlay = QtWidgets.QWidget(self._view)
        self._overlay.setStyleSheet("background: transparent;")
        ol = QtWidgets.QVBoxLayout(self._overlay)
        ol.setContentsMargins(0, 0, 0, 0)
        ol.setSpacing(2)
        for text, slot in (("+", self.zoom_in), ("−", self.zoom_out), ("Fit", self.reset_view)):
            btn = QtWidgets.QPushButton(text)
            btn.setStyleSheet(_BTN_SS)
            btn.clicked.connect(slot)
            ol.addWidget(btn)

        # Fly-to animation state (same easing as a camera "flyTo")
        self._anim_timer = QtCore.QTimer(self)
        self._anim_timer.setInterval(CONFIG.focus.frame_ms)
        self._anim_timer.timeout.connect(self._animate_step)
        self._anim_start_time = 0.0
        self._anim_duration = CONFIG.focus.duration_s
        self._anim_from_rect: Optional[QtCore.QRectF] = None
        self._anim_to_rect: Optional[QtCore.QRectF] = None

        self._initial_fit_done = False

    # ── Scene population ──────────────────────────────────────────────

    def set_layers(self, layers: Dict[str, Tuple[VisualMarker, ...]]) -> None:
        """Replace every marker on the map with *layers* (region id → markers)."""
        self._anim_timer.stop()
        self._scene.clear()
        self._bubble_items.clear()
        self._label_items.clear()

        for region_id, markers in layers.items():
            for marker in markers:
                if marker.kind is MarkerKind.LABEL:
                    item = LabelItem(marker)
                    self._label_items[region_id] = item
                else:
                    item = BubbleItem(marker, self)
                    self._bubble_items.setdefault(region_id, []).append(item)
                self._scene.addItem(item)

        self._update_scene_rect()
        self.highlight_region(self._active_region)
        log.info(
            "Map populated: %d regions, %d bubbles",
            len(layers), sum(len(v) for v in self._bubble_items.values()),
        )

    def bubbles_for(self, region_id: str) -> List[BubbleItem]:
        return list(self._bubble_items.get(region_id, ()))

    def label_for(self, region_id: str) -> Optional[LabelItem]:
        return self._label_items.get(region_id)

    def active_bubble_regions(self) -> List[str]:
        return [rid for rid, items in self._bubble_items.items() if any(i._active for i in items)]

    def _update_scene_rect(self) -> None:
        # Generous margin around Japan so panning is not clamped to the bubbles
        items_rect = self._scene.itemsBoundingRect()
        lat, lon = CONFIG.map.center_latlon
        cx, cy = lonlat_to_scene(lon, lat)
        span = 4000.0  # km
        base = QtCore.QRectF(cx - span / 2, cy - span / 2, span, span)
        self._scene.setSceneRect(base.united(items_rect))

    # ── Selection & camera ────────────────────────────────────────────

    def highlight_region(self, region_id: Optional[str]) -> None:
        self._active_region = region_id
        for rid, items in self._bubble_items.items():
            for item in items:
                item.set_active(rid == region_id and item.marker.interactive)

    def focus_on(self, request: FocusRequest) -> None:
        """Fly to *request*; an animation already running is redirected."""
        self._zoom = self._clamp_zoom(request.zoom)
        vp = self._view.viewport().rect()
        x, y, w, h = focus_rect(request.center, self._zoom, (vp.width(), vp.height()))
        log.debug("Focus %s → zoom %.2f over %.1fs", request.region_id, self._zoom, request.duration_s)
        self._animate_to_rect(QtCore.QRectF(x, y, w, h), request.duration_s)

    def _animate_to_rect(self, target: QtCore.QRectF, duration_s: float) -> None:
        """Smoothly animate the view to a target rectangle."""
        self._anim_from_rect = self._view.mapToScene(
            self._view.viewport().rect()
        ).boundingRect()
        self._anim_to_rect = target
        self._anim_duration = max(duration_s, 1e-3)
        self._anim_start_time = time.time()
        self._anim_timer.start()

    def _animate_step(self) -> None:
        """One frame of the fly-to animation."""
        if not self._anim_from_rect or not self._anim_to_rect:
            self._anim_timer.stop()
            return

        elapsed = time.time() - self._anim_start_time
        t = min(elapsed / self._anim_duration, 1.0)

        # Ease in-out cubic
        if t < 0.5:
            ease = 4 * t * t * t
        else:
            ease = 1 - pow(-2 * t + 2, 3) / 2

        f = self._anim_from_rect
        to = self._anim_to_rect
        x = f.x() + (to.x() - f.x()) * ease
        y = f.y() + (to.y() - f.y()) * ease
        w = f.width() + (to.width() - f.width()) * ease
        h = f.height() + (to.height() - f.height()) * ease

        self._view.fitInView(QtCore.QRectF(x, y, w, h), QtCore.Qt.KeepAspectRatio)

        if t >= 1.0:
            self._anim_timer.stop()

    @property
    def is_animating(self) -> bool:
        return self._anim_timer.isActive()

    @property
    def animation_target(self) -> Optional[QtCore.QRectF]:
        return self._anim_to_rect

    # ── Zoom ──────────────────────────────────────────────────────────

    @staticmethod
    def _clamp_zoom(zoom: float) -> float:
        return max(CONFIG.map.min_zoom, min(CONFIG.map.max_zoom, zoom))

    @property
    def zoom(self) -> float:
        return self._zoom

    def set_zoom(self, zoom: float) -> None:
        """Zoom around the current view centre, within the configured bounds."""
        self._anim_timer.stop()
        self._zoom = self._clamp_zoom(zoom)
        center = self._view.mapToScene(self._view.viewport().rect().center())
        scale = px_per_scene_at(self._zoom)
        self._view.setTransform(QtGui.QTransform.fromScale(scale, scale))
        self._view.centerOn(center)

    def zoom_in(self) -> None:
        self.set_zoom(self._zoom + 1.0)

    def zoom_out(self) -> None:
        self.set_zoom(self._zoom - 1.0)

    def reset_view(self) -> None:
        """Back to the initial national framing."""
        self._anim_timer.stop()
        self._zoom = self._clamp_zoom(CONFIG.map.zoom)
        lat, lon = CONFIG.map.center_latlon
        scale = px_per_scene_at(self._zoom)
        self._view.setTransform(QtGui.QTransform.fromScale(scale, scale))
        self._view.centerOn(*lonlat_to_scene(lon, lat))

    def _zoom_from_transform(self) -> float:
        scale = self._view.transform().m11()
        if scale <= 0:
            return self._zoom
        return math.log2(zoom_to_scene_per_px(0.0) * scale)

    # ── Events ────────────────────────────────────────────────────────

    def eventFilter(self, obj, event):
        if obj is self._view.viewport() and event.type() == QtCore.QEvent.Wheel:
            self._zoom = self._zoom_from_transform()
            step = self._WHEEL_STEP if event.angleDelta().y() > 0 else -self._WHEEL_STEP
            self.set_zoom(self._zoom + step)
            return True
        return super().eventFilter(obj, event)

    def resizeEvent(self, event):
        """Keep the zoom overlay in the corner; frame Japan on first show."""
        super().resizeEvent(event)
        vw = self._view.width()
        vh = self._view.height()
        self._overlay.adjustSize()
        ow, oh = self._overlay.width(), self._overlay.height()
        self._overlay.setGeometry(vw - ow - 10, vh - oh - 10, ow, oh)

        if not self._initial_fit_done:
            self._initial_fit_done = True
            self.reset_view()
