import pytest

from gridconn.config import CONFIG
from gridconn.gui.map_widget import RegionMapWidget
from gridconn.selection import FocusRequest
from gridconn.state import AppState
from gridconn.viz.layers import MarkerKind


@pytest.fixture
def map_widget(qapp, dataset):
    state = AppState()
    state.load(dataset)
    widget = RegionMapWidget()
    widget.resize(800, 600)
    widget.set_layers(state.layers)
    return widget


def test_layers_become_scene_items(map_widget):
    bubbles = map_widget.bubbles_for("tokyo")
    assert [b.marker.kind for b in bubbles] == [
        MarkerKind.UNDER_REVIEW, MarkerKind.CONTRACTED, MarkerKind.CONNECTED,
    ]
    assert [b.zValue() for b in bubbles] == [10, 20, 30]
    assert map_widget.label_for("tokyo").zValue() == 1000
    assert map_widget.label_for("tokyo").marker.text == "Tokyo"


def test_bubble_click_emits_select_target(map_widget):
    got = []
    map_widget.region_activated.connect(got.append)
    under_review = map_widget.bubbles_for("kyushu")[0]

    class _Event:
        accepted = False

        def accept(self):
            self.accepted = True

    event = _Event()
    under_review.mousePressEvent(event)
    assert got == ["kyushu"]
    assert event.accepted


def test_highlight_tracks_one_region(map_widget):
    map_widget.highlight_region("tokyo")
    map_widget.highlight_region("hokkaido")
    assert map_widget.active_bubble_regions() == ["hokkaido"]
    map_widget.highlight_region(None)
    assert map_widget.active_bubble_regions() == []


def test_focus_starts_animation_and_last_request_wins(map_widget):
    map_widget.focus_on(FocusRequest(region_id="tokyo", center=(139.69, 35.69)))
    first = map_widget.animation_target
    map_widget.focus_on(FocusRequest(region_id="kyushu", center=(130.40, 33.59)))
    second = map_widget.animation_target

    assert map_widget.is_animating
    assert second.center().x() < first.center().x()
    assert map_widget.zoom == CONFIG.focus.zoom


def test_zoom_is_clamped(map_widget):
    map_widget.set_zoom(99)
    assert map_widget.zoom == CONFIG.map.max_zoom
    map_widget.set_zoom(-3)
    assert map_widget.zoom == CONFIG.map.min_zoom


def test_click_through_decorative_bubbles_selects_region(qapp, map_widget):
    from PyQt5 import QtCore
    from PyQt5.QtTest import QTest

    from gridconn.gui.map_widget import BubbleItem

    map_widget.show()
    qapp.processEvents()
    view = map_widget._view
    under_review, _, connected = map_widget.bubbles_for("tokyo")
    view.centerOn(under_review.scenePos())
    qapp.processEvents()
    pos = view.mapFromScene(under_review.scenePos())

    top = view.itemAt(pos)
    assert isinstance(top, BubbleItem)
    assert top is connected

    got = []
    map_widget.region_activated.connect(got.append)
    QTest.mouseClick(view.viewport(), QtCore.Qt.LeftButton, QtCore.Qt.NoModifier, pos)
    assert got == ["tokyo"]
    map_widget.close()
