import pytest

from gridconn.projection.summary import DETAIL_PLACEHOLDER
from gridconn.selection import FocusRequest, SelectionController
from gridconn.state import AppState


@pytest.fixture
def controller(qapp, dataset):
    state = AppState()
    state.load(dataset)
    return SelectionController(state)


def _record(controller):
    events = []
    controller.selection_changed.connect(lambda rid: events.append(("selection", rid)))
    controller.focus_requested.connect(lambda req: events.append(("focus", req)))
    controller.detail_changed.connect(lambda d: events.append(("detail", d)))
    return events


def test_starts_unselected(controller):
    assert controller.active_region_id is None
    assert not controller.cursor.is_selected
    assert not controller.detail.found


def test_select_emits_highlight_focus_detail_in_order(controller):
    events = _record(controller)
    controller.select_region("tokyo", source="card")

    assert [kind for kind, _ in events] == ["selection", "focus", "detail"]
    assert events[0][1] == "tokyo"
    focus = events[1][1]
    assert isinstance(focus, FocusRequest)
    assert focus.center == (139.69, 35.69)
    assert focus.zoom == 5.5 and focus.duration_s == 1.5
    assert events[2][1].region_id == "tokyo"
    assert controller.active_region_id == "tokyo"


def test_reselecting_same_region_is_reapplied(controller):
    events = _record(controller)
    controller.select_region("kyushu")
    controller.select_region("kyushu")
    assert [kind for kind, _ in events].count("focus") == 2
    assert controller.active_region_id == "kyushu"
    assert controller.detail.region_id == "kyushu"


def test_unknown_region_yields_no_region_detail(controller):
    events = _record(controller)
    controller.select_region("atlantis")
    assert [kind for kind, _ in events] == ["selection", "detail"]
    detail = controller.detail
    assert not detail.found
    assert detail.requested_id == "atlantis"
    assert detail.placeholder == DETAIL_PLACEHOLDER


def test_clear_selection(controller):
    controller.select_region("tokyo")
    events = _record(controller)
    controller.clear_selection()
    assert events[0] == ("selection", None)
    assert controller.active_region_id is None
    assert not controller.detail.found


def test_refresh_reapplies_current_selection(controller):
    controller.select_region("hokkaido")
    events = _record(controller)
    controller.refresh()
    assert [kind for kind, _ in events] == ["selection", "focus", "detail"]
    assert controller.detail.region_id == "hokkaido"
