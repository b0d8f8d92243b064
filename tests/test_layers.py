import pytest

from gridconn.viz.layers import MarkerKind, Z_ORDER, build_all_layers, build_layers
from gridconn.viz.scale import build_scale

from .conftest import make_region


def test_marker_order_and_z_index():
    region = make_region("a", 50, 30, 20)
    markers = build_layers(region, build_scale([50], 90))
    assert [m.kind for m in markers] == [
        MarkerKind.UNDER_REVIEW, MarkerKind.CONTRACTED, MarkerKind.CONNECTED, MarkerKind.LABEL,
    ]
    assert [m.z_index for m in markers] == [10, 20, 30, 1000]
    assert Z_ORDER[MarkerKind.LABEL] > Z_ORDER[MarkerKind.CONNECTED]


def test_all_status_bubbles_share_one_scale():
    region = make_region("a", 50, 30, 20)
    scale = build_scale([50], 90)
    radii = {m.kind: m.radius for m in build_layers(region, scale)}
    assert radii[MarkerKind.UNDER_REVIEW] == 90
    assert radii[MarkerKind.CONTRACTED] == scale(30)
    assert radii[MarkerKind.CONNECTED] == scale(20)


def test_only_under_review_bubble_selects_region():
    region = make_region("a", 50, 30, 20)
    markers = build_layers(region, build_scale([50], 90))
    interactive = [m for m in markers if m.interactive]
    assert len(interactive) == 1
    assert interactive[0].kind is MarkerKind.UNDER_REVIEW
    assert interactive[0].select_target == "a"
    assert all(m.select_target is None for m in markers if not m.interactive)


def test_zero_radius_bubbles_are_omitted():
    region = make_region("empty", 0, 0, 0)
    markers = build_layers(region, build_scale([50], 90))
    assert [m.kind for m in markers] == [MarkerKind.LABEL]
    assert not any(m.is_bubble for m in markers)


def test_label_sits_above_bubble():
    region = make_region("a", 50, 0, 0, name="Alpha")
    markers = build_layers(region, build_scale([50], 90))
    label = markers[-1]
    assert label.text == "Alpha"
    assert label.size == (60, 30)
    assert label.offset == (-30, -(90 + 5 + 30))
    assert not label.interactive


def test_build_all_layers_keeps_dataset_order(regions):
    scale = build_scale([r.under_review for r in regions], 90)
    layers = build_all_layers(regions, scale)
    assert list(layers) == ["hokkaido", "tokyo", "kyushu"]


def test_label_clears_larger_contracted_bubble():
    scale = build_scale([50], 90)
    region = make_region("b", 10, 40, 0)
    markers = build_layers(region, scale)
    tallest = max(m.radius for m in markers if m.is_bubble)
    assert tallest == scale(40)
    label = markers[-1]
    label_bottom = label.offset[1] + label.size[1]
    assert label_bottom == pytest.approx(-(tallest + 5))


def test_label_without_bubbles_sits_on_centre_gap():
    markers = build_layers(make_region("empty", 0, 0, 0), build_scale([50], 90))
    assert markers[-1].offset == (-30, -(5 + 30))
