import numpy as np
import pytest

from gridconn.projection.timeline import (
    format_thousands,
    monotone_segments,
    nice_ticks,
    point_positions,
    project_timeline,
)


def test_three_quarters_geometry():
    geom = project_timeline(["Q1", "Q2", "Q3"], [100, 200, 150], 300, 120)
    assert geom.value_domain[1] == pytest.approx(220.0)
    assert [p.x for p in geom.points] == [0.0, 150.0, 300.0]
    assert [t.label for t in geom.x_ticks] == ["Q1", "Q2", "Q3"]
    assert geom.points[1].y == pytest.approx(120 - 200 / 220 * 120)
    assert all(p.radius == 4 for p in geom.points)
    assert len(geom.segments) == 2


def test_single_label_is_centred():
    assert point_positions(1, 300) == [150.0]
    geom = project_timeline(["only"], [10], 300, 100)
    assert geom.points[0].x == 150.0
    xs, ys = geom.sample_line()
    assert list(xs) == [150.0]


def test_empty_timeline():
    geom = project_timeline([], [], 300, 100)
    assert geom.is_empty
    xs, ys = geom.sample_line()
    assert xs.size == 0 and ys.size == 0


def test_length_mismatch_rejected():
    with pytest.raises(ValueError):
        project_timeline(["a", "b"], [1], 300, 100)


def test_all_zero_values_sit_on_baseline():
    geom = project_timeline(["a", "b"], [0, 0], 300, 100)
    assert [p.y for p in geom.points] == [100, 100]
    assert geom.y_ticks == ()


def test_two_points_give_straight_line():
    (seg,) = monotone_segments([(0, 0), (30, 30)])
    assert seg.control1 == pytest.approx((10, 10))
    assert seg.control2 == pytest.approx((20, 20))


def test_curve_does_not_overshoot():
    pts = [(0, 100), (100, 20), (200, 20), (300, 80)]
    geom_y = np.concatenate([s.sample(32)[:, 1] for s in monotone_segments(pts)])
    assert geom_y.min() >= 20 - 1e-9
    assert geom_y.max() <= 100 + 1e-9
    flat = monotone_segments(pts)[1].sample(32)[:, 1]
    assert np.allclose(flat, 20)


def test_nice_ticks_and_labels():
    assert nice_ticks(22000, 5) == [0, 5000, 10000, 15000, 20000]
    assert format_thousands(20000) == "20k"
    assert format_thousands(2500) == "2.5k"
    assert format_thousands(0) == "0k"
    assert format_thousands(250) == "0.25k"
    assert format_thousands(5) == "0.005k"
    assert format_thousands(0.5) == "0.0005k"


def test_small_domain_ticks_keep_their_fraction():
    geom = project_timeline(["a", "b"], [1, 2], 300, 100)
    labels = [t.label for t in geom.y_ticks]
    assert "0k" in labels
    assert len(set(labels)) == len(labels)
