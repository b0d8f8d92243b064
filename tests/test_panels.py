import pytest
from PyQt5 import QtCore

from gridconn.gui.detail_panel import RegionDetailPanel
from gridconn.gui.summary_panel import NationalSummaryPanel
from gridconn.gui.timeline_chart import TimelineChartWidget
from gridconn.model import Summary, Timeline
from gridconn.projection.summary import DETAIL_PLACEHOLDER, project_national, project_region_detail


def test_detail_panel_placeholder_then_region(qapp, regions):
    panel = RegionDetailPanel()
    assert panel.showing_placeholder
    assert panel._placeholder.text() == DETAIL_PLACEHOLDER

    panel.set_detail(project_region_detail(regions[1]))
    assert not panel.showing_placeholder
    assert panel._title.text() == "Tokyo Area"
    assert panel._bar.bar.under_review > panel._bar.bar.contracted

    panel.set_detail(project_region_detail(None, requested_id="atlantis"))
    assert panel.showing_placeholder


def test_summary_panel_shows_published_totals(qapp):
    panel = NationalSummaryPanel()
    panel.set_summary(project_national(
        Summary(total_under_review=12600, total_contracted=1705.5, total_connected=279)
    ))
    assert panel.value_text("under_review") == "12,600"
    assert panel.value_text("contracted") == "1,705.5"
    assert panel.value_text("connected") == "279"


def test_timeline_chart_projects_and_clears(qapp):
    chart = TimelineChartWidget()
    chart.resize(400, 200)
    chart.set_timeline(Timeline(labels=("Q1", "Q2", "Q3"), total_under_review=(100.0, 200.0, 150.0)))
    geom = chart.geometry_model
    assert len(geom.points) == 3
    assert geom.value_domain[1] == pytest.approx(220.0)

    chart.set_timeline(Timeline())
    assert chart.geometry_model.is_empty


def test_timeline_chart_reprojects_on_resize(qapp):
    chart = TimelineChartWidget()
    assert chart.geometry_model is None
    chart.set_timeline(Timeline(labels=("Q1", "Q2"), total_under_review=(10.0, 20.0)))
    chart.resize(600, 240)
    chart.show()
    qapp.processEvents()

    geom = chart.geometry_model
    assert geom.width == chart.width() - 40 - 30
    assert geom.points[-1].x == geom.width
    chart.close()


def test_detail_title_is_plain_text(qapp, regions):
    from dataclasses import replace

    panel = RegionDetailPanel()
    panel.set_detail(project_region_detail(replace(regions[0], name="<b>Hokkaido</b>")))
    assert panel._title.textFormat() == QtCore.Qt.PlainText
    assert panel._title.text() == "<b>Hokkaido</b> Area"
