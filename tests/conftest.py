from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
os.environ["PYQTGRAPH_QT_LIB"] = "PyQt5"

import pytest
from PyQt5 import QtWidgets

from gridconn.model import Dataset, Region, Summary, Timeline


@pytest.fixture(scope="session")
def qapp():
    app = QtWidgets.QApplication.instance()
    if app is None:
        app = QtWidgets.QApplication(["gridconn-tests"])
    yield app


def make_region(region_id: str, under_review=0.0, contracted=0.0, connected=0.0, **kw) -> Region:
    kw.setdefault("name", region_id.title())
    kw.setdefault("center", (139.0, 36.0))
    return Region(
        id=region_id,
        under_review=under_review,
        contracted=contracted,
        connected=connected,
        **kw,
    )


@pytest.fixture
def regions():
    return (
        make_region("hokkaido", 1200, 180, 25, center=(141.35, 43.06), vre_ratio=28.5,
                    curtailment_rate=4.1, solar_applications=410, wind_applications=320,
                    characteristics="Wind-heavy."),
        make_region("tokyo", 2400, 310, 55, center=(139.69, 35.69), vre_ratio=18.4,
                    curtailment_rate=0.0, solar_applications=1250, wind_applications=60),
        make_region("kyushu", 2100, 280, 48, center=(130.40, 33.59), vre_ratio=35.2,
                    curtailment_rate=6.8),
    )


@pytest.fixture
def dataset(regions):
    return Dataset(
        regions=regions,
        summary=Summary(total_under_review=9999, total_contracted=770, total_connected=128),
        timeline=Timeline(labels=("Q1", "Q2", "Q3"), total_under_review=(100.0, 200.0, 150.0)),
        source="test",
    )
