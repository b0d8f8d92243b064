import json

import pytest
import requests

from gridconn.config import DEFAULT_DATA_PATH
from gridconn.ingest import fetch_document, is_url
from gridconn.ingest.battery_client import load_dataset, parse_dataset


def _doc(**overrides):
    doc = {
        "regions": [
            {"id": "a", "name": "Alpha", "center": [139.7, 35.7], "underReview": 50,
             "contracted": 30, "connected": 20, "vreRatio": 18.4, "curtailmentRate": 0.5,
             "solarApplications": 10, "windApplications": 2, "characteristics": " Dense. "},
        ],
        "summary": {"totalUnderReview": 500, "totalContracted": 300, "totalConnected": 200},
        "timeline": {"labels": ["Q1", "Q2"], "totalUnderReview": [100, 200]},
    }
    doc.update(overrides)
    return doc


def test_parse_dataset():
    ds = parse_dataset(_doc(), source="mem")
    region = ds.find_region("a")
    assert region.center == (139.7, 35.7)
    assert region.lon == 139.7 and region.lat == 35.7
    assert region.under_review == 50
    assert region.characteristics == "Dense."
    assert ds.summary.total_under_review == 500
    assert ds.timeline.labels == ("Q1", "Q2")
    assert ds.source == "mem"
    assert ds.find_region("missing") is None
    assert ds.find_region(None) is None


@pytest.mark.parametrize("bad", [
    {"regions": "nope"},
    {"summary": None},
    {"timeline": {"labels": ["Q1"], "totalUnderReview": [1, 2]}},
    {"timeline": {"labels": ["Q1", "Q1"], "totalUnderReview": [1, 2]}},
])
def test_malformed_documents_raise(bad):
    with pytest.raises(ValueError):
        parse_dataset(_doc(**bad))


@pytest.mark.parametrize("field, value", [
    ("center", [139.7]),
    ("underReview", -1),
    ("underReview", "12"),
    ("contracted", True),
    ("id", ""),
])
def test_bad_region_fields_raise(field, value):
    doc = _doc()
    doc["regions"][0][field] = value
    with pytest.raises(ValueError):
        parse_dataset(doc)


def test_duplicate_region_ids_raise():
    doc = _doc()
    doc["regions"].append(dict(doc["regions"][0]))
    with pytest.raises(ValueError, match="Duplicate region id"):
        parse_dataset(doc)


def test_load_dataset_from_file(tmp_path):
    path = tmp_path / "battery-data.json"
    path.write_text(json.dumps(_doc()), encoding="utf-8")
    ds = load_dataset(str(path))
    assert ds.region_ids == ("a",)
    assert ds.source == str(path)


def test_invalid_json_is_value_error(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{ not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_dataset(str(path))


def test_missing_file_is_os_error(tmp_path):
    with pytest.raises(OSError):
        fetch_document(tmp_path / "absent.json")


def test_url_fetch_single_attempt(monkeypatch):
    calls = []

    class FakeResponse:
        content = b"{}"

        def raise_for_status(self):
            raise requests.HTTPError("503 Server Error")

    def fake_get(url, timeout):
        calls.append(url)
        return FakeResponse()

    monkeypatch.setattr(requests, "get", fake_get)
    with pytest.raises(requests.HTTPError):
        fetch_document("https://example.invalid/battery-data.json")
    assert len(calls) == 1


def test_is_url():
    assert is_url("https://host/x.json")
    assert is_url("http://host/x.json")
    assert not is_url("data/battery-data.json")


def test_bundled_sample_loads():
    ds = load_dataset(str(DEFAULT_DATA_PATH))
    assert len(ds.regions) == 10
    assert len(ds.timeline) > 0
    assert all(r.total_capacity > 0 for r in ds.regions)
