"""
Battery grid-connection dataset client.

Fetches the dashboard document and turns it into an immutable
:class:`~gridconn.model.Dataset`.  Document shape::

    {
      "regions":  [{"id", "name", "center": [lon, lat], "underReview",
                    "contracted", "connected", "vreRatio",
                    "curtailmentRate", "solarApplications",
                    "windApplications", "characteristics"}, ...],
      "summary":  {"totalUnderReview", "totalContracted", "totalConnected"},
      "timeline": {"labels": [...], "totalUnderReview": [...]}
    }

Anything that does not fit raises ``ValueError``; the caller decides what
a broken document means (the dashboard refuses to start).

Usage
-----
    from gridconn.ingest.battery_client import load_dataset
    dataset = load_dataset("gridconn/data/battery-data.json")
    for region in dataset.regions:
        print(region.name, region.under_review)
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Mapping

from ..model import Dataset, Region, Summary, Timeline
from . import fetch_document

log = logging.getLogger(__name__)


# ── Field helpers ─────────────────────────────────────────────────────

def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ValueError(f"Expected object for '{where}'")
    return value


def _list(value: Any, where: str) -> List[Any]:
    if not isinstance(value, list):
        raise ValueError(f"Expected array for '{where}'")
    return value


def _str(value: Any, where: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError(f"Expected non-empty string for '{where}'")
    return value.strip()


def _number(value: Any, where: str) -> float:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"Expected number for '{where}'")
    out = float(value)
    if not math.isfinite(out):
        raise ValueError(f"Expected finite number for '{where}'")
    return out


def _magnitude(value: Any, where: str) -> float:
    out = _number(value, where)
    if out < 0:
        raise ValueError(f"Expected non-negative number for '{where}', got {out}")
    return out


def _count(value: Any, where: str) -> int:
    return int(round(_magnitude(value, where)))


# ── Record parsers ────────────────────────────────────────────────────

def _parse_region(raw: Any, idx: int) -> Region:
    where = f"regions[{idx}]"
    data = _mapping(raw, where)

    center_raw = _list(data.get("center"), f"{where}.center")
    if len(center_raw) != 2:
        raise ValueError(f"Expected [lon, lat] pair for '{where}.center'")
    lon = _number(center_raw[0], f"{where}.center[0]")
    lat = _number(center_raw[1], f"{where}.center[1]")

    characteristics = data.get("characteristics", "")
    if characteristics is None:
        characteristics = ""
    if not isinstance(characteristics, str):
        raise ValueError(f"Expected string for '{where}.characteristics'")

    return Region(
        id=_str(data.get("id"), f"{where}.id"),
        name=_str(data.get("name"), f"{where}.name"),
        center=(lon, lat),
        under_review=_magnitude(data.get("underReview"), f"{where}.underReview"),
        contracted=_magnitude(data.get("contracted"), f"{where}.contracted"),
        connected=_magnitude(data.get("connected"), f"{where}.connected"),
        vre_ratio=_number(data.get("vreRatio", 0), f"{where}.vreRatio"),
        curtailment_rate=_number(data.get("curtailmentRate", 0), f"{where}.curtailmentRate"),
        solar_applications=_count(data.get("solarApplications", 0), f"{where}.solarApplications"),
        wind_applications=_count(data.get("windApplications", 0), f"{where}.windApplications"),
        characteristics=characteristics.strip(),
    )


def _parse_summary(raw: Any) -> Summary:
    data = _mapping(raw, "summary")
    return Summary(
        total_under_review=_magnitude(data.get("totalUnderReview"), "summary.totalUnderReview"),
        total_contracted=_magnitude(data.get("totalContracted"), "summary.totalContracted"),
        total_connected=_magnitude(data.get("totalConnected"), "summary.totalConnected"),
    )


def _parse_timeline(raw: Any) -> Timeline:
    data = _mapping(raw, "timeline")
    labels = [
        _str(v, f"timeline.labels[{i}]")
        for i, v in enumerate(_list(data.get("labels", []), "timeline.labels"))
    ]
    values = [
        _number(v, f"timeline.totalUnderReview[{i}]")
        for i, v in enumerate(_list(data.get("totalUnderReview", []), "timeline.totalUnderReview"))
    ]
    if len(labels) != len(values):
        raise ValueError(
            f"timeline.labels ({len(labels)}) and timeline.totalUnderReview "
            f"({len(values)}) differ in length"
        )
    if len(set(labels)) != len(labels):
        raise ValueError("timeline.labels must be unique")
    return Timeline(labels=tuple(labels), total_under_review=tuple(values))


# ── Public API ────────────────────────────────────────────────────────

def parse_dataset(payload: Any, source: str = "") -> Dataset:
    """Build a Dataset from an already-decoded JSON document."""
    doc = _mapping(payload, "document")
    regions_raw = _list(doc.get("regions"), "regions")

    regions: List[Region] = []
    seen: Dict[str, int] = {}
    for idx, raw in enumerate(regions_raw):
        region = _parse_region(raw, idx)
        if region.id in seen:
            raise ValueError(
                f"Duplicate region id '{region.id}' at regions[{seen[region.id]}] "
                f"and regions[{idx}]"
            )
        seen[region.id] = idx
        regions.append(region)

    dataset = Dataset(
        regions=tuple(regions),
        summary=_parse_summary(doc.get("summary")),
        timeline=_parse_timeline(doc.get("timeline")),
        source=source,
    )
    for region in dataset.regions:
        if region.total_capacity <= 0:
            log.warning("Region %s has no capacity in any status", region.id)
    return dataset


def load_dataset(location: str) -> Dataset:
    """Fetch and parse the dashboard document at *location*.

    Raises ``requests.RequestException`` / ``OSError`` when the document
    cannot be read and ``ValueError`` when it is malformed.
    """
    payload = fetch_document(location)
    dataset = parse_dataset(payload, source=str(location))
    log.info(
        "Dataset loaded: %d regions, %d timeline points (%s)",
        len(dataset.regions), len(dataset.timeline), location,
    )
    return dataset
