"""
Summary projector — national figures, area cards and the region detail view.

Pure arithmetic over dataset records; returns plain documents the widgets
display as-is.

National totals are taken verbatim from the dataset summary and are never
derived by summing regions.  The two may disagree; the published summary
wins.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from ..model import Region, Summary

CURTAILMENT_ELEVATED_THRESHOLD = 3.0  # %
DETAIL_PLACEHOLDER = "Select an area on the map or a card"


# ── Number formatting ─────────────────────────────────────────────────

def format_number(value: float, max_fraction_digits: int = 3) -> str:
    """Digit-grouped number with at most *max_fraction_digits* decimals.

    Trailing zeros are dropped: ``1234.5 -> "1,234.5"``, ``2000.0 -> "2,000"``.
    """
    if not math.isfinite(value):
        return "–"
    text = f"{value:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_rounded(value: float) -> str:
    """Round half up to an integer, then group digits."""
    if not math.isfinite(value):
        return "–"
    return f"{int(math.floor(value + 0.5)):,}"


def format_percent(value: float) -> str:
    return f"{format_number(value)}%"


# ── Documents ─────────────────────────────────────────────────────────

@dataclass(frozen=True)
class NationalSummary:
    total_under_review: float
    total_contracted: float
    total_connected: float
    under_review_text: str
    contracted_text: str
    connected_text: str


@dataclass(frozen=True)
class ComparisonBar:
    """Segment widths (percent of the bar) for the three statuses."""
    under_review: float = 0.0
    contracted: float = 0.0
    connected: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.under_review == self.contracted == self.connected == 0.0


@dataclass(frozen=True)
class AreaCard:
    region_id: str
    name: str
    vre_text: str
    under_review_text: str
    contracted_text: str
    connected_text: str


@dataclass(frozen=True)
class RegionDetail:
    """Detail-panel content for the selected region.

    ``found`` is False when nothing is selected or the requested id does not
    exist; only ``requested_id`` and ``placeholder`` are meaningful then.
    """
    found: bool
    requested_id: Optional[str] = None
    placeholder: str = DETAIL_PLACEHOLDER
    region_id: str = ""
    title: str = ""
    vre_ratio: float = 0.0
    vre_text: str = ""
    curtailment_rate: float = 0.0
    curtailment_text: str = ""
    curtailment_elevated: bool = False
    under_review_text: str = ""
    contracted_text: str = ""
    connected_text: str = ""
    bar: ComparisonBar = ComparisonBar()
    solar_text: str = ""
    wind_text: str = ""
    renewable_total: int = 0
    characteristics: str = ""


# ── Projections ───────────────────────────────────────────────────────

def project_national(summary: Summary) -> NationalSummary:
    return NationalSummary(
        total_under_review=summary.total_under_review,
        total_contracted=summary.total_contracted,
        total_connected=summary.total_connected,
        under_review_text=format_number(summary.total_under_review),
        contracted_text=format_number(summary.total_contracted),
        connected_text=format_number(summary.total_connected),
    )


def comparison_widths(region: Region) -> ComparisonBar:
    """Share of each status in the region total, as percentages.

    A region with no capacity at all gets an empty bar instead of NaN.
    """
    total = region.total_capacity
    if total <= 0:
        return ComparisonBar()

    def pct(value: float) -> float:
        return min(max(value / total * 100.0, 0.0), 100.0)

    return ComparisonBar(
        under_review=pct(region.under_review),
        contracted=pct(region.contracted),
        connected=pct(region.connected),
    )


def is_curtailment_elevated(rate: float) -> bool:
    return rate > CURTAILMENT_ELEVATED_THRESHOLD


def project_area_card(region: Region) -> AreaCard:
    return AreaCard(
        region_id=region.id,
        name=region.name,
        vre_text=format_percent(region.vre_ratio),
        under_review_text=format_rounded(region.under_review),
        contracted_text=format_rounded(region.contracted),
        connected_text=format_rounded(region.connected),
    )


def project_region_detail(region: Optional[Region], requested_id: Optional[str] = None) -> RegionDetail:
    """Detail document for *region*, or the unresolved placeholder if None."""
    if region is None:
        return RegionDetail(found=False, requested_id=requested_id)

    return RegionDetail(
        found=True,
        requested_id=requested_id if requested_id is not None else region.id,
        region_id=region.id,
        title=f"{region.name} Area",
        vre_ratio=region.vre_ratio,
        vre_text=format_percent(region.vre_ratio),
        curtailment_rate=region.curtailment_rate,
        curtailment_text=format_percent(region.curtailment_rate),
        curtailment_elevated=is_curtailment_elevated(region.curtailment_rate),
        under_review_text=format_number(region.under_review),
        contracted_text=format_number(region.contracted),
        connected_text=format_number(region.connected),
        bar=comparison_widths(region),
        solar_text=format_number(region.solar_applications),
        wind_text=format_number(region.wind_applications),
        renewable_total=region.renewable_applications,
        characteristics=region.characteristics,
    )
