"""
Dataset records for the battery grid-connection dashboard.

A Dataset is loaded once and never mutated: every record is a frozen
dataclass and every sequence a tuple.  A reload builds a new Dataset and
replaces the old one wholesale.

Example
-------
    region = dataset.find_region("tokyo")
    region.total_capacity   # underReview + contracted + connected
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(frozen=True)
class Region:
    """One grid-connection area.

    Capacity fields share a unit (10 MW); ``center`` is ``(lon, lat)`` as
    stored in the source document.
    """
    id: str
    name: str
    center: Tuple[float, float]
    under_review: float = 0.0
    contracted: float = 0.0
    connected: float = 0.0
    vre_ratio: float = 0.0          # %
    curtailment_rate: float = 0.0   # %
    solar_applications: int = 0
    wind_applications: int = 0
    characteristics: str = ""

    @property
    def lon(self) -> float:
        return self.center[0]

    @property
    def lat(self) -> float:
        return self.center[1]

    @property
    def total_capacity(self) -> float:
        return self.under_review + self.contracted + self.connected

    @property
    def renewable_applications(self) -> int:
        return self.solar_applications + self.wind_applications


@dataclass(frozen=True)
class Summary:
    """National totals as published.

    These are independent of the per-region figures and are never
    recomputed from them, even when the two disagree.
    """
    total_under_review: float = 0.0
    total_contracted: float = 0.0
    total_connected: float = 0.0


@dataclass(frozen=True)
class Timeline:
    """Parallel sequences: one value per (unique) category label."""
    labels: Tuple[str, ...] = ()
    total_under_review: Tuple[float, ...] = ()

    def __len__(self) -> int:
        return len(self.labels)


@dataclass(frozen=True)
class Dataset:
    regions: Tuple[Region, ...]
    summary: Summary
    timeline: Timeline
    source: str = ""
    _by_id: Dict[str, Region] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        # frozen: populate the lookup table through object.__setattr__
        object.__setattr__(self, "_by_id", {r.id: r for r in self.regions})

    def find_region(self, region_id: Optional[str]) -> Optional[Region]:
        """Return the region with *region_id*, or None when there is none."""
        if region_id is None:
            return None
        return self._by_id.get(region_id)

    @property
    def region_ids(self) -> Tuple[str, ...]:
        return tuple(r.id for r in self.regions)
