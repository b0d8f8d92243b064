"""
Region layer builder — status bubbles and a name label per region.

Each region yields up to four markers, lowest drawn first:

    z=10    under review   (interactive, selects the region)
    z=20    contracted     (decorative, ignores the pointer)
    z=30    connected      (decorative, ignores the pointer)
    z=1000  label          (never interactive)

Bubbles with a zero radius are left out altogether so no invisible hit
target is ever produced.  The label box sits above the tallest rendered bubble
so the name never overlaps any of them.

All marker geometry is in screen pixels relative to the region centre;
the map widget keeps it at constant size across zoom levels.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, Optional, Tuple

from ..config import CONFIG
from ..model import Region
from .scale import RadiusScale

log = logging.getLogger(__name__)


class MarkerKind(Enum):
    UNDER_REVIEW = "under-review"
    CONTRACTED = "contracted"
    CONNECTED = "connected"
    LABEL = "label"


Z_ORDER: Dict[MarkerKind, int] = {
    MarkerKind.UNDER_REVIEW: 10,
    MarkerKind.CONTRACTED: 20,
    MarkerKind.CONNECTED: 30,
    MarkerKind.LABEL: 1000,
}

_STATUS_KINDS = (MarkerKind.UNDER_REVIEW, MarkerKind.CONTRACTED, MarkerKind.CONNECTED)


@dataclass(frozen=True)
class VisualMarker:
    """One drawable element on the map.

    ``offset`` is the top-left corner of the marker's box relative to the
    region centre, in pixels (y grows downwards).  ``select_target`` is the
    region id a click should select, or None for decorative markers.
    """
    region_id: str
    kind: MarkerKind
    z_index: int
    center: Tuple[float, float]        # (lon, lat)
    radius: float = 0.0
    size: Tuple[float, float] = (0.0, 0.0)
    offset: Tuple[float, float] = (0.0, 0.0)
    text: str = ""
    interactive: bool = False
    select_target: Optional[str] = None

    @property
    def is_bubble(self) -> bool:
        return self.kind is not MarkerKind.LABEL


def _status_value(region: Region, kind: MarkerKind) -> float:
    if kind is MarkerKind.UNDER_REVIEW:
        return region.under_review
    if kind is MarkerKind.CONTRACTED:
        return region.contracted
    return region.connected


def build_layers(region: Region, scale: RadiusScale) -> Tuple[VisualMarker, ...]:
    """Markers for one region, in z-order."""
    markers = []
    for kind in _STATUS_KINDS:
        radius = scale(_status_value(region, kind))
        if radius <= 0:
            continue
        interactive = kind is MarkerKind.UNDER_REVIEW
        markers.append(VisualMarker(
            region_id=region.id,
            kind=kind,
            z_index=Z_ORDER[kind],
            center=region.center,
            radius=radius,
            size=(radius * 2, radius * 2),
            offset=(-radius, -radius),
            interactive=interactive,
            select_target=region.id if interactive else None,
        ))

    bubble = CONFIG.bubble
    # Tallest rendered bubble; 0 when none is drawn
    anchor_radius = max((m.radius for m in markers), default=0.0)
    markers.append(VisualMarker(
        region_id=region.id,
        kind=MarkerKind.LABEL,
        z_index=Z_ORDER[MarkerKind.LABEL],
        center=region.center,
        size=(bubble.label_width, bubble.label_height),
        offset=(
            -bubble.label_width / 2,
            -(anchor_radius + bubble.label_gap + bubble.label_height),
        ),
        text=region.name,
    ))
    return tuple(markers)


def build_all_layers(
    regions: Iterable[Region], scale: RadiusScale
) -> Dict[str, Tuple[VisualMarker, ...]]:
    """Markers for every region, keyed by id in dataset order."""
    layers = {region.id: build_layers(region, scale) for region in regions}
    log.debug(
        "Built %d markers for %d regions",
        sum(len(m) for m in layers.values()), len(layers),
    )
    return layers
