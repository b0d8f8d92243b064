"""
Map projection and camera geometry.

The map scene lives in Web Mercator (EPSG:3857) metres scaled by
``SCENE_SCALE``, with y flipped so north is up in Qt scene coordinates.
Zoom levels follow the slippy-map convention used by web maps: at zoom
``z`` one screen pixel covers ``156543.03 / 2**z`` projected metres.

Usage
-----
    sx, sy = lonlat_to_scene(139.69, 35.69)
    rect = focus_rect((139.69, 35.69), zoom=5.5, viewport_px=(800, 600))
"""
from __future__ import annotations

from typing import Tuple

import pyproj

WGS84 = pyproj.CRS("EPSG:4326")
WEB_MERCATOR = pyproj.CRS("EPSG:3857")

_to_metric = pyproj.Transformer.from_crs(WGS84, WEB_MERCATOR, always_xy=True)

SCENE_SCALE = 1.0 / 1000.0           # scene unit = 1 km
_RES_ZOOM0 = 156543.03392804097      # metres per pixel at zoom 0

Rect = Tuple[float, float, float, float]   # (x, y, width, height)


def lonlat_to_scene(lon: float, lat: float) -> Tuple[float, float]:
    mx, my = _to_metric.transform(lon, lat)
    return mx * SCENE_SCALE, -my * SCENE_SCALE


def zoom_to_scene_per_px(zoom: float) -> float:
    """Scene units covered by one screen pixel at *zoom*."""
    return _RES_ZOOM0 / (2.0 ** zoom) * SCENE_SCALE


def px_per_scene_at(zoom: float) -> float:
    """View transform scale factor (pixels per scene unit) for *zoom*."""
    return 1.0 / zoom_to_scene_per_px(zoom)


def focus_rect(
    center_lonlat: Tuple[float, float],
    zoom: float,
    viewport_px: Tuple[float, float],
) -> Rect:
    """Scene rectangle a viewport of *viewport_px* shows when centred there."""
    cx, cy = lonlat_to_scene(*center_lonlat)
    per_px = zoom_to_scene_per_px(zoom)
    w = max(viewport_px[0], 1.0) * per_px
    h = max(viewport_px[1], 1.0) * per_px
    return cx - w / 2.0, cy - h / 2.0, w, h
