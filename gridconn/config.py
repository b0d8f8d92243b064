"""
Build-time constants for the grid connection dashboard.

Everything visual is fixed here: map framing, zoom bounds, bubble size and
the palette shared by the map, cards and timeline.  The only value that can
be overridden at run time is the data-source location (``--data`` on the
command line or the ``GRIDCONN_DATA`` environment variable).
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

PACKAGE_DIR = Path(__file__).resolve().parent
DEFAULT_DATA_PATH = PACKAGE_DIR / "data" / "battery-data.json"

DATA_ENV_VAR = "GRIDCONN_DATA"


@dataclass(frozen=True)
class MapConfig:
    """Initial framing and zoom limits (Leaflet-style zoom levels)."""
    center_latlon: Tuple[float, float] = (36.5, 137.5)
    zoom: float = 5.5
    min_zoom: float = 4.0
    max_zoom: float = 10.0
    background: str = "#0a0a1a"


@dataclass(frozen=True)
class BubbleConfig:
    max_radius: float = 90.0          # px at any zoom level
    label_width: float = 60.0
    label_height: float = 30.0
    label_gap: float = 5.0            # px between bubble top and label


@dataclass(frozen=True)
class FocusConfig:
    """Camera fly-to applied on every selection."""
    zoom: float = 5.5
    duration_s: float = 1.5
    frame_ms: int = 16


@dataclass(frozen=True)
class TimelineConfig:
    margin_top: float = 10.0
    margin_right: float = 30.0
    margin_bottom: float = 20.0
    margin_left: float = 40.0
    headroom: float = 1.1             # value-axis top = max * headroom
    tick_count: int = 5
    dot_radius: float = 4.0


@dataclass(frozen=True)
class Palette:
    under_review: str = "#ff4d6d"
    contracted: str = "#ffa94d"
    connected: str = "#51cf66"
    vre: str = "#a5b4fc"
    curtailment_elevated: str = "#ff6b6b"
    curtailment_normal: str = "#aaaaaa"
    solar: str = "#fcd34d"
    wind: str = "#7dd3fc"
    text: str = "#c0d0e0"
    text_muted: str = "#7a8aa0"
    panel: str = "#0c1624"
    panel_border: str = "#1c2c44"
    highlight: str = "#00ccff"

    def status_colors(self) -> Dict[str, str]:
        return {
            "under-review": self.under_review,
            "contracted": self.contracted,
            "connected": self.connected,
        }


@dataclass(frozen=True)
class DashboardConfig:
    map: MapConfig = field(default_factory=MapConfig)
    bubble: BubbleConfig = field(default_factory=BubbleConfig)
    focus: FocusConfig = field(default_factory=FocusConfig)
    timeline: TimelineConfig = field(default_factory=TimelineConfig)
    palette: Palette = field(default_factory=Palette)
    data_location: str = str(DEFAULT_DATA_PATH)


CONFIG = DashboardConfig()


def resolve_data_location(cli_value: Optional[str] = None) -> str:
    """Pick the data source: command line, then environment, then bundled sample."""
    if cli_value:
        return cli_value
    env_value = os.environ.get(DATA_ENV_VAR, "").strip()
    if env_value:
        return env_value
    return CONFIG.data_location
