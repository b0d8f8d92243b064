"""
Application state — the dataset and everything derived from it.

One ``AppState`` is created at startup and handed to every component.
The dataset is replaced only wholesale through :meth:`AppState.load`,
which re-derives the bubble scale and all region layers in one go and
then emits ``dataset_replaced``.  Components read; nothing patches the
dataset in place.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Tuple

from PyQt5 import QtCore

from .config import CONFIG
from .model import Dataset, Region
from .viz.layers import VisualMarker, build_all_layers
from .viz.scale import RadiusScale, build_scale

log = logging.getLogger(__name__)


class AppState(QtCore.QObject):
    """Single source of truth for the loaded dataset.

    Signals
    -------
    dataset_replaced(Dataset)
        Emitted after a dataset has been loaded and all derivations rebuilt.
    """

    dataset_replaced = QtCore.pyqtSignal(object)

    def __init__(
        self,
        max_radius: float = CONFIG.bubble.max_radius,
        parent: Optional[QtCore.QObject] = None,
    ):
        super().__init__(parent)
        self._max_radius = max_radius
        self._dataset: Optional[Dataset] = None
        self._scale: RadiusScale = build_scale([], max_radius)
        self._layers: Dict[str, Tuple[VisualMarker, ...]] = {}

    # ── Read access ───────────────────────────────────────────────────

    @property
    def dataset(self) -> Optional[Dataset]:
        return self._dataset

    @property
    def is_loaded(self) -> bool:
        return self._dataset is not None

    @property
    def scale(self) -> RadiusScale:
        return self._scale

    @property
    def layers(self) -> Dict[str, Tuple[VisualMarker, ...]]:
        return dict(self._layers)

    def markers_for(self, region_id: str) -> Tuple[VisualMarker, ...]:
        return self._layers.get(region_id, ())

    def find_region(self, region_id: Optional[str]) -> Optional[Region]:
        if self._dataset is None:
            return None
        return self._dataset.find_region(region_id)

    # ── Write access ──────────────────────────────────────────────────

    def load(self, dataset: Dataset) -> None:
        """Install *dataset*, replacing any previous one, and re-derive."""
        scale = build_scale((r.under_review for r in dataset.regions), self._max_radius)
        layers = build_all_layers(dataset.regions, scale)

        self._dataset = dataset
        self._scale = scale
        self._layers = layers
        log.info(
            "State loaded: %d regions, %d markers",
            len(dataset.regions), sum(len(m) for m in layers.values()),
        )
        self.dataset_replaced.emit(dataset)
