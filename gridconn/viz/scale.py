"""
Square-root area scale for bubble markers.

A bubble's perceived size is its area (πr²), so the radius grows with the
square root of the magnitude:

    radius = max_radius * sqrt(magnitude / domain_max)

The domain is ``[0, max(values)]`` and is fixed when the scale is built
(once per dataset load).  Inputs outside the domain clamp to the range
``[0, max_radius]``.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Iterable

import numpy as np

log = logging.getLogger(__name__)

RadiusScale = Callable[[float], float]


def _zero(_magnitude: float) -> float:
    return 0.0


def build_scale(values: Iterable[float], max_radius: float) -> RadiusScale:
    """Return ``radius(magnitude)`` for the given sample of magnitudes.

    An empty sample, or one whose maximum is 0, yields a scale that maps
    everything to 0.
    """
    arr = np.asarray(list(values), dtype=float)
    domain_max = float(arr.max()) if arr.size else 0.0
    if not math.isfinite(domain_max) or domain_max <= 0.0 or max_radius <= 0.0:
        log.debug("Degenerate scale (domain max %s, max radius %s)", domain_max, max_radius)
        return _zero

    def radius(magnitude: float) -> float:
        if not magnitude > 0.0:  # also catches NaN
            return 0.0
        t = min(magnitude / domain_max, 1.0)
        return max_radius * math.sqrt(t)

    log.debug("Scale domain [0, %.1f] -> [0, %.1f] px", domain_max, max_radius)
    return radius
