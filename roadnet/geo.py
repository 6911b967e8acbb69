"""Planar distance helpers.

Map coordinates are integers in tenths of a kilometre; distances are reported
in kilometres rounded to one decimal place unless configured otherwise.
"""

from __future__ import annotations

from math import hypot
from typing import Optional

import numpy as np

from roadnet.config import CONFIG
from roadnet.model import Node


def planar_distance(
    x1: float,
    y1: float,
    x2: float,
    y2: float,
    scale: Optional[float] = None,
    ndigits: Optional[int] = None,
) -> float:
    """Straight-line distance between two map points.

    Args:
        x1, y1: First point.
        x2, y2: Second point.
        scale: Coordinate units per distance unit (``CONFIG.distance_scale``).
        ndigits: Decimal places kept. Defaults to ``CONFIG.distance_ndigits``.
    """
    scale = CONFIG.distance_scale if scale is None else scale
    ndigits = CONFIG.distance_ndigits if ndigits is None else ndigits
    return round(hypot(x2 - x1, y2 - y1) / scale, ndigits)


def node_distance(a: Node, b: Node) -> float:
    return planar_distance(a.x, a.y, b.x, b.y)


def pairwise_distances(
    coordinates: np.ndarray,
    scale: Optional[float] = None,
    ndigits: Optional[int] = None,
) -> np.ndarray:
    """Return the ``(N, N)`` table of planar distances between all coordinate rows."""
    scale = CONFIG.distance_scale if scale is None else scale
    ndigits = CONFIG.distance_ndigits if ndigits is None else ndigits
    coords = np.asarray(coordinates, dtype=float).reshape(-1, 2)
    delta = coords[:, None, :] - coords[None, :, :]
    return np.round(np.hypot(delta[..., 0], delta[..., 1]) / scale, ndigits)
