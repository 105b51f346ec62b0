"""Zero-width path sources: Hilbert curve and horizontal scanlines.

The Hilbert source walks the lattice of 2**order × 2**order cells in curve
order and emits one segment per transition between consecutive cells, with
lattice coordinates divided by 2**order so the curve lies in [0, 1]².

Segment count for order o is N² − 1 with N = 2**o: index i runs over
[0, N² − 2] and decodes i and i + 1. Decoding index N² (one past the last
cell) is a contract violation and raises IndexError.
"""

import logging
from typing import Iterator, Tuple

import numpy as np

from ..utils import geometry

logger = logging.getLogger(__name__)


def hilbert_d2xy(index: int, order: int) -> Tuple[int, int]:
    """Decode a distance along the Hilbert curve into lattice coordinates.

    Parameters
    ----------
    index : int
        Distance along the curve, 0 <= index < 4**order
    order : int
        Curve order, lattice is 2**order cells per axis

    Returns
    -------
    Tuple[int, int]
        (x, y) integer lattice coordinate

    Raises
    ------
    ValueError
        If order is negative
    IndexError
        If index is outside [0, 4**order)
    """
    if order < 0:
        raise ValueError(f"Hilbert order must be non-negative, got {order}")
    n = 1 << order
    if not 0 <= index < n * n:
        raise IndexError(f"Hilbert index {index} out of range for order {order} (0..{n * n - 1})")

    x = y = 0
    d = index
    s = 1
    while s < n:
        rx = 1 & (d // 2)
        ry = 1 & (d ^ rx)
        if ry == 0:
            if rx == 1:
                x = s - 1 - x
                y = s - 1 - y
            x, y = y, x
        x += s * rx
        y += s * ry
        d //= 4
        s *= 2
    return x, y


class HilbertCurve:
    """Lazy, restartable sequence of unit-square segments along a Hilbert curve.

    Examples
    --------
    >>> curve = HilbertCurve(1)
    >>> len(curve)
    3
    >>> next(iter(curve)).tolist()
    [[0.0, 0.0], [0.0, 0.5]]
    """

    def __init__(self, order: int):
        if order < 0:
            raise ValueError(f"Hilbert order must be non-negative, got {order}")
        self.order = order
        self.side = 1 << order

    def __len__(self) -> int:
        return self.side * self.side - 1

    def points(self) -> Iterator[np.ndarray]:
        """Lattice points in curve order, divided by side (N² points)."""
        scale = float(self.side)
        for i in range(self.side * self.side):
            yield np.array(hilbert_d2xy(i, self.order), dtype=np.float64) / scale

    def __iter__(self) -> Iterator[np.ndarray]:
        points = self.points()
        prev = next(points)
        for nxt in points:
            yield np.stack([prev, nxt])
            prev = nxt

    def __repr__(self) -> str:
        return f"HilbertCurve(order={self.order})"


def hilbert_path(order: int) -> np.ndarray:
    """Materialize the points of HilbertCurve(order) as a (N² − 1, 2, 2) path in [0, 1]²."""
    curve = HilbertCurve(order)
    if len(curve) == 0:
        logger.warning(f"Hilbert order {order} has a single cell; path is empty")
        return geometry.empty_path()
    return geometry.polyline_to_path(np.array(list(curve.points())))


def scanline_path(width: float, height: float, spacing: float) -> np.ndarray:
    """Horizontal full-width lines every `spacing` pixels, top to bottom.

    Already in pixel space; no frame mapping is needed. With this source the
    max thickness W·H / total_length equals `spacing` when the height is a
    multiple of the spacing.

    Raises
    ------
    ValueError
        If spacing is not positive
    """
    if spacing <= 0:
        raise ValueError(f"Scanline spacing must be positive, got {spacing}")
    rows = np.arange(0.0, float(height), float(spacing))
    path = np.zeros((len(rows), 2, 2), dtype=np.float64)
    path[:, 1, 0] = float(width)
    path[:, 0, 1] = rows
    path[:, 1, 1] = rows
    return path
