"""Subdivide segments into pieces no longer than a max length.

The partition is the sampling granularity of everything downstream: one
thickness value is estimated per sub-segment.
"""

import math

import numpy as np

from ..utils import geometry


def partition_segment(segment, max_length: float) -> np.ndarray:
    """Split a segment into ceil(L / max_length) equal consecutive pieces.

    Parameters
    ----------
    segment : array-like
        Segment, shape (2, 2)
    max_length : float
        Maximum sub-segment length (> 0)

    Returns
    -------
    np.ndarray
        Sub-segments, shape (K, 2, 2); K == 1 (the segment itself) when
        L <= max_length. The last stop equals the original stop exactly.

    Raises
    ------
    ValueError
        If max_length is not positive
    """
    if not max_length > 0:
        raise ValueError(f"max_length must be positive, got {max_length}")
    seg = geometry.as_segment(segment)
    length = geometry.segment_length(seg)
    if length <= max_length:
        return seg[None].copy()

    num = int(math.ceil(length / max_length))
    frac = np.arange(num + 1, dtype=np.float64) / num
    points = seg[0] + frac[:, None] * (seg[1] - seg[0])
    points[-1] = seg[1]
    return geometry.polyline_to_path(points)


def partition_path(path, max_length: float) -> np.ndarray:
    """Partition every segment, concatenating results in path order."""
    if not max_length > 0:
        raise ValueError(f"max_length must be positive, got {max_length}")
    path = geometry.as_path(path)
    return geometry.concat_paths(partition_segment(seg, max_length) for seg in path)
