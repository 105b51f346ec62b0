"""Corner smoothing with quadratic Bézier arcs.

For every contiguous pair of segments that changes direction, the corner is
replaced by a quadratic Bézier arc from the midpoint of the first segment,
controlled by the shared corner, to the midpoint of the second segment:

    B(t) = (1 − t)²·P0 + 2(1 − t)t·C + t²·P1

The arc is flattened into max(2, round((len_i + len_{i+1}) / 2)) sub-segments.
The second segment is carried forward truncated to (midpoint, stop), so the
next corner is measured against what is left of it.

Pairs separated by a gap (after cropping), collinear pairs and zero-length
segments pass through unchanged.
"""

import numpy as np

from ..utils import geometry

# Absolute tolerance for contiguity and direction comparisons (px)
CORNER_ATOL = 1e-9


def quadratic_bezier(p0: np.ndarray, control: np.ndarray, p1: np.ndarray, t: np.ndarray) -> np.ndarray:
    """Evaluate a quadratic Bézier curve.

    Parameters
    ----------
    p0, control, p1 : np.ndarray
        Start, control and end points, shape (2,)
    t : np.ndarray
        Parameter values in [0, 1], shape (M,)

    Returns
    -------
    np.ndarray
        Points on the curve, shape (M, 2)
    """
    t = np.asarray(t, dtype=np.float64)[:, None]
    one_minus_t = 1.0 - t
    return (one_minus_t ** 2) * p0 + 2.0 * one_minus_t * t * control + (t ** 2) * p1


def _changes_direction(first: np.ndarray, second: np.ndarray) -> bool:
    d1, len1 = geometry.unit_direction(first)
    d2, len2 = geometry.unit_direction(second)
    if d1 is None or d2 is None:
        return False
    return not np.allclose(d1, d2, rtol=0.0, atol=CORNER_ATOL)


def smooth_corner(first: np.ndarray, second: np.ndarray):
    """Round the corner shared by two contiguous segments.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        (truncated first segment (2, 2), arc path (M, 2, 2),
        truncated second segment (2, 2))
    """
    first = geometry.as_segment(first)
    second = geometry.as_segment(second)
    corner = first[1]
    mid_first = 0.5 * (first[0] + first[1])
    mid_second = 0.5 * (second[0] + second[1])

    mean_length = 0.5 * (geometry.segment_length(first) + geometry.segment_length(second))
    num = max(2, int(round(mean_length)))
    arc_points = quadratic_bezier(mid_first, corner, mid_second, np.linspace(0.0, 1.0, num + 1))

    return (
        np.stack([first[0], mid_first]),
        geometry.polyline_to_path(arc_points),
        np.stack([mid_second, second[1]]),
    )


def smooth_corners(path) -> np.ndarray:
    """Replace every direction change between contiguous segments by an arc.

    Parameters
    ----------
    path : array-like
        Path, shape (N, 2, 2); may be non-contiguous

    Returns
    -------
    np.ndarray
        Smoothed path; endpoints of the overall path are preserved
    """
    path = geometry.as_path(path)
    if len(path) < 2:
        return path.copy()

    parts = []
    current = path[0]
    for nxt in path[1:]:
        if geometry.is_contiguous(current, nxt, atol=CORNER_ATOL) and _changes_direction(current, nxt):
            head, arc, tail = smooth_corner(current, nxt)
            parts.append(head[None])
            parts.append(arc)
            current = tail
        else:
            parts.append(current[None])
            current = nxt
    parts.append(current[None])
    return geometry.concat_paths(parts)
