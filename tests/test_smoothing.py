"""Test quadratic Bézier corner smoothing.

Tests for hilbert_ink.approximation.smoothing:
    - Bézier evaluation at t = 0, 0.5, 1
    - Single L corner: head, arc subdivision and tail
    - Straight and gapped paths pass through unchanged
    - Endpoints of the whole path are preserved, result stays contiguous
    - Path of fewer than two segments is returned as-is

Run:
    pytest tests/test_smoothing.py -v
"""

import numpy as np
import pytest

from hilbert_ink.approximation import frame, hilbert, smoothing
from hilbert_ink.utils import geometry

L_PATH = geometry.as_path([((0, 0), (0, 4)), ((0, 4), (4, 4))])


def test_quadratic_bezier():
    p0, c, p1 = np.array([0.0, 0.0]), np.array([0.0, 4.0]), np.array([4.0, 4.0])
    pts = smoothing.quadratic_bezier(p0, c, p1, np.array([0.0, 0.5, 1.0]))
    np.testing.assert_allclose(pts, [[0.0, 0.0], [1.0, 3.0], [4.0, 4.0]])


class TestSmoothCorner:

    def test_pieces(self):
        head, arc, tail = smoothing.smooth_corner(L_PATH[0], L_PATH[1])
        np.testing.assert_allclose(head, [[0.0, 0.0], [0.0, 2.0]])
        np.testing.assert_allclose(tail, [[2.0, 4.0], [4.0, 4.0]])
        # mean length 4 → 4 arc segments from midpoint to midpoint
        assert arc.shape == (4, 2, 2)
        np.testing.assert_allclose(arc[0, 0], [0.0, 2.0])
        np.testing.assert_allclose(arc[-1, 1], [2.0, 4.0])

    def test_short_corner_uses_two_arc_segments(self):
        first = np.array([[0.0, 0.0], [0.0, 0.5]])
        second = np.array([[0.0, 0.5], [0.5, 0.5]])
        _, arc, _ = smoothing.smooth_corner(first, second)
        assert len(arc) == 2


class TestSmoothCorners:

    def test_l_corner(self):
        out = smoothing.smooth_corners(L_PATH)
        assert out.shape == (6, 2, 2)
        # Arc midpoint B(0.5) = 0.25·(0,2) + 0.5·(0,4) + 0.25·(2,4)
        np.testing.assert_allclose(out[3][0], [0.5, 3.5])

    def test_endpoints_preserved_and_contiguous(self):
        path = frame.crop_to_scale(hilbert.hilbert_path(3), 64, 64)
        out = smoothing.smooth_corners(path)
        np.testing.assert_allclose(out[0, 0], path[0, 0])
        np.testing.assert_allclose(out[-1, 1], path[-1, 1])
        np.testing.assert_allclose(out[:-1, 1], out[1:, 0], atol=1e-9)
        assert len(out) > len(path)

    def test_arc_is_shorter_than_corner(self):
        out = smoothing.smooth_corners(L_PATH)
        assert geometry.total_length(out) < geometry.total_length(L_PATH)

    def test_collinear_unchanged(self):
        straight = geometry.as_path([((0, 0), (2, 0)), ((2, 0), (5, 0))])
        np.testing.assert_array_equal(smoothing.smooth_corners(straight), straight)

    def test_gap_unchanged(self):
        gapped = geometry.as_path([((0, 0), (0, 4)), ((1, 4), (4, 4))])
        np.testing.assert_array_equal(smoothing.smooth_corners(gapped), gapped)

    def test_zero_length_segment_unchanged(self):
        path = geometry.as_path([((0, 0), (0, 4)), ((0, 4), (0, 4)), ((0, 4), (4, 4))])
        np.testing.assert_array_equal(smoothing.smooth_corners(path), path)

    @pytest.mark.parametrize("n", [0, 1])
    def test_short_paths(self, n):
        path = L_PATH[:n]
        out = smoothing.smooth_corners(path)
        np.testing.assert_array_equal(out, path)
        assert out is not path
