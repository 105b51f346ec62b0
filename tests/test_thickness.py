"""Test max thickness and per-segment thickness estimation.

Tests for hilbert_ink.approximation.thickness:
    - max_thickness = W·H / total length; zero length rejected
    - Scanline source: max thickness vs. spacing
    - Exact sampling lattice on one-pixel stripes (along and across)
    - White footprint → 0, black footprint → max_thickness
    - Gray footprint → proportional thickness
    - Zero-length segments sample their start point
    - Footprint straddling a black/white edge
    - Profile shape and invalid ceilings

Run:
    pytest tests/test_thickness.py -v
"""

import numpy as np
import pytest

from hilbert_ink.approximation import hilbert, thickness
from hilbert_ink.utils import geometry
from hilbert_ink.utils.geometry import DegenerateGeometryError

SEGMENT = np.array([[1.0, 4.0], [6.0, 4.0]])


class TestMaxThickness:

    def test_formula(self):
        path = geometry.as_path([((0, 0), (0, 4)), ((0, 4), (4, 4)), ((4, 4), (4, 0))])
        assert thickness.max_thickness(4, 4, path) == pytest.approx(16.0 / 12.0)

    @pytest.mark.parametrize("height,spacing,expected", [(8, 2.0, 2.0), (10, 4.0, 10.0 / 3.0)])
    def test_scanline_source(self, height, spacing, expected):
        # Equals the spacing only when the height is a multiple of it
        path = hilbert.scanline_path(6, height, spacing)
        assert thickness.max_thickness(6, height, path) == pytest.approx(expected)

    def test_zero_length_raises(self):
        with pytest.raises(DegenerateGeometryError):
            thickness.max_thickness(4, 4, geometry.as_path([((1, 1), (1, 1))]))
        with pytest.raises(DegenerateGeometryError):
            thickness.max_thickness(4, 4, geometry.empty_path())


class TestEstimateThickness:

    def test_white_is_zero(self):
        grid = np.full((8, 8), 255, dtype=np.uint8)
        assert thickness.estimate_thickness(grid, SEGMENT, 2.0) == 0.0

    def test_black_is_max(self):
        grid = np.zeros((8, 8), dtype=np.uint8)
        assert thickness.estimate_thickness(grid, SEGMENT, 2.0) == pytest.approx(2.0)

    def test_gray_is_proportional(self, gray_grid):
        value = thickness.estimate_thickness(gray_grid, [(0, 0), (3, 3)], 3.0)
        assert value == pytest.approx((255 - 128) / 255 * 3.0)

    def test_zero_length_samples_start(self):
        grid = np.full((8, 8), 255, dtype=np.uint8)
        grid[2, 5] = 0
        assert thickness.estimate_thickness(grid, [(5, 2), (5, 2)], 4.0) == pytest.approx(4.0)
        assert thickness.estimate_thickness(grid, [(0, 0), (0, 0)], 4.0) == 0.0

    def test_half_dark_corridor(self):
        # Dark rows above y = 4, white below: the corridor straddles the edge
        grid = np.full((8, 8), 255, dtype=np.uint8)
        grid[:4] = 0
        value = thickness.estimate_thickness(grid, SEGMENT, 4.0)
        assert 0.0 < value < 4.0

    @pytest.mark.parametrize("stripe,expected", [
        # SEGMENT (1, 4) → (6, 4), ceiling 2: num = 5, num_perp = 2, so samples
        # lie at x ∈ {1, 2, 3, 4, 5} (stop excluded) and y ∈ {5, 4} (d⊥ = (0, −1),
        # offsets −1 and 0: the fan reaches one pixel below, none above)
        (("col", 3), 0.4),
        (("col", 1), 0.4),
        (("col", 6), 0.0),
        (("row", 5), 1.0),
        (("row", 4), 1.0),
        (("row", 3), 0.0),
    ])
    def test_sampling_lattice_on_stripes(self, stripe, expected):
        grid = np.full((8, 8), 255, dtype=np.uint8)
        axis, index = stripe
        if axis == "col":
            grid[:, index] = 0
        else:
            grid[index, :] = 0
        assert thickness.estimate_thickness(grid, SEGMENT, 2.0) == pytest.approx(expected)

    def test_sampling_lattice_reversed_segment(self):
        # Reversed direction flips d⊥ to (0, 1): samples at y ∈ {3, 4}
        grid = np.full((8, 8), 255, dtype=np.uint8)
        grid[3, :] = 0
        reverse = SEGMENT[::-1]
        assert thickness.estimate_thickness(grid, reverse, 2.0) == pytest.approx(1.0)

    def test_fractional_ceiling(self):
        grid = np.zeros((8, 8), dtype=np.uint8)
        # num_perp = max(1, round(0.3)) = 1
        assert thickness.estimate_thickness(grid, SEGMENT, 0.3) == pytest.approx(0.3)

    @pytest.mark.parametrize("ceiling", [0.0, -1.0, float("inf"), float("nan")])
    def test_invalid_ceiling(self, gray_grid, ceiling):
        with pytest.raises(DegenerateGeometryError):
            thickness.estimate_thickness(gray_grid, SEGMENT, ceiling)


class TestEstimateProfile:

    def test_shape_and_range(self):
        grid = np.tile(np.linspace(0, 255, 16).astype(np.uint8), (16, 1))
        path = geometry.polyline_to_path(np.array([[0, 8], [4, 8], [8, 8], [12, 8], [15, 8]]))
        profile = thickness.estimate_profile(grid, path, 2.0)
        assert profile.shape == (4,)
        assert np.all((profile >= 0.0) & (profile <= 2.0))
        # Darker on the left
        assert np.all(np.diff(profile) < 0)

    def test_empty_path(self, gray_grid):
        assert thickness.estimate_profile(gray_grid, geometry.empty_path(), 1.0).shape == (0,)
