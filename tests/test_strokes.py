"""Test stroke renderers.

Tests for hilbert_ink.approximation.strokes:
    - zigzag: vertex sequence, sub-pixel cross stroke, zero-length segments
    - sine_ribbon: endpoints, amplitude bound, period count
    - continuous sine: phase offsets, seamless joins, thin-segment suppression
    - render_strokes dispatch and profile validation

Offsets follow d⊥ = (d.y, −d.x), so a segment heading +X offsets towards −Y
for positive values.

Run:
    pytest tests/test_strokes.py -v
"""

import math

import numpy as np
import pytest

from hilbert_ink.approximation import strokes
from hilbert_ink.approximation.strokes import StrokeStyle
from hilbert_ink.utils import geometry

COLLINEAR = geometry.as_path([((0, 0), (3, 0)), ((3, 0), (6, 0))])


class TestZigzag:

    def test_vertices(self):
        out = strokes.zigzag([(0, 0), (4, 0)], 2.0)
        vertices = np.vstack([out[:, 0], out[-1:, 1]])
        expected = [(0, 0), (0, 1), (1, -1), (2, 1), (3, -1), (4, 1), (4, 0)]
        np.testing.assert_allclose(vertices, expected, atol=1e-12)
        np.testing.assert_allclose(out[:-1, 1], out[1:, 0])

    def test_short_segment_cross_stroke(self):
        out = strokes.zigzag([(0, 0), (0.5, 0)], 2.0)
        vertices = np.vstack([out[:, 0], out[-1:, 1]])
        np.testing.assert_allclose(vertices, [(0, 0), (0.25, 1), (0.25, -1), (0.5, 0)], atol=1e-12)

    def test_zero_thickness_stays_on_segment(self):
        out = strokes.zigzag([(0, 2), (5, 2)], 0.0)
        np.testing.assert_allclose(out[..., 1], 2.0)

    def test_zero_length_is_empty(self):
        assert strokes.zigzag([(1, 1), (1, 1)], 2.0).shape == (0, 2, 2)


class TestSineRibbon:

    def test_endpoints_and_amplitude(self):
        out = strokes.sine_ribbon([(0, 0), (2, 0)], 2.0)
        # periods = ceil(2) = 2, 10 samples per period
        assert out.shape == (20, 2, 2)
        np.testing.assert_allclose(out[0, 0], [0.0, 0.0], atol=1e-9)
        np.testing.assert_allclose(out[-1, 1], [2.0, 0.0], atol=1e-9)
        assert np.abs(out[..., 1]).max() <= 1.0 + 1e-12

    def test_explicit_periods(self):
        assert len(strokes.sine_ribbon([(0, 0), (2, 0)], 1.0, periods=3)) == 30

    def test_invalid_periods(self):
        with pytest.raises(ValueError):
            strokes.sine_ribbon([(0, 0), (2, 0)], 1.0, periods=0)

    def test_zero_length_is_empty(self):
        assert len(strokes.sine_ribbon([(1, 1), (1, 1)], 2.0)) == 0


class TestContinuousSine:

    def test_phase_offsets(self):
        path = geometry.as_path([((0, 0), (3, 0)), ((3, 0), (3, 4)), ((3, 4), (0, 4))])
        np.testing.assert_allclose(strokes.phase_offsets(path), [0.0, 3.0, 7.0])
        assert strokes.phase_offsets(geometry.empty_path()).shape == (0,)

    def test_sine_offsets(self):
        s, offsets = strokes.sine_offsets(4.0, 2.0, 1.5, 0.5)
        assert s.shape == (4,) and offsets.shape == (4,)
        np.testing.assert_allclose(offsets, np.sin((1.5 + s * 4.0) * 0.5))
        assert len(strokes.sine_offsets(0.4, 2.0, 0.0, 1.0)[0]) == 2

    def test_seamless_join(self):
        out = strokes.continuous_sine(COLLINEAR, np.array([2.0, 2.0]), omega=1.0)
        # round(3) = 3 samples → 2 sub-segments per segment
        assert out.shape == (4, 2, 2)
        np.testing.assert_allclose(out[1, 1], out[2, 0], atol=1e-12)
        np.testing.assert_allclose(out[1, 1], [3.0, -math.sin(3.0)], atol=1e-12)

    def test_thin_segments_suppressed_but_phase_kept(self):
        out = strokes.continuous_sine(COLLINEAR, np.array([0.5, 2.0]), omega=1.0)
        assert out.shape == (2, 2, 2)
        # Phase of the second segment still starts at arc length 3
        np.testing.assert_allclose(out[0, 0], [3.0, -math.sin(3.0)], atol=1e-12)

    def test_all_thin_is_empty(self):
        out = strokes.continuous_sine(COLLINEAR, np.array([0.2, 0.99]), omega=1.0)
        assert out.shape == (0, 2, 2)

    def test_per_segment_render_is_stateless(self):
        a = strokes.render_sine_segment(COLLINEAR[1], 2.0, 3.0, 1.0)
        b = strokes.render_sine_segment(COLLINEAR[1], 2.0, 3.0, 1.0)
        np.testing.assert_array_equal(a, b)


class TestRenderStrokes:

    @pytest.mark.parametrize("style", list(StrokeStyle))
    def test_dispatch(self, style):
        out = strokes.render_strokes(COLLINEAR, [2.0, 2.0], style)
        assert out.ndim == 3 and out.shape[1:] == (2, 2)
        assert len(out) > 0

    def test_string_style(self):
        np.testing.assert_array_equal(
            strokes.render_strokes(COLLINEAR, [1.0, 1.0], "zigzag"),
            strokes.render_strokes(COLLINEAR, [1.0, 1.0], StrokeStyle.ZIGZAG),
        )

    def test_unknown_style(self):
        with pytest.raises(ValueError):
            strokes.render_strokes(COLLINEAR, [1.0, 1.0], "spiral")

    def test_profile_mismatch(self):
        with pytest.raises(ValueError):
            strokes.render_strokes(COLLINEAR, [1.0], StrokeStyle.SINE)

    def test_empty_path(self):
        out = strokes.render_strokes(geometry.empty_path(), [], StrokeStyle.ZIGZAG)
        assert out.shape == (0, 2, 2)
