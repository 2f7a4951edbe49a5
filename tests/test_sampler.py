"""Unit tests for the field sampler."""

import numpy as np
import pytest

from vspace import config as DEFAULTS
from vspace.config import ConfigurationError
from vspace.noise import OctaveParameters, fractal_noise
from vspace.sampler import FieldSampler, effective_scale, sample_field


@pytest.fixture
def params() -> OctaveParameters:
    return OctaveParameters()


class TestSampleField:
    """Tests for sample_field."""

    def test_shape_is_row_major(self, params: OctaveParameters) -> None:
        """test that the field is indexed [row, column]."""
        field = sample_field(7, 3, 16.0, (0.0, 0.0), params)

        assert field.shape == (3, 7)
        assert field.dtype == np.float64

    def test_pixels_sample_the_documented_coordinates(self, params: OctaveParameters) -> None:
        """test that pixel (px, py) evaluates ((px - ox) / s, (py - oy) / s)."""
        # given
        scale = 12.5
        offset = (3.25, -8.0)

        # when
        field = sample_field(6, 5, scale, offset, params)

        # then
        for py in range(5):
            for px in range(6):
                expected = fractal_noise((px - offset[0]) / scale, (py - offset[1]) / scale, params)
                assert field[py, px] == pytest.approx(expected, abs=1e-12)

    def test_values_are_normalized(self, params: OctaveParameters) -> None:
        """test that every sample lies in [0, 1]."""
        field = sample_field(64, 48, 9.0, (123.4, -56.7), params)

        assert field.min() >= 0.0
        assert field.max() <= 1.0

    def test_origin_pixel_is_one_half_at_zero_offset(self, params: OctaveParameters) -> None:
        """test that pixel (0, 0) with no offset lands on a lattice point."""
        field = sample_field(4, 4, 32.0, (0.0, 0.0), params)

        assert field[0, 0] == 0.5

    def test_scroll_shifts_the_field(self, params: OctaveParameters) -> None:
        """test that advancing the offset by (d, d) shifts the picture by d pixels."""
        # given
        d = 3
        before = sample_field(10, 8, 16.0, (0.0, 0.0), params)

        # when
        after = sample_field(10, 8, 16.0, (float(d), float(d)), params)

        # then
        np.testing.assert_allclose(after[d:, d:], before[:-d, :-d], rtol=0, atol=1e-12)

    @pytest.mark.parametrize("scale", [0.0, -5.0, 1e-9])
    def test_tiny_or_negative_scale_is_clamped(self, params: OctaveParameters, scale: float) -> None:
        """test that scales below the minimum behave like the minimum."""
        clamped = sample_field(4, 4, scale, (1.0, 2.0), params)
        reference = sample_field(4, 4, DEFAULTS.MIN_SCALE, (1.0, 2.0), params)

        assert np.array_equal(clamped, reference)

    def test_empty_field(self, params: OctaveParameters) -> None:
        """test that a zero-sized frame is allowed."""
        field = sample_field(0, 5, 16.0, (0.0, 0.0), params)

        assert field.shape == (5, 0)

    def test_negative_dimensions_are_rejected(self, params: OctaveParameters) -> None:
        """test that negative sizes raise a configuration error."""
        with pytest.raises(ConfigurationError):
            sample_field(-1, 5, 16.0, (0.0, 0.0), params)

    @pytest.mark.parametrize(("width", "height"), [(3.7, 2), (4, 2.0), (True, 3), ("8", 8)])
    def test_non_integer_dimensions_are_rejected(self, params: OctaveParameters, width, height) -> None:
        """test that sizes are never silently truncated."""
        with pytest.raises(ConfigurationError):
            sample_field(width, height, 16.0, (0.0, 0.0), params)

    def test_numpy_integer_dimensions_are_accepted(self, params: OctaveParameters) -> None:
        field = sample_field(np.int64(3), np.int32(2), 16.0, (0.0, 0.0), params)

        assert field.shape == (2, 3)


class TestEffectiveScale:
    """Tests for effective_scale."""

    def test_passes_normal_values_through(self) -> None:
        assert effective_scale(64.0) == 64.0

    def test_clamps_small_values(self) -> None:
        assert effective_scale(0.0) == DEFAULTS.MIN_SCALE
        assert effective_scale(-1.0) == DEFAULTS.MIN_SCALE


class TestFieldSampler:
    """Tests for FieldSampler."""

    def test_advance_moves_both_axes(self, params: OctaveParameters) -> None:
        """test diagonal scrolling."""
        # given
        sampler = FieldSampler(params)

        # when
        sampler.advance(0.5, 10.0)
        sampler.advance(0.25, 10.0)

        # then
        assert sampler.offset == (7.5, 7.5)

    def test_negative_speed_scrolls_backwards(self, params: OctaveParameters) -> None:
        """test reverse scrolling."""
        sampler = FieldSampler(params, offset=(10.0, 10.0))

        sampler.advance(1.0, -4.0)

        assert sampler.offset == (6.0, 6.0)

    def test_zero_speed_holds_still(self, params: OctaveParameters) -> None:
        """test that a static field keeps its offset."""
        sampler = FieldSampler(params, offset=(2.0, 3.0))

        sampler.advance(5.0, 0.0)

        assert sampler.offset == (2.0, 3.0)

    def test_reset_returns_to_origin(self, params: OctaveParameters) -> None:
        sampler = FieldSampler(params)
        sampler.advance(1.0, 42.0)

        sampler.reset()

        assert sampler.offset == (0.0, 0.0)

    def test_sample_uses_current_offset(self, params: OctaveParameters) -> None:
        """test that sample() matches sample_field() at the sampler's offset."""
        # given
        sampler = FieldSampler(params)
        sampler.advance(2.0, 1.5)

        # when
        field = sampler.sample(5, 4, 20.0)

        # then
        assert np.array_equal(field, sample_field(5, 4, 20.0, (3.0, 3.0), params))
