"""
Tests for the individual tonal operators.
"""
import tracemalloc

import numpy as np
import pytest

from cine_v3.models import tonal_operators as ops


def _px(*rgb):
    return np.array([[list(rgb)]], dtype=np.uint8)


class TestRangeInvariant:
    """Every operator keeps (H, W, 3) uint8 and clamps instead of wrapping."""

    @pytest.mark.parametrize("apply", [
        lambda px: ops.saturation_contrast(px, 3.0, 2.5),
        lambda px: ops.brightness(px, 300),
        lambda px: ops.brightness(px, -300),
        lambda px: ops.sharpen(px, 500),
        lambda px: ops.contrast(px, 4.0),
        lambda px: ops.highlights_shadows(px, -80.0, 80.0),
        lambda px: ops.levels(px, 60, 90),
        lambda px: ops.temperature(px, -90),
        lambda px: ops.hue_rotate(px, 137.0),
    ])
    def test_output_stays_in_range(self, apply, random_pixels):
        """Test extreme parameters never leave [0, 255]."""
        out = apply(random_pixels)
        assert out.dtype == np.uint8
        assert out.shape == (17, 23, 3)
        assert out.min() >= 0 and out.max() <= 255

    def test_operators_write_in_place(self, random_pixels):
        """Test the returned array is the input buffer."""
        assert ops.brightness(random_pixels, 5) is random_pixels
        assert ops.sharpen(random_pixels, 36) is random_pixels
        assert ops.hue_rotate(random_pixels, -4.0) is random_pixels

    def test_brightness_saturates_at_white(self):
        """Test 250 + 10 clamps to 255 rather than wrapping to 4."""
        assert ops.brightness(_px(250, 250, 250), 10).tolist() == [[[255, 255, 255]]]


class TestSaturationContrast:

    def test_gray_is_unchanged(self):
        """Test mid-gray has no chroma and sits on the contrast pivot."""
        out = ops.saturation_contrast(_px(128, 128, 128), 1.12, 1.03)
        assert out.tolist() == [[[128, 128, 128]]]

    def test_colour_pixel_matches_formula(self):
        """Test luma-relative saturation followed by mid-gray contrast."""
        # L = 124.2; r: 124.2 + 75.8 * 1.12 = 209.096 -> 128 + 81.096 * 1.03 = 211.53
        out = ops.saturation_contrast(_px(200, 100, 50), 1.12, 1.03)
        assert out.tolist() == [[[211, 96, 38]]]


class TestBrightnessAndContrast:

    def test_brightness_adds_levels(self):
        assert ops.brightness(_px(10, 128, 200), 3).tolist() == [[[13, 131, 203]]]

    def test_secondary_contrast_formula(self):
        """Test (v - 128) * 1.6 + 128 with truncation."""
        out = ops.contrast(_px(130, 100, 128), 1.60)
        # 131.2 -> 131, 83.2 -> 83, 128
        assert out.tolist() == [[[131, 83, 128]]]

    def test_contrast_clamps_dark_values(self):
        assert ops.contrast(_px(0, 0, 0), 1.60).tolist() == [[[0, 0, 0]]]


class TestSharpen:

    def test_uniform_image_is_unchanged(self):
        """Test a flat field has no detail to amplify."""
        pixels = np.full((4, 5, 3), 130, dtype=np.uint8)
        assert (ops.sharpen(pixels, 36) == 130).all()

    def test_reads_from_snapshot(self):
        """Test neighbours see the pre-pass values, not rewritten ones."""
        pixels = np.zeros((3, 3, 3), dtype=np.uint8)
        pixels[1, 1] = 100
        out = ops.sharpen(pixels, 100)

        expected = np.zeros((3, 3, 3), dtype=np.uint8)
        # centre: 100 + (100 - 100/9) = 188.9; every neighbour goes negative
        expected[1, 1] = 188
        np.testing.assert_array_equal(out, expected)

    def test_matches_unsharp_mask_reference(self, random_pixels):
        """Test against a plain numpy 3x3 box blur with edge padding."""
        original = random_pixels.astype(np.float64)
        padded = np.pad(original, ((1, 1), (1, 1), (0, 0)), mode="edge")
        h, w = original.shape[:2]
        blurred = sum(padded[dy:dy + h, dx:dx + w] for dy in range(3) for dx in range(3)) / 9.0
        expected = np.clip(np.trunc(original + 0.36 * (original - blurred)), 0, 255)

        out = ops.sharpen(random_pixels, 36).astype(np.int64)
        assert np.abs(out - expected).max() <= 1


class TestHighlightsShadows:

    @pytest.mark.parametrize("value, expected", [
        (250, 248),   # fully highlight: -2
        (20, 26),     # fully shadow: +6
        (128, 130),   # threshold: half of each, -1 + 3
        (134, 134),   # 6 - 8 * smoothstep(0.59375) = 0.888
    ])
    def test_gray_levels(self, value, expected):
        out = ops.highlights_shadows(_px(value, value, value), -2.0, 6.0)
        assert out.tolist() == [[[expected] * 3]]

    def test_no_band_at_threshold(self):
        """Test adjacent luma values around the pivot shift by nearly the same delta."""
        ramp = np.arange(90, 170, dtype=np.uint8)
        pixels = np.repeat(ramp[np.newaxis, :, np.newaxis], 3, axis=2)
        out = ops.highlights_shadows(pixels.copy(), -2.0, 6.0).astype(int)
        shift = out[0, :, 0] - ramp.astype(int)
        assert np.abs(np.diff(shift)).max() <= 1


class TestLevels:

    def test_degenerate_range_is_noop(self, random_pixels):
        before = random_pixels.copy()
        ops.levels(random_pixels, black=200, white=200)
        ops.levels(random_pixels, black=210, white=40)
        np.testing.assert_array_equal(random_pixels, before)

    def test_remaps_black_and_white_points(self):
        # (130 - 7) * 255 / 245 = 128.02; below black clamps to 0; above white to 255
        out = ops.levels(_px(130, 3, 255), black=7, white=252)
        assert out.tolist() == [[[128, 0, 255]]]


class TestTemperature:

    def test_zero_is_identity(self, random_pixels):
        before = random_pixels.copy()
        np.testing.assert_array_equal(ops.temperature(random_pixels, 0), before)

    def test_negative_lifts_red_and_lowers_blue(self):
        # 125 * 1.06 = 132.5, 125 * 0.94 = 117.5
        out = ops.temperature(_px(125, 60, 125), -6)
        assert out.tolist() == [[[132, 60, 117]]]


class TestHueRotate:

    @pytest.mark.parametrize("degrees", [0.0, 360.0, -720.0])
    def test_whole_turns_are_identity(self, degrees, random_pixels):
        before = random_pixels.copy()
        np.testing.assert_array_equal(ops.hue_rotate(random_pixels, degrees), before)

    def test_tiny_rotation_stays_within_one_level(self, random_pixels):
        before = random_pixels.astype(int)
        out = ops.hue_rotate(random_pixels, 1e-9).astype(int)
        assert np.abs(out - before).max() <= 1

    def test_primary_rotation(self):
        """Test pure red turns into pure green at +120 degrees."""
        assert ops.hue_rotate(_px(255, 0, 0), 120.0).tolist() == [[[0, 255, 0]]]

    def test_gray_has_no_hue(self):
        assert ops.hue_rotate(_px(77, 77, 77), -4.0).tolist() == [[[77, 77, 77]]]

    def test_preserves_value_and_chroma(self, random_pixels):
        before = random_pixels.astype(int)
        out = ops.hue_rotate(random_pixels, -4.0).astype(int)
        assert np.abs(out.max(axis=-1) - before.max(axis=-1)).max() <= 1
        assert np.abs(out.min(axis=-1) - before.min(axis=-1)).max() <= 1


class TestScratchMemory:
    """Operators work in row strips; only sharpen keeps a full-size snapshot."""

    @pytest.mark.parametrize("apply, limit", [
        (lambda px: ops.saturation_contrast(px, 1.12, 1.03), 1.0),
        (lambda px: ops.brightness(px, 2), 1.0),
        (lambda px: ops.contrast(px, 1.60), 1.0),
        (lambda px: ops.highlights_shadows(px, -2.0, 6.0), 1.0),
        (lambda px: ops.levels(px, 7, 252), 1.0),
        (lambda px: ops.temperature(px, -6), 1.0),
        (lambda px: ops.hue_rotate(px, -4.0), 1.0),
        # uint8 snapshot (1x) plus strip scratch
        (lambda px: ops.sharpen(px, 36), 1.5),
    ])
    def test_peak_allocation_is_bounded(self, apply, limit):
        """Test peak extra memory stays under *limit* times the buffer size."""
        pixels = np.random.default_rng(7).integers(0, 256, size=(1024, 1024, 3), dtype=np.uint8)
        tracemalloc.start()
        try:
            apply(pixels)
            _, peak = tracemalloc.get_traced_memory()
        finally:
            tracemalloc.stop()
        assert peak / pixels.nbytes <= limit

    def test_strips_match_single_pass(self, random_pixels, monkeypatch):
        """Test strip seams do not change the result."""
        whole = random_pixels.copy()
        ops.sharpen(whole, 36)
        ops.hue_rotate(whole, -4.0)

        monkeypatch.setattr(ops, "STRIP_PIXELS", 23 * 2)
        stripped = random_pixels.copy()
        ops.sharpen(stripped, 36)
        ops.hue_rotate(stripped, -4.0)

        np.testing.assert_array_equal(stripped, whole)
