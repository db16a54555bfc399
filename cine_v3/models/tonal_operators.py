"""
Tonal operators for the Cine-V3 grade.

Every operator takes an RGB uint8 array of shape (H, W, 3), computes in
float64, truncates toward zero, clamps to [0, 255] and writes the result
back into the same array, which it also returns.

Work is done in row strips of about STRIP_PIXELS pixels, so float scratch
stays bounded whatever the image size. Sharpen is the only operator that
keeps a full-size copy (its uint8 snapshot).
"""

from typing import Callable

import cv2
import numpy as np

MID_GRAY = 128.0

# Highlight/shadow blend: smoothstep over [MID_GRAY - w, MID_GRAY + w] of luma
TONE_BLEND_HALF_WIDTH = 32.0

STRIP_PIXELS = 4096


# ─── Helpers ─────────────────────────────────────────────────────────
def _luma(rgb: np.ndarray) -> np.ndarray:
    """
    Rec.601 luma on the 0-255 scale, shape (H, W).
    Integer weights keep gray pixels exact (L == v when r == g == b).
    """
    return (299.0 * rgb[..., 0] + 587.0 * rgb[..., 1] + 114.0 * rgb[..., 2]) / 1000.0


def _store(pixels: np.ndarray, values: np.ndarray) -> np.ndarray:
    """Truncate and clamp *values* in place, then write them into the uint8 buffer."""
    np.trunc(values, out=values)
    np.clip(values, 0.0, 255.0, out=values)
    pixels[...] = values
    return pixels


def _strip_rows(pixels: np.ndarray) -> int:
    return max(1, STRIP_PIXELS // max(1, pixels.shape[1]))


def _per_strip(pixels: np.ndarray, kernel: Callable[[np.ndarray], np.ndarray]) -> np.ndarray:
    """
    Run *kernel* on float64 copies of consecutive row strips and store each
    result back. *kernel* may modify and return its argument.
    """
    rows = _strip_rows(pixels)
    for top in range(0, pixels.shape[0], rows):
        strip = pixels[top:top + rows]
        _store(strip, kernel(strip.astype(np.float64)))
    return pixels


def _smoothstep(edge0: float, edge1: float, x: np.ndarray) -> np.ndarray:
    t = np.clip((x - edge0) / (edge1 - edge0), 0.0, 1.0)
    return t * t * (3.0 - 2.0 * t)


# ─── Per-pixel operators ─────────────────────────────────────────────
def saturation_contrast(pixels: np.ndarray, saturation: float, contrast: float) -> np.ndarray:
    """
    Scale each channel's distance from the pixel's luma by *saturation*,
    then its distance from mid-gray by *contrast*. One pass, one truncation.
    """
    def kernel(rgb):
        lum = _luma(rgb)[..., np.newaxis]
        rgb -= lum
        rgb *= saturation
        rgb += lum
        rgb -= MID_GRAY
        rgb *= contrast
        rgb += MID_GRAY
        return rgb

    return _per_strip(pixels, kernel)


def brightness(pixels: np.ndarray, amount: float) -> np.ndarray:
    """Add *amount* levels to every channel."""
    def kernel(rgb):
        rgb += amount
        return rgb

    return _per_strip(pixels, kernel)


def contrast(pixels: np.ndarray, factor: float) -> np.ndarray:
    """(v - 128) * factor + 128 on every channel."""
    def kernel(rgb):
        rgb -= MID_GRAY
        rgb *= factor
        rgb += MID_GRAY
        return rgb

    return _per_strip(pixels, kernel)


def highlights_shadows(pixels: np.ndarray, highlights: float, shadows: float) -> np.ndarray:
    """
    Shift bright pixels by *highlights* and dark pixels by *shadows* levels.
    The two deltas are cross-faded with a smoothstep on luma around mid-gray
    so there is no hard edge at the threshold.
    """
    def kernel(rgb):
        weight = _smoothstep(
            MID_GRAY - TONE_BLEND_HALF_WIDTH,
            MID_GRAY + TONE_BLEND_HALF_WIDTH,
            _luma(rgb),
        )
        delta = highlights * weight + shadows * (1.0 - weight)
        rgb += delta[..., np.newaxis]
        return rgb

    return _per_strip(pixels, kernel)


def levels(pixels: np.ndarray, black: int = 0, white: int = 255) -> np.ndarray:
    """
    Remap [black, white] to [0, 255] on R, G and B.
    A degenerate range (white <= black) leaves the buffer untouched.
    """
    value_range = white - black
    if value_range <= 0:
        return pixels
    scale = 255.0 / value_range

    def kernel(rgb):
        rgb -= black
        rgb *= scale
        return rgb

    return _per_strip(pixels, kernel)


def temperature(pixels: np.ndarray, amount: float) -> np.ndarray:
    """
    r *= 1 - amount/100, b *= 1 + amount/100, green untouched.
    A negative amount therefore lifts red and lowers blue.
    """
    r_adj = 1.0 - amount / 100.0
    b_adj = 1.0 + amount / 100.0

    def kernel(rgb):
        rgb[..., 0] *= r_adj
        rgb[..., 2] *= b_adj
        return rgb

    return _per_strip(pixels, kernel)


def _rotate_hue_strip(rgb: np.ndarray, degrees: float) -> np.ndarray:
    r, g, b = rgb[..., 0], rgb[..., 1], rgb[..., 2]
    v = rgb.max(axis=-1)
    chroma = v - rgb.min(axis=-1)

    safe_chroma = np.where(chroma > 0, chroma, 1.0)
    hue = np.select(
        [chroma == 0, v == r, v == g],
        [0.0, np.mod((g - b) / safe_chroma, 6.0), (b - r) / safe_chroma + 2.0],
        default=(r - g) / safe_chroma + 4.0,
    )
    hue = np.mod(hue * 60.0 + degrees, 360.0) / 60.0

    x = chroma * (1.0 - np.abs(np.mod(hue, 2.0) - 1.0))
    zero = np.zeros_like(chroma)
    sector = np.floor(hue).astype(np.int64) % 6
    sectors = [sector == i for i in range(6)]
    m = v - chroma

    rgb[..., 0] = np.select(sectors, [chroma, x, zero, zero, x, chroma]) + m
    rgb[..., 1] = np.select(sectors, [x, chroma, chroma, x, zero, zero]) + m
    rgb[..., 2] = np.select(sectors, [zero, zero, x, chroma, chroma, x]) + m
    return rgb


def hue_rotate(pixels: np.ndarray, degrees: float) -> np.ndarray:
    """
    Rotate hue in HSV space by *degrees*, keeping S and V.
    Whole turns are an exact identity.
    """
    if degrees % 360.0 == 0.0:
        return pixels
    return _per_strip(pixels, lambda rgb: _rotate_hue_strip(rgb, degrees))


# ─── Neighbourhood operators ─────────────────────────────────────────
def box_blur_3x3(rgb: np.ndarray) -> np.ndarray:
    """3x3 mean per channel with replicated edges; float64 in, float64 out."""
    return cv2.blur(rgb, (3, 3), borderType=cv2.BORDER_REPLICATE)


def sharpen(pixels: np.ndarray, amount: float) -> np.ndarray:
    """
    Unsharp mask: orig + amount/100 * (orig - blur(orig)).
    All neighbourhood reads come from a uint8 snapshot taken before the pass,
    never from pixels already rewritten in this pass. Each strip is blurred
    together with one halo row above and below, so strip seams match a
    whole-image blur.
    """
    snapshot = pixels.copy()
    height = pixels.shape[0]
    rows = _strip_rows(pixels)
    k = amount / 100.0

    for top in range(0, height, rows):
        bottom = min(height, top + rows)
        lo, hi = max(0, top - 1), min(height, bottom + 1)
        window = snapshot[lo:hi].astype(np.float64)
        inner = slice(top - lo, top - lo + (bottom - top))

        orig = window[inner]
        detail = orig - box_blur_3x3(window)[inner]
        detail *= k
        detail += orig
        _store(pixels[top:bottom], detail)
    return pixels
