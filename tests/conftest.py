"""
Pytest configuration and fixtures for Cine-V3 filter tests.
"""
from io import BytesIO

import numpy as np
import pytest
from PIL import Image as PILImage

from cine_v3.models.image import Image


def _encode(pixels, fmt, **kwargs):
    buffer = BytesIO()
    PILImage.fromarray(pixels).save(buffer, format=fmt, **kwargs)
    return buffer.getvalue()


@pytest.fixture
def gray_2x2():
    """2x2 mid-gray buffer."""
    return Image(pixels=np.full((2, 2, 3), 128, dtype=np.uint8))


@pytest.fixture
def random_pixels():
    """Seeded noise covering the whole 0-255 range."""
    rng = np.random.default_rng(42)
    return rng.integers(0, 256, size=(17, 23, 3), dtype=np.uint8)


@pytest.fixture
def gradient_pixels():
    """Smooth colour gradient, friendly to lossy compression."""
    h, w = 48, 64
    y, x = np.mgrid[0:h, 0:w]
    r = 40 + x * 3
    g = 60 + y * 3
    b = 200 - (x + y)
    return np.stack([r, g, b], axis=-1).clip(0, 255).astype(np.uint8)


@pytest.fixture
def jpeg_bytes(gradient_pixels):
    return _encode(gradient_pixels, "JPEG", quality=95)


@pytest.fixture
def png_bytes(gradient_pixels):
    return _encode(gradient_pixels, "PNG")


@pytest.fixture
def sideways_jpeg_bytes():
    """
    80x40 stored JPEG, red left half / blue right half, tagged
    Orientation=6 (display rotated 90 degrees clockwise, i.e. 40x80).
    """
    pixels = np.zeros((40, 80, 3), dtype=np.uint8)
    pixels[:, :40] = (220, 20, 20)
    pixels[:, 40:] = (20, 20, 220)
    exif = PILImage.Exif()
    exif[0x0112] = 6
    return _encode(pixels, "JPEG", quality=95, exif=exif.tobytes())
