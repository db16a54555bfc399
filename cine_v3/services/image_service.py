from typing import Tuple
import logging

import numpy as np

from ..models.image import Image
from ..models.errors import InvalidImage
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """Codec and buffer helpers.  No tonal math here."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def decode(self, data: bytes) -> Image:
        """Decode encoded image bytes into an RGB Image."""
        return self.image_repository.decode(data)

    def encode(self, image: Image, quality: int = 95) -> bytes:
        """
        Business-level method to serialize the image as JPEG bytes.
        """
        data = self.image_repository.encode(image, quality=quality)
        logger.debug(f"Encoded {image.width}x{image.height} at q={quality}: {len(data)} bytes")
        return data

    def get_image_dimensions(self, img: Image) -> Tuple[int, int]:
        return self.image_repository.retrieve_image_dimensions(img)

    def validate(self, img: Image) -> None:
        """
        Raise InvalidImage unless the buffer is a non-empty (H, W, 3) uint8 array.

        Args:
            img (Image): An image object
        """
        pixels = img.pixels
        if not isinstance(pixels, np.ndarray):
            raise InvalidImage(shape=None, reason="pixels is not an array")

        shape = pixels.shape
        if pixels.ndim != 3 or shape[2] != 3:
            raise InvalidImage(shape=shape, reason="expected (H, W, 3)")
        if shape[0] == 0 or shape[1] == 0:
            raise InvalidImage(shape=shape, reason="zero width or height")
        if pixels.dtype != np.uint8:
            raise InvalidImage(shape=shape, reason=f"expected uint8, got {pixels.dtype}")
        if not pixels.flags.writeable:
            raise InvalidImage(shape=shape, reason="buffer is read-only")
