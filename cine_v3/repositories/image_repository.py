from io import BytesIO
import logging
import struct

import numpy as np
from PIL import Image as PILImage, ImageOps

from ..models.image import Image
from ..models.errors import DecodeError, EncodeError

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles byte-level decode/encode for Image entities.
    """

    @staticmethod
    def retrieve_image_dimensions(img: Image):
        return img.pixels.shape[:2]

    @staticmethod
    def decode(data: bytes) -> Image:
        """
        Decode a complete encoded image into RGB pixels.
        Truncated data is rejected rather than padded out. An EXIF Orientation
        tag is applied, so the pixels come out upright.
        """
        if not data:
            raise DecodeError(reason="empty input", num_bytes=0)

        try:
            with PILImage.open(BytesIO(data)) as pil_obj:
                pil_obj.load()
                upright = ImageOps.exif_transpose(pil_obj)
                arr = np.asarray(upright.convert("RGB"), dtype=np.uint8)
        except (OSError, ValueError, SyntaxError, struct.error,
                PILImage.DecompressionBombError) as err:
            # UnidentifiedImageError and "image file is truncated" are both OSErrors
            raise DecodeError(reason=str(err), num_bytes=len(data)) from err

        logger.debug(f"Decoded {len(data)} bytes into {arr.shape[1]}x{arr.shape[0]} RGB")
        return Image(pixels=np.ascontiguousarray(arr).copy())

    @staticmethod
    def encode(image: Image, quality: int = 95) -> bytes:
        np_img = image.pixels
        if not np_img.flags['C_CONTIGUOUS']:
            np_img = np.ascontiguousarray(np_img)

        buffer = BytesIO()
        try:
            PILImage.fromarray(np_img).save(buffer, format='JPEG', quality=quality)
        except (OSError, ValueError, TypeError, MemoryError) as err:
            raise EncodeError(reason=str(err), quality=quality) from err
        return buffer.getvalue()

