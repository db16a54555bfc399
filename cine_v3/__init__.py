"""
Cine-V3 filter: a fixed nine-stage cinematic grade for decoded photos,
plus the JPEG decode/encode boundary around it.
"""

import logging

from .models.image import Image
from .models.cine_v3_config import CineV3Config
from .models.errors import FilterError, DecodeError, InvalidImage, EncodeError
from .models.filter_result import FilterResult
from .services.image_service import ImageService
from .services.cine_v3_filter_service import CineV3FilterService
from .pipeline.cine_v3_filter import apply_cine_v3_filter, process_photo, submit_photo
from .pipeline.capture_processor import CaptureContext, CaptureProcessor, MediaKind, output_filename

__version__ = "1.0.0"


def configure_logging(level: int = logging.INFO) -> None:
    """Centralized logging configuration for scripts embedding the filter."""
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


__all__ = [
    "Image",
    "CineV3Config",
    "FilterError",
    "DecodeError",
    "InvalidImage",
    "EncodeError",
    "FilterResult",
    "ImageService",
    "CineV3FilterService",
    "apply_cine_v3_filter",
    "process_photo",
    "submit_photo",
    "CaptureContext",
    "CaptureProcessor",
    "MediaKind",
    "output_filename",
    "configure_logging",
]
