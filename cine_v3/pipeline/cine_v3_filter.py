"""
Cine-V3 Photo Pipeline
Decodes a captured photo, applies the Cine-V3 grade and re-encodes it.
Either the whole sequence completes or the caller gets the failure; there
is no partial output and nothing is retried.
"""

import logging
from concurrent.futures import Executor, Future

from ..models.image import Image
from ..models.cine_v3_config import CineV3Config
from ..models.errors import FilterError
from ..models.filter_result import FilterResult
from ..services.image_service import ImageService
from ..services.cine_v3_filter_service import CineV3FilterService

logger = logging.getLogger(__name__)


def apply_cine_v3_filter(
    img: Image,
    *,
    filter_service: CineV3FilterService = None,
) -> Image:
    """
    Grade *img* in place with the fixed nine-stage Cine-V3 sequence.

    Args:
        img: Decoded RGB image; mutated and returned.
        filter_service: Service holding the stage parameters.

    Returns:
        Image: the same object, graded.

    Raises:
        InvalidImage: empty or malformed buffer.
    """
    filter_service = filter_service or CineV3FilterService()
    return filter_service.apply(img)


def process_photo(
    data: bytes,
    *,
    config: CineV3Config = None,
    image_service: ImageService = None,
    filter_service: CineV3FilterService = None,
) -> FilterResult:
    """
    decode -> Cine-V3 -> encode at the configured JPEG quality.

    Args:
        data: Encoded input image.
        config: Stage parameters and output quality (preset defaults).
        image_service: Codec helpers.
        filter_service: Stage runner; built from *config* when omitted.

    Returns:
        FilterResult: encoded bytes and size on success, otherwise the
        DecodeError / InvalidImage / EncodeError that stopped the call.
    """
    config = config or (filter_service.config if filter_service else CineV3Config())
    image_service = image_service or ImageService()
    filter_service = filter_service or CineV3FilterService(config, image_service)

    try:
        img = image_service.decode(data)
        apply_cine_v3_filter(img, filter_service=filter_service)
        encoded = image_service.encode(img, quality=config.jpeg_quality)
    except FilterError as err:
        logger.warning(f"Cine-V3 failed [{err.error_code}]: {err.message} {err.details}")
        return FilterResult.failure(err)

    logger.info(f"Cine-V3 processed {img.width}x{img.height} photo "
                f"({len(data)} -> {len(encoded)} bytes)")
    return FilterResult.success(encoded, size=(img.width, img.height))


def submit_photo(
    executor: Executor,
    data: bytes,
    *,
    config: CineV3Config = None,
) -> "Future[FilterResult]":
    """
    Run process_photo on *executor* so the calling (UI) thread is not blocked.
    The caller owns the executor; a started call always runs to completion.
    """
    return executor.submit(process_photo, data, config=config)
