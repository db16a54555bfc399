# pipeline/capture_processor.py
from __future__ import annotations

import enum
import logging
from concurrent.futures import Executor, Future
from typing import Protocol

from ..models.cine_v3_config import CineV3Config
from ..models.filter_result import FilterResult
from ..services.image_service import ImageService
from ..services.cine_v3_filter_service import CineV3FilterService
from .cine_v3_filter import process_photo

logger = logging.getLogger(__name__)

OUTPUT_EXT = ".jpg"


class MediaKind(enum.Enum):
    PHOTO = "photo"
    VIDEO = "video"


class CaptureContext(Protocol):
    """
    Device access owned by the application shell (camera, permissions,
    lifecycle). Passed in per call; the filter core never holds one.
    """

    def capture_photo(self) -> bytes: ...

    def record_video(self) -> bytes: ...


def output_filename(timestamp_ms: int, ext: str = OUTPUT_EXT) -> str:
    """Name used by the app shell when it persists a result: '<epoch-ms>.jpg'."""
    return f"{int(timestamp_ms)}{ext}"


class CaptureProcessor:
    """
    Pulls media from an injected CaptureContext and routes it:
        • photos go through decode -> Cine-V3 -> encode
        • videos are returned byte-for-byte
    """

    def __init__(
        self,
        config: CineV3Config | None = None,
        *,
        image_service: ImageService | None = None,
        filter_service: CineV3FilterService | None = None,
    ):
        self.config = config or (filter_service.config if filter_service else CineV3Config())
        self.image_service = image_service or ImageService()
        self.filter_service = filter_service or CineV3FilterService(self.config, self.image_service)

    def process(self, data: bytes, kind: MediaKind = MediaKind.PHOTO) -> FilterResult:
        if kind is MediaKind.VIDEO:
            logger.info(f"Passing through {len(data)} bytes of video unmodified")
            return FilterResult.success(data)
        return process_photo(
            data,
            config=self.config,
            image_service=self.image_service,
            filter_service=self.filter_service,
        )

    def capture(self, context: CaptureContext, kind: MediaKind = MediaKind.PHOTO) -> FilterResult:
        if kind is MediaKind.VIDEO:
            data = context.record_video()
        else:
            data = context.capture_photo()
        return self.process(data, kind)

    def submit(
        self,
        executor: Executor,
        data: bytes,
        kind: MediaKind = MediaKind.PHOTO,
    ) -> "Future[FilterResult]":
        """Process *data* on the caller's worker pool instead of the UI thread."""
        return executor.submit(self.process, data, kind)
