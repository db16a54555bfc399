from __future__ import annotations

from typing import Callable, List, Tuple
import logging
import time

import numpy as np

from ..models.image import Image
from ..models.cine_v3_config import CineV3Config
from ..models import tonal_operators as ops
from .image_service import ImageService

logger = logging.getLogger(__name__)

Stage = Tuple[str, Callable[[np.ndarray], np.ndarray]]


class CineV3FilterService:
    """
    Applies the nine Cine-V3 stages, in a fixed order, to one Image in place.
    *   No I/O here—works only with Image objects (RGB numpy arrays).
    *   Holds only its (immutable) config, so one instance can serve any
        number of images, sequentially or from several threads.
    """

    def __init__(self, config: CineV3Config | None = None,
                 image_service: ImageService | None = None):
        self.config = config or CineV3Config()
        self.img_svc = image_service or ImageService()
        self.stages = self._build_stages(self.config)

    @staticmethod
    def _build_stages(cfg: CineV3Config) -> List[Stage]:
        # Order matters: the operators do not commute.
        return [
            ("saturation_contrast",
             lambda px: ops.saturation_contrast(px, cfg.saturation, cfg.contrast_primary)),
            ("brightness", lambda px: ops.brightness(px, cfg.brightness_1)),
            ("sharpen", lambda px: ops.sharpen(px, cfg.sharpen_amount)),
            # "Clarity" and "Brilliance" approximations, kept apart from
            # the earlier contrast/brightness passes.
            ("clarity", lambda px: ops.contrast(px, cfg.contrast_secondary)),
            ("brilliance", lambda px: ops.brightness(px, cfg.brightness_2)),
            ("highlights_shadows",
             lambda px: ops.highlights_shadows(px, cfg.highlights, cfg.shadows)),
            ("levels", lambda px: ops.levels(px, cfg.black_point, cfg.white_point)),
            ("temperature", lambda px: ops.temperature(px, cfg.temperature)),
            ("hue", lambda px: ops.hue_rotate(px, cfg.hue_shift)),
        ]

    @property
    def stage_names(self) -> List[str]:
        return [name for name, _ in self.stages]

    # ─── Public API ────────────────────────────────────────────────
    def apply(self, img: Image) -> Image:
        """
        Run every stage on *img*.pixels and return the same Image.

        Raises:
            InvalidImage: the buffer is empty or not (H, W, 3) uint8. Nothing
                has been modified when this is raised.
        """
        self.img_svc.validate(img)
        height, width = self.img_svc.get_image_dimensions(img)

        started = time.perf_counter()
        for name, stage in self.stages:
            t0 = time.perf_counter()
            stage(img.pixels)
            logger.debug(f"{name:<20s} {width}x{height} in {(time.perf_counter() - t0) * 1000:.1f} ms")

        logger.debug(f"Cine-V3 applied to {width}x{height} in "
                     f"{(time.perf_counter() - started) * 1000:.1f} ms")
        return img
