from __future__ import annotations
from dataclasses import dataclass
import numpy as np


@dataclass
class Image:
    """
    Simple data object: RGB pixels, mutated in place by the filter stages.
    No codec logic outside the repository layer.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype uint8, RGB order.

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])
