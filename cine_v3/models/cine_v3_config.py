from __future__ import annotations
from dataclasses import dataclass, fields
from typing import ClassVar, Dict
import os
from dotenv import load_dotenv


@dataclass(frozen=True)
class CineV3Config:
    """
    Value-object holding the Cine-V3 stage parameters in the units each
    tonal operator expects (factors, 8-bit levels, percent, degrees).
    """
    saturation:         float = 1.12     # luma-relative factor
    contrast_primary:   float = 1.03     # mid-gray factor, same pass as saturation
    brightness_1:       float = 2.0      # additive levels
    sharpen_amount:     float = 36.0     # unsharp-mask percent
    contrast_secondary: float = 1.60     # "clarity"
    brightness_2:       float = 3.0      # "brilliance"
    highlights:         float = -2.0     # levels added above mid luma
    shadows:            float = 6.0      # levels added below mid luma
    black_point:        int = 7
    white_point:        int = 252        # 255 - 3
    temperature:        float = -6.0     # percent
    hue_shift:          float = -4.0     # degrees
    jpeg_quality:       int = 95

    # field name -> environment variable read by from_env()
    ENV_VARS: ClassVar[Dict[str, str]] = {
        "saturation": "CINE_V3_SATURATION",
        "contrast_primary": "CINE_V3_CONTRAST_PRIMARY",
        "brightness_1": "CINE_V3_BRIGHTNESS_1",
        "sharpen_amount": "CINE_V3_SHARPEN_AMOUNT",
        "contrast_secondary": "CINE_V3_CONTRAST_SECONDARY",
        "brightness_2": "CINE_V3_BRIGHTNESS_2",
        "highlights": "CINE_V3_HIGHLIGHTS",
        "shadows": "CINE_V3_SHADOWS",
        "black_point": "CINE_V3_BLACK_POINT",
        "white_point": "CINE_V3_WHITE_POINT",
        "temperature": "CINE_V3_TEMPERATURE",
        "hue_shift": "CINE_V3_HUE_SHIFT",
        "jpeg_quality": "JPEG_QUALITY",
    }

    # ── Environment overrides ────────────────────────────────────────
    @classmethod
    def from_env(cls) -> CineV3Config:
        """
        Build a config from CINE_V3_* environment variables (and .env),
        falling back to the preset value for anything unset.
        """
        load_dotenv()
        defaults = cls()
        overrides = {}
        for name, var in cls.ENV_VARS.items():
            default = getattr(defaults, name)
            overrides[name] = type(default)(os.getenv(var, default))
        return cls(**overrides)

    def as_dict(self) -> dict:
        """Export configuration as dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
