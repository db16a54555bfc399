"""
Error taxonomy for the Cine-V3 filter.
Every failure surfaced by the codec boundary or the pipeline is a FilterError.
"""


class FilterError(Exception):
    """Base exception for filter errors"""
    def __init__(self, message, error_code, details=None):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self):
        """Convert error to JSON-serializable dict"""
        return {
            "success": False,
            "error": self.message,
            "error_code": self.error_code,
            "details": self.details
        }


class DecodeError(FilterError):
    """Input bytes are not a valid or complete image"""
    def __init__(self, reason=None, num_bytes=0):
        super().__init__(
            message="Could not decode image bytes",
            error_code="DECODE_FAILED",
            details={
                "reason": reason,
                "num_bytes": num_bytes,
            }
        )


class InvalidImage(FilterError):
    """Buffer is empty or not shaped (H, W, 3)"""
    def __init__(self, shape=None, reason=None):
        super().__init__(
            message=f"Image buffer is unusable: shape={shape}",
            error_code="INVALID_IMAGE",
            details={
                "shape": list(shape) if shape is not None else None,
                "reason": reason,
            }
        )


class EncodeError(FilterError):
    """Producing the output bytes failed"""
    def __init__(self, reason=None, quality=None):
        super().__init__(
            message="Failed to encode image",
            error_code="ENCODE_FAILED",
            details={
                "reason": reason,
                "quality": quality,
            }
        )
