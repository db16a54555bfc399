from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from .errors import FilterError


@dataclass
class FilterResult:
    """
    Data object for one decode -> filter -> encode call.
    Exactly one of `data` / `error` is set.
    """
    data: Optional[bytes] = None              # Encoded output (or untouched video bytes)
    size: Optional[Tuple[int, int]] = None    # (width, height) of a processed photo
    error: Optional[FilterError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: bytes, size: Tuple[int, int] | None = None) -> FilterResult:
        return cls(data=data, size=size)

    @classmethod
    def failure(cls, error: FilterError) -> FilterResult:
        return cls(error=error)

    def unwrap(self) -> bytes:
        """Return the output bytes or raise the stored error."""
        if self.error is not None:
            raise self.error
        return self.data
