from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class PixelFormatEntry:
    """One row of `ffmpeg -pix_fmts`."""
    name: str
    nb_components: int
    bits_per_pixel: Optional[int]
    bit_depth: str             # raw, e.g. "8" or "10-10-10"


@dataclass(frozen=True)
class BitDepthResolution:
    """
    Outcome of a bit depth lookup: either resolved from the catalog, or
    defaulted (with the cause kept for logging).
    """
    pix_fmt: str
    depth: int
    defaulted: bool = False
    cause: Optional[str] = None

    @classmethod
    def resolved(cls, pix_fmt: str, depth: int) -> "BitDepthResolution":
        return cls(pix_fmt=pix_fmt, depth=depth)

    @classmethod
    def defaulted_to(cls, pix_fmt: str, depth: int, cause: str) -> "BitDepthResolution":
        return cls(pix_fmt=pix_fmt, depth=depth, defaulted=True, cause=cause)
