from __future__ import annotations
from typing import Protocol
from mediaproxy.domain.dataclasses.catalog import BitDepthResolution

class PixelFormatCatalogPort(Protocol):
    # raises BitDepthNotFound
    def bit_depth(self, pix_fmt: str) -> int: ...


class BitDepthResolverPort(Protocol):
    # never raises; failures come back as a defaulted resolution
    def resolve(self, pix_fmt: str) -> BitDepthResolution: ...
