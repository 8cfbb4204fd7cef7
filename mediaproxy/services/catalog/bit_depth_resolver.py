from __future__ import annotations

from typing import Dict, Optional

from mediaproxy.common.settings import get_settings
from mediaproxy.domain.dataclasses.catalog import BitDepthResolution
from mediaproxy.domain.errors import BitDepthNotFound
from mediaproxy.domain.ports.catalog import BitDepthResolverPort, PixelFormatCatalogPort


class BitDepthResolver(BitDepthResolverPort):
    """
    Caching front for a PixelFormatCatalogPort.

    Lookups are keyed by pixel format name and filled lazily; the cache lives
    as long as this object (one batch run). Failed lookups and unparseable
    depths come back as a defaulted resolution instead of raising.
    """

    def __init__(self, catalog: PixelFormatCatalogPort, default_depth: Optional[int] = None) -> None:
        self.catalog = catalog
        self.default_depth = int(default_depth or get_settings().default_bit_depth)
        self._cache: Dict[str, BitDepthResolution] = {}

    def resolve(self, pix_fmt: str) -> BitDepthResolution:
        key = pix_fmt or ""
        hit = self._cache.get(key)
        if hit is not None:
            return hit
        res = self._lookup(key)
        self._cache[key] = res
        return res

    def _lookup(self, pix_fmt: str) -> BitDepthResolution:
        try:
            depth = self.catalog.bit_depth(pix_fmt)
        except BitDepthNotFound as e:
            return BitDepthResolution.defaulted_to(pix_fmt, self.default_depth, str(e))
        if depth <= 0:
            return BitDepthResolution.defaulted_to(
                pix_fmt, self.default_depth, f"unparseable bit depth for {pix_fmt!r}"
            )
        return BitDepthResolution.resolved(pix_fmt, depth)

    @property
    def cached_count(self) -> int:
        return len(self._cache)
