# mediaproxy/services/catalog/ffmpeg_catalog.py
from __future__ import annotations

import re
import subprocess
from typing import Iterable, Optional

from mediaproxy.common.settings import get_settings
from mediaproxy.common.logging import get_logger
from mediaproxy.domain.dataclasses.catalog import PixelFormatEntry
from mediaproxy.domain.errors import BitDepthNotFound
from mediaproxy.domain.ports.catalog import PixelFormatCatalogPort

logger = get_logger(__name__)

# FLAGS NAME NB_COMPONENTS BITS_PER_PIXEL BIT_DEPTH, e.g.
# "IO... yuv420p                3             12      8-8-8"
PIX_FMT_LINE = re.compile(
    r"^.{5}\s+"
    r"(?P<name>[^\s=]+)\s+"
    r"(?P<nb_components>[0-9])\s+"
    r"(?P<bpp>[0-9]*)\s+"
    r"(?P<bit_depth>(?:[0-9]+-)*[0-9]+)$"
)


def parse_pix_fmt_line(line: str) -> Optional[PixelFormatEntry]:
    """Parse one listing row; header and separator lines give None."""
    m = PIX_FMT_LINE.match(line.rstrip("\r\n"))
    if not m:
        return None
    bpp = m.group("bpp")
    return PixelFormatEntry(
        name=m.group("name"),
        nb_components=int(m.group("nb_components")),
        bits_per_pixel=int(bpp) if bpp else None,
        bit_depth=m.group("bit_depth"),
    )


def _depth_of(entry: PixelFormatEntry) -> int:
    raw = entry.bit_depth
    if entry.nb_components > 1:
        # first component only
        raw = raw.split("-", 1)[0]
    try:
        return int(raw)
    except ValueError:
        return 0


def bit_depth_from_listing(lines: Iterable[str], pix_fmt: str) -> int:
    """
    First row whose name matches and whose component count is positive wins.
    Raises BitDepthNotFound when no such row exists.
    """
    for line in lines:
        entry = parse_pix_fmt_line(line)
        if entry is None or entry.name != pix_fmt:
            continue
        if entry.nb_components <= 0:
            continue
        return _depth_of(entry)
    raise BitDepthNotFound(f"pixel format {pix_fmt!r} not found")


class FFmpegPixelFormatCatalog(PixelFormatCatalogPort):
    """
    Looks up bit depths in `ffmpeg -pix_fmts`. Every call runs ffmpeg again;
    wrap it in a BitDepthResolver to cache per run.
    """

    def __init__(self, ffmpeg_bin: Optional[str] = None):
        self.ffmpeg_bin = ffmpeg_bin or get_settings().transcode.ffmpeg_bin

    def list_output(self) -> str:
        cmd = [self.ffmpeg_bin, "-hide_banner", "-pix_fmts"]
        try:
            proc = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise BitDepthNotFound("failed to execute ffmpeg -pix_fmts", detail=str(e)) from e
        if proc.returncode != 0:
            raise BitDepthNotFound(
                f"ffmpeg -pix_fmts returned non-zero exit code {proc.returncode}",
                detail=proc.stderr,
            )
        return (proc.stdout or "") + (proc.stderr or "")

    def bit_depth(self, pix_fmt: str) -> int:
        if not pix_fmt:
            raise BitDepthNotFound("stream has no pixel format")
        return bit_depth_from_listing(self.list_output().splitlines(), pix_fmt)
