# mediaproxy/domain/policies/media_analyzer.py
from __future__ import annotations

from typing import Iterable, Optional

from mediaproxy.common.logging import get_logger
from mediaproxy.domain.entities.probe import MediaSummary
from mediaproxy.domain.entities.properties import MediaProperties
from mediaproxy.domain.errors import NoUsableStreams
from mediaproxy.domain.policies.audio_support import is_audio_codec_supported
from mediaproxy.domain.ports.catalog import BitDepthResolverPort

logger = get_logger(__name__)

# Any video stream reports at least this depth, even 1-bit formats like monob.
MIN_VIDEO_BIT_DEPTH = 8


class MediaAnalyzer:
    """
    Reduces a MediaSummary to MediaProperties.

    Streams are folded in probe order and later streams overwrite earlier ones:
      - orientation comes from the last video stream (height >= width is vertical)
      - audio support comes from the last audio stream
      - bit depth is the maximum over all video streams, never below 8
    Streams that are neither video nor audio are ignored.
    """

    def __init__(
        self,
        resolver: BitDepthResolverPort,
        *,
        supported_audio_codecs: Optional[Iterable[str]] = None,
    ) -> None:
        self.resolver = resolver
        self.supported_audio_codecs = (
            frozenset(supported_audio_codecs) if supported_audio_codecs is not None else None
        )

    def analyze(self, summary: MediaSummary) -> MediaProperties:
        has_video = False
        has_audio = False
        is_vertical = False
        unsupported_audio = False
        highest_bit_depth = 0

        for stream in summary.streams:
            if stream.is_video:
                has_video = True

                res = self.resolver.resolve(stream.pix_fmt or "")
                if res.defaulted:
                    logger.warning(
                        "Could not resolve bit depth for pixel format %r (%s); using default of %d",
                        stream.pix_fmt, res.cause, res.depth,
                    )
                logger.debug("Bit depth for pixel format %s: %d", stream.pix_fmt, res.depth)

                highest_bit_depth = max(highest_bit_depth, res.depth, MIN_VIDEO_BIT_DEPTH)
                is_vertical = stream.height >= stream.width

            elif stream.is_audio:
                has_audio = True
                unsupported_audio = not is_audio_codec_supported(
                    stream.codec_name, self.supported_audio_codecs
                )

        return MediaProperties(
            has_video_stream=has_video,
            has_audio_stream=has_audio,
            is_vertical=is_vertical,
            unsupported_audio_format=unsupported_audio,
            highest_bit_depth=highest_bit_depth,
        )


def ensure_usable(summary: MediaSummary, props: MediaProperties) -> None:
    """Raise NoUsableStreams when there is nothing to build a proxy from."""
    if not summary.streams:
        raise NoUsableStreams("no streams found in media file", path=summary.path)
    if not props.is_usable:
        raise NoUsableStreams("no video or audio stream found", path=summary.path)
