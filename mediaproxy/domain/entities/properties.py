# mediaproxy/domain/entities/properties.py
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class MediaProperties:
    """
    Reduced decision record for one file.

    Multi-stream reduction is last-write-wins: `is_vertical` reflects the last
    video stream and `unsupported_audio_format` the last audio stream.
    `highest_bit_depth` is 0 when there is no video stream.
    """
    has_video_stream: bool = False
    has_audio_stream: bool = False
    is_vertical: bool = False
    unsupported_audio_format: bool = False
    highest_bit_depth: int = 0

    @property
    def is_usable(self) -> bool:
        return self.has_video_stream or self.has_audio_stream
