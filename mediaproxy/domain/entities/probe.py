# mediaproxy/domain/entities/probe.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from mediaproxy.domain.enums.stream_kind import StreamKind


@dataclass(frozen=True)
class StreamDescriptor:
    """
    One elementary stream as reported by the prober.
    `kind` is passed through verbatim (video, audio, subtitle, data, ...).
    Width/height/pix_fmt are only meaningful for video streams.
    """
    index: int
    kind: str
    codec_name: str = ""
    profile: Optional[str] = None
    width: int = 0
    height: int = 0
    pix_fmt: Optional[str] = None
    bit_rate: Optional[int] = None

    @property
    def is_video(self) -> bool:
        return self.kind == StreamKind.video

    @property
    def is_audio(self) -> bool:
        return self.kind == StreamKind.audio


@dataclass(frozen=True)
class MediaSummary:
    """Container-level metadata plus streams, in probe order."""
    path: Path
    duration_sec: Optional[float] = None
    bit_rate: Optional[int] = None
    streams: Tuple[StreamDescriptor, ...] = field(default_factory=tuple)
