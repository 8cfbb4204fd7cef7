from __future__ import annotations

from typing import Iterable, Optional

# Codecs every editor we target decodes without help. Any pcm_* variant is fine too.
SUPPORTED_AUDIO_CODECS = frozenset({"mp3", "opus", "flac", "ac3"})
PCM_MARKER = "pcm_"


def is_audio_codec_supported(codec_name: str, supported: Optional[Iterable[str]] = None) -> bool:
    """
    True iff the codec name contains "pcm_" or exactly equals one of the
    supported codecs. The substring rule wins over the set lookup.
    """
    codec = codec_name or ""
    if PCM_MARKER in codec:
        return True
    allowed = SUPPORTED_AUDIO_CODECS if supported is None else frozenset(supported)
    return codec in allowed
