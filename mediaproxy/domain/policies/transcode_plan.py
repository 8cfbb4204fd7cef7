# mediaproxy/domain/policies/transcode_plan.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from mediaproxy.common.settings import TranscodeConfig
from mediaproxy.domain.dataclasses.plan import TranscodePlan
from mediaproxy.domain.entities.properties import MediaProperties
from mediaproxy.domain.policies.proxy_paths import ORIGINALS_SUBDIR, original_path_for

_DEFAULT_CONFIG = TranscodeConfig()


def _preamble(cfg: TranscodeConfig) -> List[str]:
    return [cfg.ffmpeg_bin, "-y", "-hide_banner", "-loglevel", cfg.log_level]


def build_proxy_plan(
    source: Path | str,
    proxy: Path | str,
    props: MediaProperties,
    acceleration_enabled: bool,
    config: Optional[TranscodeConfig] = None,
) -> TranscodePlan:
    """
    Compile the proxy invocation: re-encode video to a capped-bitrate 8-bit
    H.264 scaled down by orientation, and force PCM audio only when the
    source audio codec is unsupported. Supported audio gets no flags.
    """
    cfg = config or _DEFAULT_CONFIG
    cmd = _preamble(cfg)

    if acceleration_enabled:
        cmd += ["-hwaccel", cfg.hwaccel]

    cmd += ["-i", str(source)]

    if props.has_video_stream:
        encoder = cfg.hw_video_encoder if acceleration_enabled else cfg.sw_video_encoder
        cmd += ["-c:v", encoder]

        # proxies are always 8-bit; higher depths get flattened
        if props.highest_bit_depth > cfg.baseline_bit_depth:
            cmd += ["-pix_fmt", cfg.baseline_pix_fmt]

        cmd += ["-maxrate", cfg.maxrate, "-preset", cfg.preset]

        width = cfg.vertical_width if props.is_vertical else cfg.horizontal_width
        cmd += ["-vf", f"scale={width}:-2"]

    if props.has_audio_stream and props.unsupported_audio_format:
        cmd += ["-c:a", cfg.pcm_audio_codec]

    cmd.append(str(proxy))
    return TranscodePlan(tuple(cmd))


def build_original_conversion_plan(
    current: Path | str,
    config: Optional[TranscodeConfig] = None,
    originals_subdir: str = ORIGINALS_SUBDIR,
) -> TranscodePlan:
    """
    Regenerate `current` from its relocated copy under Originals/: video is
    copied as-is, audio forced to PCM. Does not look at properties; the caller
    already decided remediation is needed.
    """
    cfg = config or _DEFAULT_CONFIG
    relocated = original_path_for(current, originals_subdir)

    cmd = _preamble(cfg)
    cmd += ["-i", str(relocated), "-c:v", "copy", "-c:a", cfg.pcm_audio_codec, str(current)]
    return TranscodePlan(tuple(cmd))
