# mediaproxy/services/probe/ffprobe_adapter.py
from __future__ import annotations

import json
import shutil
import subprocess
from pathlib import Path
from typing import Any, Optional

from mediaproxy.common.settings import get_settings
from mediaproxy.common.logging import get_logger
from mediaproxy.domain.entities.probe import MediaSummary, StreamDescriptor
from mediaproxy.domain.errors import ProbeExecutionFailed, ProbeParseFailed, ToolNotFound
from mediaproxy.domain.ports.probe import MediaProbePort

logger = get_logger(__name__)


class FFprobeAdapter(MediaProbePort):
    """
    Infrastructure adapter implementing MediaProbePort using `ffprobe`.
    One blocking invocation per probe; nothing is written.
    """

    def __init__(self, ffprobe_bin: Optional[str] = None, timeout_sec: Optional[int] = None):
        cfg = get_settings()
        # choose binary
        candidate = ffprobe_bin or cfg.ffprobe.bin
        if not candidate or candidate == "ffprobe":
            # try to resolve absolute path for nicer errors
            resolved = shutil.which(candidate or "ffprobe")
            if not resolved:
                raise ToolNotFound("ffprobe not found on PATH; set FFPROBE__BIN or install ffmpeg.")
            candidate = resolved

        self.ffprobe_bin = candidate
        self.timeout_sec = timeout_sec if timeout_sec is not None else cfg.ffprobe.timeout_sec
        self.log_level = cfg.ffprobe.log_level

    # ---- Port API -------------------------------------------------------------
    def probe(self, path: Path) -> MediaSummary:
        cmd = [
            self.ffprobe_bin,
            "-hide_banner",
            "-loglevel", self.log_level,
            "-show_error",
            "-show_format",
            "-show_streams",
            "-show_private_data",
            "-print_format", "json",
            str(path),
        ]
        logger.debug("ffprobe cmd: %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=self.timeout_sec,
                check=False,  # we handle rc manually to attach output
            )
        except subprocess.TimeoutExpired as e:
            raise ProbeExecutionFailed(
                f"ffprobe timed out after {self.timeout_sec}s", path=path, detail=str(e)
            ) from e
        except OSError as e:
            raise ProbeExecutionFailed("failed to execute ffprobe", path=path, detail=str(e)) from e

        if proc.returncode != 0:
            raise ProbeExecutionFailed(
                f"ffprobe returned non-zero exit code {proc.returncode}",
                path=path,
                detail=(proc.stderr or "") + (proc.stdout or ""),
            )

        try:
            data = json.loads(proc.stdout or "")
        except json.JSONDecodeError as e:
            raise ProbeParseFailed("ffprobe produced invalid JSON", path=path, detail=str(e)) from e

        return self.parse_ffprobe_json(data, path)

    # ---- Parsing helpers ------------------------------------------------------
    @staticmethod
    def parse_ffprobe_json(data: Any, path: Path | str) -> MediaSummary:
        """
        Map ffprobe JSON onto MediaSummary. Raises ProbeParseFailed when the
        document does not have the {format: {...}, streams: [...]} shape.
        """
        if not isinstance(data, dict):
            raise ProbeParseFailed("ffprobe output is not a JSON object", path=path)

        fmt = data.get("format") or {}
        streams = data.get("streams") or []
        if not isinstance(fmt, dict):
            raise ProbeParseFailed("ffprobe 'format' is not an object", path=path)
        if not isinstance(streams, list):
            raise ProbeParseFailed("ffprobe 'streams' is not a list", path=path)

        descriptors = []
        for pos, s in enumerate(streams):
            if not isinstance(s, dict):
                raise ProbeParseFailed(f"ffprobe stream #{pos} is not an object", path=path)
            index = _parse_int(s.get("index"))
            descriptors.append(
                StreamDescriptor(
                    index=index if index is not None else pos,
                    kind=str(s.get("codec_type") or ""),
                    codec_name=str(s.get("codec_name") or ""),
                    profile=_str_or_none(s.get("profile")),
                    width=_parse_int(s.get("width")) or 0,
                    height=_parse_int(s.get("height")) or 0,
                    pix_fmt=_str_or_none(s.get("pix_fmt")),
                    bit_rate=_parse_int(s.get("bit_rate")),
                )
            )

        return MediaSummary(
            path=Path(fmt.get("filename") or path),
            duration_sec=_parse_float(fmt.get("duration")),
            bit_rate=_parse_int(fmt.get("bit_rate")),
            streams=tuple(descriptors),
        )


# ---- tiny parse helpers -------------------------------------------------------
def _parse_float(x) -> Optional[float]:
    try:
        if x is None:
            return None
        return float(x)
    except (TypeError, ValueError):
        return None

def _parse_int(x) -> Optional[int]:
    try:
        if x is None:
            return None
        return int(float(x))
    except (TypeError, ValueError, OverflowError):
        return None

def _str_or_none(x) -> Optional[str]:
    return str(x) if x is not None else None
