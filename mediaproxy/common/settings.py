# mediaproxy/common/settings.py
from __future__ import annotations

from functools import lru_cache
from typing import Annotated, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from mediaproxy.common.strings.splitters import csv_to_list, normalize_exts


def _to_bool(v: str | bool | int | None, default: bool = False) -> bool:
    if isinstance(v, bool):
        return v
    if v is None:
        return default
    s = str(v).strip().lower()
    return s in {"1", "true", "yes", "y", "on"}


class FFProbeConfig(BaseModel):
    bin: str = "ffprobe"
    # None means block until ffprobe exits
    timeout_sec: Optional[int] = None
    log_level: str = "fatal"  # quiet|panic|fatal|error|warning|info|verbose|debug|trace


class TranscodeConfig(BaseModel):
    """Encoder knobs used when compiling transcode plans."""
    model_config = ConfigDict(frozen=True)

    ffmpeg_bin: str = "ffmpeg"
    log_level: str = "error"
    hwaccel: str = "cuda"
    hw_video_encoder: str = "h264_nvenc"
    sw_video_encoder: str = "libx264"
    baseline_pix_fmt: str = "yuv420p"
    baseline_bit_depth: int = Field(8, ge=1)
    maxrate: str = "6M"
    preset: str = "fast"
    vertical_width: int = Field(540, ge=2)
    horizontal_width: int = Field(960, ge=2)
    pcm_audio_codec: str = "pcm_s16le"


class LayoutConfig(BaseModel):
    proxy_subdir: str = "Proxy"
    originals_subdir: str = "Originals"
    proxy_ext: str = ".mov"

    @field_validator("proxy_ext", mode="before")
    @classmethod
    def _dotted(cls, v):
        s = str(v or "").strip()
        return s if s.startswith(".") else f".{s}"


class Settings(BaseSettings):
    # -------- App / Env --------
    app_name: str = "mediaproxy"
    app_env: str = "development"  # development|test|production
    log_level: str = "INFO"

    # -------- Candidate files --------
    media_exts: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: [".mp4", ".avi", ".mkv", ".mov", ".flv", ".wmv",
                                 ".mp3", ".wav", ".aac", ".ogg", ".flac"]
    )

    # -------- Analysis rules --------
    supported_audio_codecs: Annotated[List[str], NoDecode] = Field(
        default_factory=lambda: ["mp3", "opus", "flac", "ac3"]
    )
    default_bit_depth: int = Field(8, ge=1, description="Used when a pixel format cannot be resolved")

    # -------- Transcoding --------
    hwaccel_enabled: bool = True

    # -------- Sub-configs --------
    ffprobe: FFProbeConfig = FFProbeConfig()
    transcode: TranscodeConfig = TranscodeConfig()
    layout: LayoutConfig = LayoutConfig()

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("hwaccel_enabled", mode="before")
    @classmethod
    def _boolify(cls, v):
        return _to_bool(v, default=True)

    @field_validator("media_exts", mode="before")
    @classmethod
    def _split_exts(cls, v):
        return normalize_exts(v)

    @field_validator("supported_audio_codecs", mode="before")
    @classmethod
    def _split_codecs(cls, v):
        return [c.lower() for c in csv_to_list(v)]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Global settings accessor (cached). Use this everywhere you need config:
        from mediaproxy.common.settings import get_settings
        cfg = get_settings()
    """
    return Settings()  # pydantic_settings will read from .env automatically
