# tests/conftest.py
from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace
from typing import Dict, List, Optional, Union

import pytest

from mediaproxy.common import settings as settings_mod
from mediaproxy.domain.dataclasses.plan import TranscodePlan
from mediaproxy.domain.entities.probe import MediaSummary, StreamDescriptor
from mediaproxy.domain.errors import BitDepthNotFound, TranscodeExecutionFailed


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch, tmp_path):
    """Every test gets its own settings cache and no stray .env."""
    monkeypatch.chdir(tmp_path)
    settings_mod.get_settings.cache_clear()
    pkg_logger = logging.getLogger("mediaproxy")
    level = pkg_logger.level
    yield
    pkg_logger.setLevel(level)
    settings_mod.get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Test doubles
# ---------------------------------------------------------------------------
class FakeCatalog:
    """PixelFormatCatalogPort double backed by a dict; counts lookups."""

    def __init__(self, depths: Optional[Dict[str, int]] = None):
        self.depths = dict(depths or {"yuv420p": 8, "yuv420p10le": 10, "yuv444p12le": 12})
        self.calls: List[str] = []

    def bit_depth(self, pix_fmt: str) -> int:
        self.calls.append(pix_fmt)
        if pix_fmt not in self.depths:
            raise BitDepthNotFound(f"pixel format {pix_fmt!r} not found")
        return self.depths[pix_fmt]


class FakeProber:
    """MediaProbePort double: returns a canned summary (or raises) per file name."""

    def __init__(self, summaries: Optional[Dict[str, Union[MediaSummary, Exception]]] = None):
        self.summaries = dict(summaries or {})
        self.calls: List[Path] = []

    def probe(self, path: Path) -> MediaSummary:
        self.calls.append(Path(path))
        found = self.summaries.get(Path(path).name)
        if isinstance(found, Exception):
            raise found
        if found is None:
            return MediaSummary(path=Path(path))
        return found


class FakeRunner:
    """
    CommandRunnerPort double. Records plans and writes a small file at the
    plan's output path, the way ffmpeg would. `fail_on` holds 0-based call
    indexes that should fail instead.
    """

    def __init__(self, fail_on: Optional[set] = None):
        self.plans: List[TranscodePlan] = []
        self.fail_on = set(fail_on or ())

    def run(self, plan: TranscodePlan) -> None:
        idx = len(self.plans)
        self.plans.append(plan)
        if idx in self.fail_on:
            raise TranscodeExecutionFailed("ffmpeg returned non-zero exit code 1", path=plan.output_path, returncode=1)
        out = Path(plan.output_path)
        out.write_bytes(f"transcoded #{idx}".encode())


def video(index=0, *, codec="h264", pix_fmt="yuv420p", width=1920, height=1080) -> StreamDescriptor:
    return StreamDescriptor(index=index, kind="video", codec_name=codec, pix_fmt=pix_fmt, width=width, height=height)


def audio(index=1, *, codec="aac") -> StreamDescriptor:
    return StreamDescriptor(index=index, kind="audio", codec_name=codec)


def summary(path: Union[str, Path], *streams: StreamDescriptor) -> MediaSummary:
    return MediaSummary(path=Path(path), duration_sec=10.0, bit_rate=1_000_000, streams=tuple(streams))


@pytest.fixture()
def fake_catalog() -> FakeCatalog:
    return FakeCatalog()


@pytest.fixture()
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def media_factory():
    """Access to stream/summary builders and fakes without importing conftest."""
    return SimpleNamespace(
        video=video,
        audio=audio,
        summary=summary,
        FakeProber=FakeProber,
        FakeRunner=FakeRunner,
        FakeCatalog=FakeCatalog,
    )


def touch(p: Path, data: bytes = b"dummy") -> Path:
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_bytes(data)
    return p


@pytest.fixture()
def touch_file():
    return touch
