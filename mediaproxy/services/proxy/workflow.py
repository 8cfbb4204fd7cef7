# mediaproxy/services/proxy/workflow.py
from __future__ import annotations

from pathlib import Path
from typing import Optional

from mediaproxy.common.settings import LayoutConfig, TranscodeConfig, get_settings
from mediaproxy.common.logging import get_logger
from mediaproxy.domain.dataclasses.reports import ProxyResult
from mediaproxy.domain.entities.properties import MediaProperties
from mediaproxy.domain.errors import (
    MediaProxyError,
    OriginalAlreadyExists,
    OriginalRelocationFailed,
    ProxyDirectoryUnavailable,
)
from mediaproxy.domain.policies.media_analyzer import MediaAnalyzer, ensure_usable
from mediaproxy.domain.policies.proxy_paths import (
    original_path_for,
    originals_dir_for,
    proxy_dir_for,
    proxy_path_for,
)
from mediaproxy.domain.policies.transcode_plan import build_original_conversion_plan, build_proxy_plan
from mediaproxy.domain.ports.files import FileOpsPort
from mediaproxy.domain.ports.probe import MediaProbePort
from mediaproxy.domain.ports.runner import CommandRunnerPort
from mediaproxy.services.catalog.bit_depth_resolver import BitDepthResolver
from mediaproxy.services.catalog.ffmpeg_catalog import FFmpegPixelFormatCatalog
from mediaproxy.services.execution.subprocess_runner import SubprocessRunner
from mediaproxy.services.filesystem.local_file_ops import LocalFileOps
from mediaproxy.services.probe.ffprobe_adapter import FFprobeAdapter  # default adapter

logger = get_logger(__name__)


class ProxyWorkflow:
    """
    Per-file proxy pipeline:

      IdempotencyCheck -> Probe -> Validate -> PrepareProxyDir -> ExecuteProxyPlan
        -> RemediateAudio (only for unsupported audio) -> Succeeded

    Any MediaProxyError ends the file as Failed. A proxy that was already
    written stays in place when remediation fails afterwards.
    """

    def __init__(
        self,
        *,
        prober: Optional[MediaProbePort] = None,
        analyzer: Optional[MediaAnalyzer] = None,
        runner: Optional[CommandRunnerPort] = None,
        files: Optional[FileOpsPort] = None,
        acceleration_enabled: Optional[bool] = None,
        transcode: Optional[TranscodeConfig] = None,
        layout: Optional[LayoutConfig] = None,
    ) -> None:
        self.cfg = get_settings()

        self.prober: MediaProbePort = prober or FFprobeAdapter()
        self.analyzer = analyzer or MediaAnalyzer(
            BitDepthResolver(FFmpegPixelFormatCatalog(), self.cfg.default_bit_depth),
            supported_audio_codecs=self.cfg.supported_audio_codecs,
        )
        self.runner: CommandRunnerPort = runner or SubprocessRunner()
        self.files: FileOpsPort = files or LocalFileOps()

        self.acceleration_enabled = (
            self.cfg.hwaccel_enabled if acceleration_enabled is None else acceleration_enabled
        )
        self.transcode = transcode or self.cfg.transcode
        self.layout = layout or self.cfg.layout

    def proxy_path(self, source: Path) -> Path:
        return proxy_path_for(source, self.layout.proxy_subdir, self.layout.proxy_ext)

    def process(self, source: Path | str) -> ProxyResult:
        src = Path(source)
        proxy_path = self.proxy_path(src)
        logger.info("Processing file: %s", src)

        # 1) idempotency
        if self.files.file_exists(proxy_path):
            logger.info("Proxy file already exists: %s", proxy_path)
            return ProxyResult.skipped(src, proxy_path)

        # 2-5) probe, validate, prepare, transcode
        try:
            props = self.analyze(src)
            self.prepare_proxy_dir(src)
            plan = build_proxy_plan(src, proxy_path, props, self.acceleration_enabled, self.transcode)
            self.runner.run(plan)
        except MediaProxyError as e:
            return self._failed(src, e)

        logger.info("Proxy written: %s", proxy_path)

        if not props.unsupported_audio_format:
            return ProxyResult.succeeded(src, proxy_path)

        # 6) remediation; the proxy is kept whatever happens here
        logger.info("Unsupported audio format detected. Converting to PCM for file: %s", src)
        try:
            self.remediate_audio(src)
        except MediaProxyError as e:
            return self._failed(src, e, proxy_path=proxy_path)

        return ProxyResult.succeeded(src, proxy_path, remediated=True)

    # ---- steps ----------------------------------------------------------------
    def analyze(self, src: Path) -> MediaProperties:
        summary = self.prober.probe(src)
        props = self.analyzer.analyze(summary)
        ensure_usable(summary, props)
        logger.debug("Media properties for %s: %s", src, props)
        return props

    def prepare_proxy_dir(self, src: Path) -> Path:
        proxy_dir = proxy_dir_for(src, self.layout.proxy_subdir)
        try:
            return self.files.ensure_dir_like_parent(proxy_dir)
        except OSError as e:
            raise ProxyDirectoryUnavailable(
                "error creating proxy directory", path=proxy_dir, detail=str(e)
            ) from e

    def remediate_audio(self, src: Path) -> Path:
        """
        Move `src` into Originals/ and regenerate `src` from it with PCM audio.
        Refuses to touch `src` when Originals/ already holds a same-named file.
        Returns the relocated original's path.
        """
        subdir = self.layout.originals_subdir
        originals_dir = originals_dir_for(src, subdir)
        relocated = original_path_for(src, subdir)
        logger.info("Moving unsupported audio file to %s: %s", subdir, src)

        try:
            self.files.ensure_dir_like_parent(originals_dir)
        except OSError as e:
            raise OriginalRelocationFailed(
                f"error creating {subdir} directory", path=originals_dir, detail=str(e)
            ) from e

        if self.files.file_exists(relocated):
            raise OriginalAlreadyExists("original file already exists", path=relocated)

        try:
            self.files.move_file(src, relocated)
        except FileExistsError as e:
            raise OriginalAlreadyExists("original file already exists", path=relocated) from e
        except OSError as e:
            raise OriginalRelocationFailed(
                f"error moving file to {subdir}", path=src, detail=str(e)
            ) from e

        self.runner.run(build_original_conversion_plan(src, self.transcode, subdir))
        return relocated

    # ---- helpers --------------------------------------------------------------
    @staticmethod
    def _failed(src: Path, err: MediaProxyError, *, proxy_path: Optional[Path] = None) -> ProxyResult:
        logger.error("Error processing file %s: %s: %s", src, err.code, err)
        return ProxyResult.failed(src, err.code, str(err), proxy_path=proxy_path)
