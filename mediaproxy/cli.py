"""
Command-line entry point: build proxies for every media file in one or more
directories, regenerating originals whose audio codec editors cannot decode.
"""
from __future__ import annotations

import argparse
from pathlib import Path
from typing import List, Optional

from mediaproxy import __version__
from mediaproxy.common.settings import get_settings
from mediaproxy.common.logging import get_logger
from mediaproxy.domain.dataclasses.reports import BatchReport
from mediaproxy.domain.errors import ToolNotFound
from mediaproxy.services.preflight import require_tools
from mediaproxy.services.proxy.batch import ProxyBatch
from mediaproxy.services.proxy.workflow import ProxyWorkflow

EXIT_OK = 0
EXIT_UNREADABLE_DIR = 1
EXIT_MISSING_TOOL = 2


def build_parser() -> argparse.ArgumentParser:
    cfg = get_settings()
    parser = argparse.ArgumentParser(
        prog="mediaproxy",
        description="Generate downscaled .mov proxies under <dir>/Proxy and convert "
                    "unsupported audio in originals to PCM (untouched copies go to <dir>/Originals).",
    )
    parser.add_argument("directories", nargs="+", type=Path, help="Folder(s) holding the media files")
    parser.add_argument(
        "--hwaccel",
        action=argparse.BooleanOptionalAction,
        default=cfg.hwaccel_enabled,
        help="Use CUDA decoding and the NVENC encoder (default from HWACCEL_ENABLED)",
    )
    parser.add_argument("--log-level", default=cfg.log_level, help="DEBUG, INFO, WARNING, ...")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = get_settings()
    logger = get_logger("mediaproxy", level=args.log_level)

    try:
        require_tools(cfg.transcode.ffmpeg_bin, cfg.ffprobe.bin)
    except ToolNotFound as e:
        logger.error("%s", e)
        return EXIT_MISSING_TOOL

    batch = ProxyBatch(workflow_factory=lambda: ProxyWorkflow(acceleration_enabled=args.hwaccel))
    total = BatchReport()
    exit_code = EXIT_OK
    for directory in args.directories:
        try:
            total.merge(batch.run(directory))
        except OSError as e:
            logger.error("Cannot read directory %s: %s", directory, e)
            exit_code = EXIT_UNREADABLE_DIR

    logger.info(
        "Done: %d succeeded (%d originals converted), %d skipped, %d failed, %d non-media",
        total.succeeded, total.remediated, total.skipped, total.failed, total.not_media,
    )
    for subject, message in total.error_details:
        logger.info("  failed %s: %s", subject, message)
    return exit_code
