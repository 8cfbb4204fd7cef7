from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional, Sequence

from mediaproxy.common.settings import get_settings
from mediaproxy.common.logging import get_logger
from mediaproxy.domain.dataclasses.reports import BatchReport, ProxyResult
from mediaproxy.services.proxy.utils import is_media_file
from mediaproxy.services.proxy.workflow import ProxyWorkflow

logger = get_logger(__name__)


class ProxyBatch:
    """
    Finds candidate media files directly under a directory and runs the
    ProxyWorkflow on each, one after the other. A failing file is recorded
    on the report and the batch moves on.
    """

    def __init__(
        self,
        *,
        workflow_factory: Optional[Callable[[], ProxyWorkflow]] = None,
        media_exts: Optional[Sequence[str]] = None,
    ) -> None:
        self.cfg = get_settings()
        # one workflow per run, so the bit depth cache is shared across files
        self.workflow_factory: Callable[[], ProxyWorkflow] = workflow_factory or ProxyWorkflow
        self.media_exts = list(media_exts) if media_exts is not None else list(self.cfg.media_exts)

    def scan(self, directory: Path | str, report: Optional[BatchReport] = None) -> List[Path]:
        """
        Return media files directly under `directory`, sorted by name.
        (Non-recursive, so Proxy/ and Originals/ are never revisited.)
        """
        root = Path(directory)
        out: List[Path] = []
        for p in sorted(root.iterdir(), key=lambda x: x.name):
            if p.is_dir():
                continue
            if not is_media_file(p, self.media_exts):
                logger.info("Skipping non-media file: %s", p)
                if report is not None:
                    report.not_media += 1
                continue
            out.append(p)
        return out

    def run(self, directory: Path | str) -> BatchReport:
        rpt = BatchReport()
        rpt.start()

        files = self.scan(directory, rpt)
        rpt.planned = len(files)
        if not files:
            rpt.stop()
            return rpt

        workflow = self.workflow_factory()

        for src in files:
            try:
                result = workflow.process(src)
            except Exception as ex:
                # isolate the batch from anything the workflow did not map
                logger.exception("Unexpected error processing file %s", src)
                result = ProxyResult.failed(src, type(ex).__name__, str(ex))

            rpt.record(result)
            if result.changed:
                logger.info("File %s has been processed and saved as %s", src, result.proxy_path)
            else:
                logger.info("File %s has not been changed", src)

        rpt.stop()
        return rpt
