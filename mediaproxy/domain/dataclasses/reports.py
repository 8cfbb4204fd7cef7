# mediaproxy/domain/dataclasses/reports.py
from __future__ import annotations

from dataclasses import dataclass, field, asdict
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from mediaproxy.domain.enums.proxy_outcome import ProxyOutcome


# ---------------------------------------------------------------------------
# Base report (shared fields + utilities)
# ---------------------------------------------------------------------------
@dataclass
class BaseReport:
    """Common report base:
    - timing: started_at / finished_at
    - error capture: error_details
    - helpers: start(), stop(), add_error(), as_dict()
    """
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    # Each tuple is (subject/path, message)
    error_details: List[Tuple[str, str]] = field(default_factory=list)

    def start(self) -> None:
        if self.started_at is None:
            self.started_at = datetime.now()

    def stop(self) -> None:
        self.finished_at = datetime.now()

    def add_error(self, subject: str, message: str) -> None:
        self.error_details.append((subject, message))

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Per-file result
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class ProxyResult:
    source: Path
    outcome: ProxyOutcome
    proxy_path: Optional[Path] = None
    reason: Optional[str] = None       # error code, e.g. "NoUsableStreams"
    message: Optional[str] = None
    remediated: bool = False           # original regenerated with PCM audio

    @classmethod
    def skipped(cls, source: Path, proxy_path: Path) -> "ProxyResult":
        return cls(source=source, outcome=ProxyOutcome.skipped, proxy_path=proxy_path)

    @classmethod
    def succeeded(cls, source: Path, proxy_path: Path, *, remediated: bool = False) -> "ProxyResult":
        return cls(source=source, outcome=ProxyOutcome.succeeded, proxy_path=proxy_path, remediated=remediated)

    @classmethod
    def failed(cls, source: Path, reason: str, message: str, *, proxy_path: Optional[Path] = None) -> "ProxyResult":
        return cls(source=source, outcome=ProxyOutcome.failed, proxy_path=proxy_path, reason=reason, message=message)

    @property
    def changed(self) -> bool:
        return self.outcome == ProxyOutcome.succeeded


# ---------------------------------------------------------------------------
# Batch report
# ---------------------------------------------------------------------------
@dataclass
class BatchReport(BaseReport):
    planned: int = 0          # candidate media files handed to the workflow
    skipped: int = 0          # proxy already present
    succeeded: int = 0
    failed: int = 0
    remediated: int = 0       # originals regenerated with PCM audio
    not_media: int = 0        # files filtered out by extension

    results: List[ProxyResult] = field(default_factory=list)

    def record(self, result: ProxyResult) -> None:
        self.results.append(result)
        if result.outcome == ProxyOutcome.skipped:
            self.skipped += 1
        elif result.outcome == ProxyOutcome.succeeded:
            self.succeeded += 1
            if result.remediated:
                self.remediated += 1
        else:
            self.failed += 1
            self.add_error(str(result.source), f"{result.reason}: {result.message}")

    def merge(self, other: "BatchReport") -> "BatchReport":
        self.planned += other.planned
        self.skipped += other.skipped
        self.succeeded += other.succeeded
        self.failed += other.failed
        self.remediated += other.remediated
        self.not_media += other.not_media
        self.results.extend(other.results)
        self.error_details.extend(other.error_details)
        # prefer earliest start and latest finish
        if self.started_at is None or (other.started_at and other.started_at < self.started_at):
            self.started_at = other.started_at
        if other.finished_at and (self.finished_at is None or other.finished_at > self.finished_at):
            self.finished_at = other.finished_at
        return self
