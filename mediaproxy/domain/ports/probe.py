from __future__ import annotations
from pathlib import Path
from typing import Protocol
from mediaproxy.domain.entities.probe import MediaSummary

class MediaProbePort(Protocol):
    def probe(self, path: Path) -> MediaSummary: ...
