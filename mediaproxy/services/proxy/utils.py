from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from mediaproxy.common.settings import get_settings


def is_media_file(p: Path, exts: Optional[Iterable[str]] = None) -> bool:
    """Case-insensitive extension whitelist check (no content sniffing)."""
    allowed = tuple(exts if exts is not None else get_settings().media_exts)
    return p.name.lower().endswith(allowed)
