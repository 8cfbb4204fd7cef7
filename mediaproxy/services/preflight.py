from __future__ import annotations

import shutil
from pathlib import Path
from typing import Dict

from mediaproxy.domain.errors import ToolNotFound


def require_tools(*binaries: str) -> Dict[str, str]:
    """
    Resolve each binary (bare name on PATH, or an explicit path) and return
    {name: resolved_path}. Raises ToolNotFound for the first one missing.
    """
    resolved: Dict[str, str] = {}
    for name in binaries:
        found = shutil.which(name)
        if not found and Path(name).is_file():
            found = name
        if not found:
            raise ToolNotFound(f"'{name}' not found on PATH; install ffmpeg first")
        resolved[name] = found
    return resolved
