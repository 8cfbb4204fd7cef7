from __future__ import annotations
from pathlib import Path
from typing import Protocol

class FileOpsPort(Protocol):
    def ensure_dir_like_parent(self, path: Path) -> Path: ...

    def move_file(self, src: Path, dst: Path) -> None: ...

    def file_exists(self, path: Path) -> bool: ...
