from __future__ import annotations

import shutil
import stat
from pathlib import Path

from mediaproxy.domain.ports.files import FileOpsPort


class LocalFileOps(FileOpsPort):
    """
    Local filesystem implementation for FileOpsPort.
    """

    def ensure_dir_like_parent(self, path: Path) -> Path:
        """
        Create `path` if missing, using its parent's permission bits
        (still subject to the process umask). Returns the directory.
        """
        p = Path(path)
        if p.is_dir():
            return p
        mode = stat.S_IMODE(p.parent.stat().st_mode)
        p.mkdir(mode=mode, parents=True, exist_ok=True)
        return p

    def move_file(self, src: Path, dst: Path) -> None:
        """Move `src` to `dst`; never overwrites."""
        src_p = Path(src)
        dst_p = Path(dst)

        if not src_p.is_file():
            raise FileNotFoundError(f"Source file not found: {src_p}")

        if dst_p.exists():
            raise FileExistsError(f"Destination exists: {dst_p}")

        # shutil.move handles cross-device moves (copy+unlink)
        shutil.move(str(src_p), str(dst_p))

    def file_exists(self, path: Path) -> bool:
        return Path(path).exists()
