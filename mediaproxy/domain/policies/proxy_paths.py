from __future__ import annotations

from pathlib import Path

PROXY_SUBDIR = "Proxy"
ORIGINALS_SUBDIR = "Originals"
PROXY_EXT = ".mov"


def proxy_dir_for(source: Path | str, subdir: str = PROXY_SUBDIR) -> Path:
    return Path(source).parent / subdir


def proxy_path_for(source: Path | str, subdir: str = PROXY_SUBDIR, ext: str = PROXY_EXT) -> Path:
    """
    Domain policy for where a proxy lives: <dir>/Proxy/<stem>.mov,
    whatever the source extension was.
    """
    src = Path(source)
    return proxy_dir_for(src, subdir) / f"{src.stem}{ext}"


def originals_dir_for(source: Path | str, subdir: str = ORIGINALS_SUBDIR) -> Path:
    return Path(source).parent / subdir


def original_path_for(source: Path | str, subdir: str = ORIGINALS_SUBDIR) -> Path:
    """Relocated original keeps its full name: <dir>/Originals/<name><ext>."""
    src = Path(source)
    return originals_dir_for(src, subdir) / src.name
