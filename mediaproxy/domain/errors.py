# mediaproxy/domain/errors.py
from __future__ import annotations

from pathlib import Path
from typing import Optional


class MediaProxyError(RuntimeError):
    """
    Base for all file-scoped failures. Carries the file path and any tool
    output so the batch can log a useful line and move on.
    """

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path | str] = None,
        detail: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = Path(path) if path is not None else None
        self.detail = detail

    @property
    def code(self) -> str:
        return type(self).__name__

    def __str__(self) -> str:
        out = self.message
        if self.path is not None:
            out = f"{out} [{self.path}]"
        if self.detail:
            out = f"{out}: {self.detail.strip()}"
        return out


class ProbeExecutionFailed(MediaProxyError):
    pass


class ProbeParseFailed(MediaProxyError):
    pass


class NoUsableStreams(MediaProxyError):
    pass


class BitDepthNotFound(MediaProxyError):
    """Non-fatal: callers substitute the default bit depth."""


class ProxyDirectoryUnavailable(MediaProxyError):
    pass


class TranscodeExecutionFailed(MediaProxyError):
    def __init__(self, message: str, *, returncode: Optional[int] = None, **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.returncode = returncode


class OriginalAlreadyExists(MediaProxyError):
    pass


class OriginalRelocationFailed(MediaProxyError):
    pass


class ToolNotFound(MediaProxyError):
    """Batch-fatal: a required binary is not on PATH."""
