"""Proxy generation and audio remediation for folders of media files."""

__version__ = "0.1.0"
