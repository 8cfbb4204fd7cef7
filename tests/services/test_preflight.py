import pytest

import mediaproxy.services.preflight as preflight
from mediaproxy.domain.errors import ToolNotFound


def test_require_tools_resolves_on_path(monkeypatch):
    monkeypatch.setattr(preflight.shutil, "which", lambda name: f"/usr/bin/{name}")
    assert preflight.require_tools("ffmpeg", "ffprobe") == {
        "ffmpeg": "/usr/bin/ffmpeg",
        "ffprobe": "/usr/bin/ffprobe",
    }


def test_require_tools_missing_raises(monkeypatch):
    monkeypatch.setattr(preflight.shutil, "which", lambda name: None if name == "ffprobe" else f"/usr/bin/{name}")
    with pytest.raises(ToolNotFound) as ei:
        preflight.require_tools("ffmpeg", "ffprobe")
    assert "ffprobe" in str(ei.value)


def test_require_tools_accepts_explicit_file(monkeypatch, tmp_path):
    tool = tmp_path / "ffmpeg"
    tool.write_text("#!/bin/sh\n")
    monkeypatch.setattr(preflight.shutil, "which", lambda name: None)
    assert preflight.require_tools(str(tool)) == {str(tool): str(tool)}
