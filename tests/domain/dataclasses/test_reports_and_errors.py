# tests/domain/dataclasses/test_reports_and_errors.py
from __future__ import annotations

from datetime import datetime, timedelta
from pathlib import Path

import pytest

from mediaproxy.domain.dataclasses.plan import TranscodePlan
from mediaproxy.domain.dataclasses.reports import BatchReport, ProxyResult
from mediaproxy.domain.enums.proxy_outcome import ProxyOutcome
from mediaproxy.domain.errors import (
    MediaProxyError,
    NoUsableStreams,
    OriginalAlreadyExists,
    TranscodeExecutionFailed,
)


def test_error_code_is_class_name_and_str_has_context():
    err = NoUsableStreams("no streams found in media file", path=Path("/m/a.mp4"))
    assert isinstance(err, MediaProxyError)
    assert err.code == "NoUsableStreams"
    assert str(err) == "no streams found in media file [/m/a.mp4]"

    plain = OriginalAlreadyExists("original file already exists")
    assert str(plain) == "original file already exists"


def test_transcode_error_keeps_returncode_and_detail():
    err = TranscodeExecutionFailed("ffmpeg returned non-zero exit code 1", detail="boom", returncode=1)
    assert err.returncode == 1
    assert str(err).endswith(": boom")


def test_record_counts_outcomes():
    src = Path("/m/a.mp4")
    proxy = Path("/m/Proxy/a.mov")
    rpt = BatchReport()
    rpt.record(ProxyResult.skipped(src, proxy))
    rpt.record(ProxyResult.succeeded(src, proxy))
    rpt.record(ProxyResult.succeeded(src, proxy, remediated=True))
    rpt.record(ProxyResult.failed(src, "ProbeParseFailed", "bad json"))

    assert (rpt.skipped, rpt.succeeded, rpt.remediated, rpt.failed) == (1, 2, 1, 1)
    assert rpt.error_details == [("/m/a.mp4", "ProbeParseFailed: bad json")]
    assert [r.changed for r in rpt.results] == [False, True, True, False]


def test_merge_sums_counters_and_widens_timing():
    t0 = datetime(2024, 1, 1, 12, 0, 0)
    a = BatchReport(started_at=t0 + timedelta(seconds=5), finished_at=t0 + timedelta(seconds=10), planned=2, succeeded=1)
    b = BatchReport(started_at=t0, finished_at=t0 + timedelta(seconds=20), planned=3, failed=1, not_media=4)
    b.add_error("/m/x.mp4", "NoUsableStreams: none")

    merged = BatchReport().merge(a).merge(b)

    assert (merged.planned, merged.succeeded, merged.failed, merged.not_media) == (5, 1, 1, 4)
    assert merged.started_at == t0
    assert merged.finished_at == t0 + timedelta(seconds=20)
    assert merged.error_details == [("/m/x.mp4", "NoUsableStreams: none")]


def test_failed_result_may_carry_proxy():
    r = ProxyResult.failed(Path("a.mp4"), "OriginalAlreadyExists", "x", proxy_path=Path("Proxy/a.mov"))
    assert r.outcome == ProxyOutcome.failed
    assert r.proxy_path == Path("Proxy/a.mov")


def test_plan_exposes_program_and_output():
    plan = TranscodePlan(("ffmpeg", "-i", "in file.mp4", "out.mov"))
    assert plan.program == "ffmpeg"
    assert plan.output_path == "out.mov"
    assert plan.as_command() == ["ffmpeg", "-i", "in file.mp4", "out.mov"]
    assert plan.as_command()[1:] == ["-i", "in file.mp4", "out.mov"]
    assert str(plan) == "ffmpeg -i 'in file.mp4' out.mov"


def test_empty_plan_rejected():
    with pytest.raises(ValueError):
        TranscodePlan(())


def test_report_as_dict_is_plain_data():
    rpt = BatchReport(planned=1)
    rpt.record(ProxyResult.failed(Path("/m/a.mp4"), "NoUsableStreams", "none"))
    d = rpt.as_dict()
    assert d["planned"] == 1 and d["failed"] == 1
    assert d["results"][0]["reason"] == "NoUsableStreams"
    assert d["error_details"] == [("/m/a.mp4", "NoUsableStreams: none")]
