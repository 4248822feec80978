"""Tests for the Rich console summary and the HTML dashboard shell."""

import json
from pathlib import Path

from rich.console import Console

from sbomdash.findings.models import Diagnostic, ParsedResult, PipelineReport
from sbomdash.reporting.console import print_report
from sbomdash.reporting.html import embed_json, render_dashboard, write_dashboard
from sbomdash.sample_data import build_sample_result

NOW = "2024-06-01T12:00:00.000Z"


def _capture(report: PipelineReport) -> str:
    console = Console(record=True, width=160)
    print_report(report, console=console)
    return console.export_text()


def test_console_summary_for_sample_data():
    report = PipelineReport(result=build_sample_result(NOW), used_sample_data=True)
    text = _capture(report)
    assert "No SBOM files found" in text
    assert "sample" in text
    assert "CVE-2024-12345" in text
    assert "fix available 33%" in text


def test_console_summary_shows_failed_files():
    report = PipelineReport(
        result=ParsedResult(generated_at=NOW),
        files_found=2,
        files_parsed=1,
        files_failed=1,
        diagnostics=[Diagnostic(path=Path("broken/bad.json"), message="Invalid JSON")],
    )
    text = _capture(report)
    assert "2 files found" in text
    assert "1 failed" in text
    assert "bad.json" in text
    assert "Invalid JSON" in text


def test_embed_json_cannot_close_script_tag():
    result = build_sample_result(NOW)
    result.items[0].title = "</script><script>alert(1)</script> & more"
    payload = embed_json(result)
    assert "</script>" not in payload
    assert "<" not in payload and ">" not in payload and "&" not in payload
    assert json.loads(payload)["items"][0]["title"] == "</script><script>alert(1)</script> & more"


def test_render_dashboard_escapes_title_and_embeds_data():
    page = render_dashboard(build_sample_result(NOW), title="<My> SBOMs", theme="light")
    assert "&lt;My&gt; SBOMs" in page
    assert "<My>" not in page
    assert "window.EMBEDDED_SBOM_DATA = {" in page
    assert 'data-theme="light"' in page
    assert "CVE-2024-12346" in page


def test_unknown_theme_falls_back_to_dark():
    page = render_dashboard(build_sample_result(NOW), title="t", theme="neon")
    assert 'data-theme="dark"' in page


def test_write_dashboard(tmp_path):
    path = write_dashboard(build_sample_result(NOW), tmp_path, title="SBOM Explorer")
    assert path == tmp_path / "index.html"
    assert "SBOM Explorer" in path.read_text()
