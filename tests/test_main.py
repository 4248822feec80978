"""Tests for the Typer CLI."""

import json

from typer.testing import CliRunner

from sbomdash.main import app

runner = CliRunner(env={"GITHUB_OUTPUT": None})


def _bom(path, vulnerabilities):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({"bomFormat": "CycloneDX", "vulnerabilities": vulnerabilities}))


def test_generate_from_sboms(tmp_path):
    _bom(tmp_path / "reports" / "sbom-backend.json", [{"id": "CVE-2024-0001", "severity": "high"}])
    result = runner.invoke(app, ["--root", str(tmp_path), "--output-dir", "site", "--quiet"])
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "site" / "parse-sboms.json").read_text())
    assert data["datasets"][0]["id"] == "backend"
    assert data["overall"]["total"] == 1
    assert (tmp_path / "site" / "index.html").exists()
    assert "SBOM UI generated in" in result.output


def test_env_vars_are_honored(tmp_path):
    _bom(tmp_path / "sboms" / "sbom-frontend.json", [{"id": "CVE-2024-0002", "severity": "low"}])
    result = runner.invoke(
        app,
        ["--root", str(tmp_path), "--quiet"],
        env={"INPUT_SBOM_FILES": "sboms/*.json", "INPUT_OUTPUT_DIR": "dash", "INPUT_TITLE": "My SBOMs"},
    )
    assert result.exit_code == 0, result.output
    assert "My SBOMs" in (tmp_path / "dash" / "index.html").read_text()


def test_no_files_uses_sample_data(tmp_path):
    result = runner.invoke(app, ["--root", str(tmp_path), "--output-dir", "out"])
    assert result.exit_code == 0, result.output
    data = json.loads((tmp_path / "out" / "parse-sboms.json").read_text())
    assert [item["id"] for item in data["items"]] == ["CVE-2024-12345", "CVE-2024-12346"]
    assert "No SBOM files found" in result.output


def test_broken_file_does_not_fail_run(tmp_path):
    (tmp_path / "bad.json").write_text("{oops")
    _bom(tmp_path / "good" / "sbom-stable.json", [{"id": "CVE-2024-0003"}])
    result = runner.invoke(app, ["--root", str(tmp_path), "--output-dir", "out"])
    assert result.exit_code == 0, result.output
    assert "1 failed" in result.output


def test_unusable_output_dir_exits_with_error(tmp_path):
    (tmp_path / "blocker").write_text("file")
    result = runner.invoke(app, ["--root", str(tmp_path), "--output-dir", "blocker/out", "--quiet"])
    assert result.exit_code == 1


def test_empty_output_dir_exits_with_error(tmp_path):
    result = runner.invoke(app, ["--root", str(tmp_path), "--output-dir", "", "--quiet"])
    assert result.exit_code == 1


def test_invalid_theme(tmp_path):
    result = runner.invoke(app, ["--root", str(tmp_path), "--theme", "neon"])
    assert result.exit_code != 0


def test_github_action_outputs(tmp_path):
    _bom(tmp_path / "sbom-api.json", [{"id": "CVE-2024-0004"}])
    github_output = tmp_path / "github_output.txt"
    github_output.write_text("earlier=1\n")
    result = runner.invoke(
        app,
        ["--root", str(tmp_path), "--output-dir", "site", "--quiet"],
        env={"GITHUB_OUTPUT": str(github_output)},
    )
    assert result.exit_code == 0, result.output
    lines = github_output.read_text().splitlines()
    assert lines[0] == "earlier=1"
    assert lines[1] == "output-path=site"
    assert lines[2] == "preview-url=" + (tmp_path / "site" / "index.html").resolve().as_uri()


def test_no_github_output_file_without_variable(tmp_path):
    result = runner.invoke(app, ["--root", str(tmp_path), "--output-dir", "site", "--quiet"])
    assert result.exit_code == 0, result.output
    assert sorted(p.name for p in tmp_path.iterdir()) == ["site"]
